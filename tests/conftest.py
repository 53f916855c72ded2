"""
Pytest configuration shared by all tests.

Keeps log files and user configuration out of the developer's home directory.
"""

import os
import tempfile

os.environ.setdefault("MATILDA_QUILL_LOG_DIR", tempfile.mkdtemp(prefix="matilda-quill-logs-"))
os.environ["MATILDA_QUILL_CONFIG"] = os.path.join(tempfile.gettempdir(), "matilda-quill-tests-missing.toml")
