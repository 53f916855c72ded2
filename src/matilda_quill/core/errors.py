"""Exception hierarchy for Matilda Quill."""


class QuillError(Exception):
    """Base class for all Quill errors."""


class MarkerError(QuillError, ValueError):
    """A category name cannot be encoded as a tag marker."""


class ConfigurationError(QuillError):
    """Settings failed validation and strict loading was requested."""
