#!/usr/bin/env python3
"""User rule patterns and replacement templates.

Rules are authored in the host's JavaScript regex dialect. This module
translates them for Python's ``re``:

- ``(?<name>...)`` named groups and ``\\k<name>`` back references in patterns
- ``$1``, ``$&``, ``$<name>`` and ``$$`` in replacement templates

Backslashes in replacements are always literal.
"""

import re
from re import Pattern


# ==============================================================================
# PATTERN TRANSLATION
# ==============================================================================

# "(?<" not followed by "=" or "!" (lookbehind) opens a named group in JS.
JS_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?![=!])")
JS_NAMED_BACKREF = re.compile(r"\\k<([A-Za-z_]\w*)>")


def translate_pattern(pattern: str) -> str:
    """Rewrite JS-only group syntax into Python syntax."""
    pattern = JS_NAMED_GROUP.sub("(?P<", pattern)
    return JS_NAMED_BACKREF.sub(r"(?P=\1)", pattern)


def compile_rule_pattern(pattern: str, *, is_regex: bool = True, case_sensitive: bool = True) -> Pattern:
    """Compile a rule's find pattern.

    Literal (non-regex) patterns are escaped so they only match themselves.

    Raises:
        re.error: If a regex pattern does not compile, including patterns
            the parser rejects with OverflowError or RecursionError.

    """
    flags = 0 if case_sensitive else re.IGNORECASE
    if not is_regex:
        return re.compile(re.escape(pattern), flags)
    try:
        return re.compile(translate_pattern(pattern), flags)
    except (OverflowError, RecursionError) as e:
        raise re.error(str(e), pattern) from e


# ==============================================================================
# REPLACEMENT TEMPLATES
# ==============================================================================

JS_REPLACEMENT_TOKEN = re.compile(r"\$(\$|&|\d{1,2}|<[^>]*>)")


def _group_reference(token: str, compiled: Pattern) -> str | None:
    """Python template for a ``$n`` token, or None when the group is absent."""
    if token.startswith("<"):
        name = token[1:-1]
        if name in compiled.groupindex:
            return rf"\g<{name}>"
        return None

    number = int(token)
    if 0 < number <= compiled.groups:
        return rf"\g<{number}>"
    # "$12" with fewer than 12 groups reads as "$1" followed by "2".
    if len(token) == 2:
        first = int(token[0])
        if 0 < first <= compiled.groups:
            return rf"\g<{first}>" + token[1]
    return None


def translate_replacement(template: str, compiled: Pattern) -> str:
    """Convert a JS replacement string into a Python ``re.sub`` template.

    References to groups ``compiled`` does not define stay literal text.
    """
    parts: list[str] = []
    position = 0
    for match in JS_REPLACEMENT_TOKEN.finditer(template):
        parts.append(template[position : match.start()].replace("\\", "\\\\"))
        token = match.group(1)
        if token == "$":
            parts.append("$")
        elif token == "&":
            parts.append(r"\g<0>")
        else:
            reference = _group_reference(token, compiled)
            parts.append(reference if reference is not None else match.group(0).replace("\\", "\\\\"))
        position = match.end()
    parts.append(template[position:].replace("\\", "\\\\"))
    return "".join(parts)


def literal_replacement(replacement: str):
    """Callable replacement that inserts ``replacement`` verbatim."""
    return lambda _match: replacement


__all__ = [
    "translate_pattern",
    "compile_rule_pattern",
    "translate_replacement",
    "literal_replacement",
]
