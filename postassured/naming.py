"""
Identifier and string-literal helpers for generated Java code.
"""

import re


METHOD_PREFIX = "test"

_ILLEGAL_CHARS = re.compile(r"[^a-zA-Z0-9_\s]")
_WHITESPACE = re.compile(r"\s+")

_JAVA_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _words(name: str) -> list[str]:
    return _WHITESPACE.split(_ILLEGAL_CHARS.sub("", name))


def _capitalize(word: str) -> str:
    # Only the first letter changes; "API" stays "API"
    return word[:1].upper() + word[1:]


def sanitize_class_name(name: str) -> str:
    """Turn a free-text title into a PascalCase type name.

    >>> sanitize_class_name("My API")
    'MyAPI'
    """
    return "".join(_capitalize(w) for w in _words(name))


def sanitize_method_name(name: str) -> str:
    """Turn a free-text title into a `testXxx` method name.

    Fully symbolic titles degrade to the bare prefix.

    >>> sanitize_method_name("Get User")
    'testGetUser'
    """
    words = _words(name)
    base = "".join(
        w[:1].lower() + w[1:] if i == 0 else _capitalize(w)
        for i, w in enumerate(words)
    )
    return METHOD_PREFIX + _capitalize(base)


def escape_java_string(value: str) -> str:
    """Escape a value for use inside a Java double-quoted string literal."""
    return "".join(_JAVA_ESCAPES.get(ch, ch) for ch in value)
