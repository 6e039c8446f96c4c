"""
Utility functions for the partial struct generator.
"""

import keyword
import re

# Acronym-aware word splitting: "HTTPServer" -> ["HTTP", "Server"].
# Digits stay with the word before them: "Point3D" -> ["Point3", "D"]
_WORD_PATTERN = re.compile(r"[A-Z][A-Z0-9]*(?=[A-Z][a-z])|[A-Z]?[a-z][a-z0-9]*|[A-Z][A-Z0-9]*|[0-9][a-z0-9]*")

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")

# Names the generated methods use for their own parameters
RESERVED_FIELD_NAMES = {"self", "cls"}


def _normalize_separators(text: str) -> str:
    """Normalize separators (anything not alphanumeric) to spaces."""
    return re.sub(r"[^A-Za-z0-9]+", " ", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase and acronym boundaries."""
    return _WORD_PATTERN.findall(text)


def to_snake_case(text: str) -> str:
    """Convert PascalCase, camelCase or separated text to snake_case.

    Examples:
        "UserAccount" -> "user_account"
        "Car" -> "car"
        "HTTPServer" -> "http_server"
        "MultiOmit" -> "multi_omit"
        "user-info" -> "user_info"
        "Point3D" -> "point3_d"
        "abc123Def456" -> "abc123_def456"

    Args:
        text: The text to convert

    Returns:
        snake_case string
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return "_".join(word.lower() for word in words if word)


def is_identifier(text: str) -> bool:
    """Check that text is a plain ASCII identifier."""
    return bool(_IDENTIFIER_PATTERN.match(text))


def is_type_name(text: str) -> bool:
    """Check that text can name a generated class (an identifier that is not a keyword)."""
    return is_identifier(text) and not keyword.iskeyword(text)


def is_field_name(text: str) -> bool:
    """Check that text can be used as a dataclass field and method parameter."""
    return is_type_name(text) and text not in RESERVED_FIELD_NAMES
