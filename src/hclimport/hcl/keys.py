"""Attribute key normalization: mixedCase / CamelCase -> snake_case."""

import re

# An upper-case letter starting a capitalized word ("Name" in "userName"),
# unless an underscore already separates it.
_FIRST_CAP = re.compile(r"([^_])([A-Z][a-z]+)")
# A lower-case letter or digit directly followed by an upper-case letter ("dI" in "userID").
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")


def normalize_key(name: str) -> str:
    """
    Convert a field name to the snake_case convention used in HCL.
    
    Already-normalized and non-alphabetic names pass through unchanged.
    
    Examples:
        "userId" -> "user_id"
        "user_Id" -> "user_id"
        "HTTPServer" -> "http_server"
        "Enabled" -> "enabled"
    """
    snake = _FIRST_CAP.sub(r"\1_\2", name)
    snake = _ALL_CAP.sub(r"\1_\2", snake)
    return snake.lower()
