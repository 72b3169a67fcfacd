import math
import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_WHITESPACE = re.compile(r"\s+")


def parse_int(value: Any) -> int | None:
    """Parse the leading integer of ``value`` the way a browser ``parseInt`` does.

    ``"12"`` and ``"12 reps"`` give 12, ``"3.9"`` gives 3, ``"abc"`` and ``None`` give ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return None


def title_case(text: str | None) -> str:
    words = str(text or "").lower().split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def capitalize_words(text: str | None) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in str(text or "").split())


def encode_spaces(text: str) -> str:
    return _WHITESPACE.sub("%20", text)


__all__ = ["capitalize_words", "encode_spaces", "parse_int", "title_case"]
