import re
from typing import Optional

# Characters that make up an ordering prefix such as "25 = ", "10 - " or
# stray ASCII clutter in front of the real title.
PREFIX_CHARS = r"-= 0-9a-zA-Z"

# Traditional form-count suffixes: "34式", "24路", "8套".
ORDINAL_MARKERS = "式路套"

SEPARATOR = " - "

_PREFIX = rf"^[{PREFIX_CHARS}]*"
_FORM_COUNT_RE = re.compile(_PREFIX + rf"\b([0-9]+[{ORDINAL_MARKERS}].+)")
_MAIN_RE = re.compile(_PREFIX + rf"([^{PREFIX_CHARS}].*)")
_ORDINAL_RE = re.compile(r"^[-= 0-9]*([a-zA-Z].*)")


def strip_title(label: str) -> Optional[str]:
    """
    Removes any ordering prefix from a track label and returns the bare title.

    Returns None when nothing is left to use as a title; such labels are
    never renamed.

    >>> strip_title("25 = 34式太极")
    '34式太极'
    >>> strip_title("10 - 太极")
    '太极'
    >>> strip_title("01 - abc")
    'abc'
    """
    m = _FORM_COUNT_RE.match(label)
    if m:
        return m.group(1)

    m = _MAIN_RE.match(label)
    if m:
        return m.group(1)

    # Plain ASCII label: only the numeric ordering prefix is clutter,
    # the rest is the title itself.
    m = _ORDINAL_RE.match(label)
    if m:
        return m.group(1)

    return None


def format_name(ordinal: int, title: str) -> str:
    return f"{ordinal:02d}{SEPARATOR}{title}"


def canonicalize(label: str, ordinal: int) -> str:
    """
    Canonical name for a label at a 1-based position, e.g.
    canonicalize("abc", 1) == "01 - abc".

    Labels without a usable title come back unchanged.
    """
    title = strip_title(label)
    if title is None:
        return label
    return format_name(ordinal, title)
