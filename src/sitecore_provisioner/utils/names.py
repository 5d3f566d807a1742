"""Name transforms for Sitecore item and folder names.

Sitecore validates item names against ``ItemNameValidation``::

    ^[\\w\\*\\$][\\w\\s\\-\\$]*(\\(\\d{1,}\\)){0,1}$

:func:`sanitize_item_name` rewrites arbitrary text (typically sample data) so
that it passes this check.
"""

import re

MAX_ITEM_NAME_LENGTH = 100

_SEPARATORS = re.compile(r"[_-]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s\-\$\*\(\)]")
_TEXT_GROUP = re.compile(r"\((?!\d+\))[^()]*\)")
_TRAILING_NUMBER = re.compile(r"\((\d+)\)\s*$")
_PAREN_GROUP = re.compile(r"\([^)]*\)")
_VALID_FIRST_CHAR = re.compile(r"[A-Za-z0-9_\*\$]")


def title_case_with_spacing(value: str) -> str:
    """Turn a compact component name into a readable folder name.

    Examples:
        >>> title_case_with_spacing("heroSection")
        'Hero Section'
        >>> title_case_with_spacing("footer_link-list")
        'Footer Link List'
    """
    if not value:
        return value

    s = _SEPARATORS.sub(" ", value)
    s = _CAMEL_BOUNDARY.sub(r"\1 \2", s)
    s = _WHITESPACE.sub(" ", s).strip()
    return " ".join(word[:1].upper() + word[1:] for word in s.split(" "))


def sanitize_item_name(raw: str) -> str:
    """Rewrite ``raw`` into a name accepted by Sitecore item name validation.

    Non-numeric parenthetical groups are dropped first, then only the last
    numeric group such as ``(2)`` survives, re-attached as the suffix.
    Other groups and stray parentheses are removed. Names whose input or
    cleaned form starts with a character outside ``[A-Za-z0-9_*$]`` are
    prefixed with ``"Item "``, so ``"!Name"`` becomes ``"Item Name"``.
    """
    if not raw:
        return "Item"

    raw = raw.strip()
    s = _DISALLOWED.sub("", raw)
    s = _TEXT_GROUP.sub("", s)
    s = _WHITESPACE.sub(" ", s).strip()

    trailing = _TRAILING_NUMBER.search(s)
    s = _PAREN_GROUP.sub("", s)
    s = s.replace("(", "").replace(")", "")
    s = _WHITESPACE.sub(" ", s).strip()

    # "*" is only valid as the first character
    s = s[:1] + s[1:].replace("*", "")

    if s and not (_VALID_FIRST_CHAR.match(raw[0]) and _VALID_FIRST_CHAR.match(s[0])):
        s = f"Item {s}"
    if not s:
        s = "Item"

    suffix = f"({trailing.group(1)})" if trailing else ""
    s = s[: MAX_ITEM_NAME_LENGTH - len(suffix)].rstrip()
    return f"{s}{suffix}"
