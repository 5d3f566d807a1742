"""Sitecore item identifier formatting."""

import re

from sitecore_provisioner.models.definition import InvalidInput

_NON_HEX = re.compile(r"[^a-fA-F0-9]")
_GUID_PATTERN = re.compile(
    r"^\{[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}\}$"
)


class InvalidIdentifierFormat(InvalidInput):
    """Raised when a value does not reduce to a 32-digit hexadecimal identifier."""

    pass


def format_guid(value: str) -> str:
    """Format a loosely written identifier as a braced, upper-case Sitecore GUID.

    Every non-hex character is dropped before grouping, so ``"a1b2...-..."``,
    ``"{A1B2...}"`` and the bare 32-digit form all produce the same result.

    Args:
        value: Identifier as returned by the Authoring API or typed by a user

    Returns:
        Identifier in ``{8-4-4-4-12}`` form

    Raises:
        InvalidIdentifierFormat: If the value does not contain exactly 32 hex digits
    """
    clean = _NON_HEX.sub("", value or "").upper()

    if len(clean) != 32:
        raise InvalidIdentifierFormat(
            f"Invalid GUID format: expected 32 hex characters, got {len(clean)}"
        )

    groups = [clean[0:8], clean[8:12], clean[12:16], clean[16:20], clean[20:32]]
    return "{" + "-".join(groups) + "}"


def is_guid(value: str) -> bool:
    """Return True if ``value`` can be formatted as a GUID."""
    try:
        format_guid(value)
    except InvalidIdentifierFormat:
        return False
    return True


def is_canonical_guid(value: str) -> bool:
    """Return True if ``value`` is already in braced, upper-case GUID form."""
    return bool(_GUID_PATTERN.match(value))
