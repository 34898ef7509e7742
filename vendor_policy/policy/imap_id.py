"""Format checks for IMAP ID values produced by vendor policies.

A vendor policy answers the ``getImapId`` operation with the field list the
host sends in its IMAP ``ID`` command (RFC 2971), already quoted, e.g.::

    "name" "ExampleMail" "version" "1.0"

The loader forwards that string untouched. :func:`parse_imap_id_values` lets
callers and tests check that a policy's answer is well formed.
"""

from __future__ import annotations

from typing import Dict, List

from .errors import ImapIdFormatError

_QUOTE = '"'


def _split_segments(value: str) -> List[str]:
    segments = value.split(_QUOTE)
    while segments and segments[-1] == "":
        segments.pop()
    return segments


def parse_imap_id_values(value: str) -> Dict[str, str]:
    """
    Parse a quoted IMAP ID field list into a dictionary.

    Splitting on quote characters yields groups of four segments: a separator
    (empty or only spaces), the key, a separator of one or more
    spaces and the value. Neither key nor value may start with a space.

    Args:
        value: The string returned by :meth:`VendorPolicyLoader.get_imap_id_values`.

    Returns:
        Mapping of ID field names to values, in order of appearance.

    Raises:
        ImapIdFormatError: If the string does not follow the quoted pair format.
    """
    if len(value) < 2 or not value.startswith(_QUOTE) or not value.endswith(_QUOTE):
        raise ImapIdFormatError("IMAP ID value must start and end with a quote")

    segments = _split_segments(value)
    if len(segments) % 4 != 0:
        raise ImapIdFormatError(f"IMAP ID value has an unbalanced field list ({len(segments)} segments)")

    fields: Dict[str, str] = {}
    for i in range(0, len(segments), 4):
        lead, key, gap, field_value = segments[i : i + 4]
        if lead.strip(" "):
            raise ImapIdFormatError(f"unexpected text before key at field {i // 4}")
        if not key or key.startswith(" "):
            raise ImapIdFormatError(f"malformed key at field {i // 4}")
        if not gap or gap.strip(" "):
            raise ImapIdFormatError(f"key and value must be separated by spaces at field {i // 4}")
        if not field_value or field_value.startswith(" "):
            raise ImapIdFormatError(f"malformed value for key {key!r}")
        fields[key] = field_value
    return fields


def is_valid_imap_id_values(value: str) -> bool:
    """Return ``True`` when :func:`parse_imap_id_values` accepts ``value``."""
    try:
        parse_imap_id_values(value)
    except ImapIdFormatError:
        return False
    return True
