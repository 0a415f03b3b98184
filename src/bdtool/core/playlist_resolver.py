"""Parse user-supplied playlist identifiers.

Only plain ASCII decimal digits are accepted: no whitespace, sign,
radix prefix or digit grouping.  ``str.isdigit`` is deliberately not
used because it accepts non-ASCII digits.
"""

from __future__ import annotations

from bdtool.core.models import MAX_PLAYLIST_ID, PlaylistIdentifier
from bdtool.exceptions import InvalidPlaylistIdentifierError


def resolve_playlist(text: str) -> PlaylistIdentifier:
    """Convert *text* (e.g. ``"00800"``) to a :class:`PlaylistIdentifier`.

    Raises
    ------
    InvalidPlaylistIdentifierError
        At the first non-digit character, for empty input, or when the
        value leaves the 32-bit unsigned range.
    """
    if not text:
        raise InvalidPlaylistIdentifierError(text, 0, None)

    value = 0
    for position, char in enumerate(text):
        if not "0" <= char <= "9":
            raise InvalidPlaylistIdentifierError(text, position, char)
        value = value * 10 + (ord(char) - ord("0"))
        if value > MAX_PLAYLIST_ID:
            raise InvalidPlaylistIdentifierError(
                text,
                position,
                char,
                reason=(
                    f"value exceeds {MAX_PLAYLIST_ID} at position {position}"
                ),
            )

    return PlaylistIdentifier(value)
