"""Text helpers."""

from typing import Optional

ELLIPSIS = "…"


def truncate(text: Optional[str], length: int = 20, omission: str = ELLIPSIS) -> str:
    """Cut ``text`` so the result, omission included, fits in ``length`` characters.

    Args:
        text: Text to shorten; None is treated as empty
        length: Maximum length of the result
        omission: Marker appended when the text is cut

    Returns:
        The text unchanged if it already fits, otherwise its first
        ``length - len(omission)`` characters followed by ``omission``

    Examples:
        >>> truncate("This is a very long comment body")
        'This is a very long…'
    """
    if text is None:
        return ""
    if len(text) <= length:
        return text
    if length <= len(omission):
        return omission[:length]
    return text[: length - len(omission)] + omission
