from __future__ import annotations


# Labels that leak into values when a manifest line is malformed.
_KEY_LABELS = ("MIDlet-Name:", "MIDlet-Description:")
_EDGE_CHARACTERS = " \r\n\\:"
_UNSAFE_CHARACTERS = str.maketrans("", "", ":?*")


def normalize_name(value: str | None) -> str:
    """Clean a raw manifest value into a filesystem-safe, readable string."""
    cleaned = str(value or "")
    for label in _KEY_LABELS:
        cleaned = cleaned.replace(label, "")
    cleaned = cleaned.strip(_EDGE_CHARACTERS)
    return cleaned.translate(_UNSAFE_CHARACTERS)
