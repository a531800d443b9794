from __future__ import annotations

import re


# Code point ranges of the Unicode Han script.
_HAN_RANGES = (
    "\u2e80-\u2e99",
    "\u2e9b-\u2ef3",
    "\u2f00-\u2fd5",
    "\u3005",
    "\u3007",
    "\u3021-\u3029",
    "\u3038-\u303b",
    "\u3400-\u4dbf",
    "\u4e00-\u9fff",
    "\uf900-\ufa6d",
    "\ufa70-\ufad9",
    "\U00016fe2-\U00016fe3",
    "\U00016ff0-\U00016ff1",
    "\U00020000-\U0002a6df",
    "\U0002a700-\U0002ebe0",
    "\U0002f800-\U0002fa1d",
    "\U00030000-\U000323af",
)

# 。；，：“”（）、？《》
_FULL_WIDTH_PUNCTUATION = (
    "\u3002\uff1b\uff0c\uff1a\u201c\u201d\uff08\uff09\u3001\uff1f\u300a\u300b"
)

_TARGET_SCRIPT_PATTERN = re.compile(
    "[" + "".join(_HAN_RANGES) + _FULL_WIDTH_PUNCTUATION + "]"
)


def contains_target_script(value: str | None) -> bool:
    """Return True when the text holds a Han ideograph or Chinese full-width punctuation."""
    return _TARGET_SCRIPT_PATTERN.search(str(value or "")) is not None
