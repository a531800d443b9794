from __future__ import annotations

import codecs

from charset_normalizer import detect


DETECTION_CONFIDENCE_THRESHOLD = 0.6

# Mainland Chinese suites are GBK; short GBK text is often detected as CP932,
# so gb18030 is tried before the detector.
_PREFERRED_ENCODING = "gb18030"

# Encodings seen in legacy Chinese and Japanese MIDlet suites.
_FALLBACK_ENCODINGS = ("big5", "shift_jis")


def decode_manifest(raw: bytes) -> str:
    """
    Decode manifest bytes into text.

    UTF-8 is tried first, then strict gb18030. When both fail the encoding
    reported by charset_normalizer is used if it is confident enough, then a
    fixed list of East Asian encodings, and finally UTF-8 with replacement
    characters.

    :param raw: Raw bytes of the manifest entry
    :return: Decoded manifest text
    """
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8):]

    for encoding in ("utf-8", _PREFERRED_ENCODING):
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue

    candidates: list[str] = []
    detection = detect(raw)
    detected_encoding = detection.get("encoding") if detection else None
    confidence = float((detection or {}).get("confidence") or 0.0)
    if detected_encoding and confidence >= DETECTION_CONFIDENCE_THRESHOLD:
        candidates.append(detected_encoding)
    candidates.extend(_FALLBACK_ENCODINGS)

    for encoding in candidates:
        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    return raw.decode("utf-8", errors="replace")
