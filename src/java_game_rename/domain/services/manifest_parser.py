from __future__ import annotations

from java_game_rename.domain.models.manifest_record import ManifestRecord
from java_game_rename.domain.services.name_normalizer import normalize_name
from java_game_rename.domain.services.script_detector import contains_target_script


MANIFEST_ENTRY = "META-INF/MANIFEST.MF"

NAME_KEY = "MIDlet-Name"
DESCRIPTION_KEY = "MIDlet-Description"
FIRST_MIDLET_KEY = "MIDlet-1"

_LINE_EDGE = " \r\n"


def parse_manifest(text: str) -> dict[str, str]:
    """Parse ``key: value`` manifest lines; later duplicates win."""
    fields: dict[str, str] = {}
    for line in text.split("\n"):
        if not line.strip(_LINE_EDGE):
            continue
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields[key.strip(_LINE_EDGE)] = value.strip(_LINE_EDGE)
    return fields


def derive_name(fields: dict[str, str]) -> str:
    name = normalize_name(fields.get(NAME_KEY, ""))
    if contains_target_script(name):
        return name

    # MIDlet-1 is "<display name>, <icon>, <class>"; its display name is
    # sometimes localized while MIDlet-Name is not.
    first_midlet = normalize_name(fields.get(FIRST_MIDLET_KEY, ""))
    display_name = normalize_name(first_midlet.split(",")[0])
    if contains_target_script(display_name):
        return display_name
    return name


def build_record(fields: dict[str, str]) -> ManifestRecord:
    return ManifestRecord(
        name=derive_name(fields),
        description=normalize_name(fields.get(DESCRIPTION_KEY, "")),
    )
