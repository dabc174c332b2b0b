"""
Shared fixtures: synthesised .mo catalogs.

build_mo() lays out a little-endian catalog the way msgfmt does: header,
original descriptor table, translation descriptor table, then the
NUL-terminated strings. The hash table is declared empty.
"""

import struct

import pytest

MAGIC = 0x950412DE

NL_METADATA = (
    "Project-Id-Version: moreader-test 1.0\n"
    "Language: nl\n"
    "Content-Type: text/plain; charset=UTF-8\n"
)

NL_ENTRIES = [
    ("", NL_METADATA),
    ("String English One", "Text Nederlands Een"),
    ("String English Two", "Text Nederlands Twee"),
    ("String English Three", "Text Nederlands Drie"),
    ("TEST|String|1\x04String English", "Text Nederlands Een"),
    ("TEST|String|2\x04String English", "Text Nederlands Twee"),
    ("TEST|String|3\x04String English", "Text Nederlands Drie"),
]


def build_mo(entries, magic=MAGIC, version=0, encoding="utf-8"):
    """Return the bytes of a catalog holding `entries` [(original, translation), ...]."""
    count = len(entries)
    original_table = 28
    translation_table = original_table + 8 * count
    strings_start = translation_table + 8 * count

    originals = [o.encode(encoding) for o, _ in entries]
    translations = [t.encode(encoding) for _, t in entries]

    blob = b""
    original_descriptors = []
    for data in originals:
        original_descriptors.append((len(data), strings_start + len(blob)))
        blob += data + b"\0"
    translation_descriptors = []
    for data in translations:
        translation_descriptors.append((len(data), strings_start + len(blob)))
        blob += data + b"\0"

    out = struct.pack("<I", magic)
    out += struct.pack("<6i", version, count, original_table, translation_table, 0, strings_start)
    for length, offset in original_descriptors:
        out += struct.pack("<ii", length, offset)
    for length, offset in translation_descriptors:
        out += struct.pack("<ii", length, offset)
    return out + blob


@pytest.fixture
def make_mo():
    """Factory fixture for building catalog bytes."""
    return build_mo


@pytest.fixture
def nl_bytes():
    return build_mo(NL_ENTRIES)


@pytest.fixture
def nl_mo(tmp_path, nl_bytes):
    """Path to the Dutch test catalog with 7 entries (3 flat, 3 contextual, header)."""
    path = tmp_path / "nl.mo"
    path.write_bytes(nl_bytes)
    return path
