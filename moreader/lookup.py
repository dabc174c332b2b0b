#!/usr/bin/env python3
"""
In-memory lookup table built from a parsed catalog.

Original strings without a context separator go into the flat map.
Strings of the form "<context>\\x04<key>" go into a two-level map keyed
by context, then key.
"""

from typing import BinaryIO, Iterable, Optional

from .mo_format import (
    CONTEXT_SEPARATOR,
    MalformedStream,
    SplitError,
    TranslationPairDescriptor,
    parse,
    read_slice,
)


class LookupTable:
    """
    Flat and contextual translation maps plus a running entry counter.

    The counter counts every resolved string, so duplicate originals that
    overwrite each other are still counted once per occurrence.
    """

    def __init__(self):
        self.flat: dict[str, str] = {}
        self.contextual: dict[str, dict[str, str]] = {}
        self.entry_count = 0

    def __len__(self) -> int:
        return self.entry_count

    def add(self, original: str, translation: str) -> None:
        """Insert one resolved entry, routing by context separator."""
        if CONTEXT_SEPARATOR in original:
            context, key = split_context(original)
            self.contextual.setdefault(context, {})[key] = translation
        else:
            self.flat[original] = translation
        self.entry_count += 1

    def lookup(self, id: str) -> str:
        if not self.flat:
            return id
        return self.flat.get(id, id)

    def lookup_with_context(self, context: str, id: str) -> str:
        if not self.contextual:
            return id
        inner = self.contextual.get(context)
        if inner is None:
            return id
        return inner.get(id, id)

    def clear(self) -> None:
        self.flat.clear()
        self.contextual.clear()
        self.entry_count = 0

    def is_empty(self) -> bool:
        return not self.flat and not self.contextual

    def metadata(self) -> dict[str, str]:
        """
        Parse the project header stored under the empty msgid.

        Returns:
            Ordered mapping of header names to values, e.g.
            {"Project-Id-Version": "demo 1.0", "Language": "nl"}
        """
        result = {}
        for line in self.flat.get("", "").splitlines():
            name, sep, value = line.partition(":")
            if not sep:
                continue
            name = name.strip()
            if name:
                result[name] = value.strip()
        return result


def split_context(original: str) -> tuple[str, str]:
    """
    Split "<context>\\x04<key>" into (context, key).

    Raises:
        SplitError: unless the string splits into exactly two parts
    """
    parts = original.split(CONTEXT_SEPARATOR)
    if len(parts) != 2:
        raise SplitError(
            f"Context string split into {len(parts)} parts, expected 2: {original!r}"
        )
    return parts[0], parts[1]


def _decode(data: bytes, encoding: str) -> str:
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise MalformedStream(f"Cannot decode string as {encoding}: {e}") from e


def build_table(
    stream: BinaryIO,
    descriptors: Iterable[TranslationPairDescriptor],
    encoding: str = "utf-8",
    table: Optional[LookupTable] = None,
) -> LookupTable:
    """
    Resolve every descriptor to text and populate a lookup table.

    Args:
        stream: Seekable binary stream the descriptors point into
        descriptors: Descriptors in catalog order
        encoding: Codec used to decode string bytes
        table: Table to fill; it is cleared first. A new one is created if omitted.

    Returns:
        The populated LookupTable
    """
    if table is None:
        table = LookupTable()
    else:
        table.clear()

    for descriptor in descriptors:
        original = _decode(
            read_slice(stream, descriptor.original_offset, descriptor.original_length),
            encoding,
        )
        translation = _decode(
            read_slice(stream, descriptor.translation_offset, descriptor.translation_length),
            encoding,
        )
        table.add(original, translation)

    return table


def parse_and_build(
    stream: BinaryIO,
    encoding: str = "utf-8",
    strict_offsets: bool = False,
) -> LookupTable:
    """Parse a catalog stream and return a freshly built LookupTable."""
    _, descriptors = parse(stream, strict_offsets=strict_offsets)
    return build_table(stream, descriptors, encoding=encoding)
