#!/usr/bin/env python3
"""
GNU gettext compiled catalog (.mo) binary format.

Layout (little-endian, 4-byte fields):
    0   magic number (0x950412DE)
    4   file format revision
    8   number of strings N
    12  offset of original strings table
    16  offset of translation strings table
    20  size of hashing table
    24  offset of hashing table
    28  N x (length, offset) of original strings
    +8N N x (length, offset) of translated strings
    ... string bytes, located by absolute offset

The hashing table is never read; lookups use in-memory dicts instead.
"""

import struct
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional

MAGIC_NUMBER = 0x950412DE
MAGIC_REVERSED = 0xDE120495

# Separates msgctxt from msgid in original strings: "<context>\x04<key>"
CONTEXT_SEPARATOR = "\x04"

HEADER_SIZE = 28
DESCRIPTOR_SIZE = 8

_READ_CHUNK = 1 << 20

_UINT32 = struct.Struct("<I")
_INT32 = struct.Struct("<i")
_DESCRIPTOR = struct.Struct("<ii")


class ErrorCode(Enum):
    """Result codes reported by reader operations."""
    SUCCESS = "success"
    ERROR = "error"
    FILE_NOT_FOUND = "file_not_found"
    STREAM_UNREADABLE = "stream_unreadable"
    MALFORMED_STREAM = "malformed_stream"
    TABLE_EMPTY = "table_empty"
    MAGIC_MISMATCH = "magic_mismatch"
    BYTE_ORDER_REVERSED = "byte_order_reversed"
    SPLIT_ERROR = "split_error"


class MoFileError(Exception):
    """Base class for all catalog loading errors."""

    code = ErrorCode.ERROR

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict:
        return {
            "status": "error",
            "error_type": self.code.value,
            "error": self.message,
        }


class StreamUnreadable(MoFileError):
    """The underlying source could not be opened or read."""
    code = ErrorCode.STREAM_UNREADABLE


class CatalogNotFound(StreamUnreadable):
    """The catalog path does not exist."""
    code = ErrorCode.FILE_NOT_FOUND


class MalformedStream(MoFileError):
    """Truncated data, bad descriptors, zero magic or zero string count."""
    code = ErrorCode.MALFORMED_STREAM


class MagicMismatch(MoFileError):
    """The leading magic number is not a gettext catalog."""
    code = ErrorCode.MAGIC_MISMATCH


class ByteOrderReversed(MoFileError):
    """Big-endian catalog; recognised but not supported."""
    code = ErrorCode.BYTE_ORDER_REVERSED


class SplitError(MoFileError):
    """A context-prefixed original string did not split into (context, key)."""
    code = ErrorCode.SPLIT_ERROR


BAD_DESCRIPTIONS = (
    "Stream bad during reading. The .mo-file seems to be invalid "
    "or has bad descriptions!"
)


@dataclass(frozen=True)
class CatalogHeader:
    """Fixed 28-byte header at the start of every catalog."""
    magic_number: int
    file_format_version: int
    string_count: int
    original_table_offset: int
    translation_table_offset: int
    hash_table_size: int
    hash_table_offset: int
    byte_order_reversed: bool = False


@dataclass(frozen=True)
class TranslationPairDescriptor:
    """Absolute location of one original string and its translation."""
    original_length: int
    original_offset: int
    translation_length: int
    translation_offset: int


# ---------------------------------------------------------------------------
# Stream primitives
# ---------------------------------------------------------------------------

def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly `size` bytes or fail with MalformedStream."""
    if size < 0:
        raise MalformedStream(BAD_DESCRIPTIONS)

    # Chunked so a corrupt length cannot force one huge allocation
    chunks = []
    remaining = size
    try:
        while remaining > 0:
            chunk = stream.read(min(remaining, _READ_CHUNK))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
    except (OSError, ValueError) as e:
        raise StreamUnreadable(f"Cannot read stream: {e}") from e

    if remaining:
        raise MalformedStream(BAD_DESCRIPTIONS)
    return b"".join(chunks)


def read_uint32(stream: BinaryIO) -> int:
    return _UINT32.unpack(read_exact(stream, 4))[0]


def read_int32(stream: BinaryIO) -> int:
    return _INT32.unpack(read_exact(stream, 4))[0]


def seek_to(stream: BinaryIO, offset: int) -> None:
    """Seek to an absolute offset from the start of the stream."""
    if offset < 0:
        raise MalformedStream(BAD_DESCRIPTIONS)
    try:
        stream.seek(offset)
    except (OSError, ValueError) as e:
        raise MalformedStream(f"{BAD_DESCRIPTIONS} ({e})") from e


def read_slice(stream: BinaryIO, offset: int, length: int) -> bytes:
    seek_to(stream, offset)
    return read_exact(stream, length)


def _tell(stream: BinaryIO) -> int:
    try:
        return stream.tell()
    except (OSError, ValueError) as e:
        raise StreamUnreadable(f"Cannot determine stream position: {e}") from e


# ---------------------------------------------------------------------------
# Header and descriptor tables
# ---------------------------------------------------------------------------

def parse_header(stream: BinaryIO) -> CatalogHeader:
    """
    Read and validate the fixed header.

    Raises:
        MalformedStream: header truncated, zero magic or zero string count
        ByteOrderReversed: magic number is the byte-swapped constant
        MagicMismatch: any other magic number
    """
    magic = read_uint32(stream)
    version = read_int32(stream)
    count = read_int32(stream)
    original_table_offset = read_int32(stream)
    translation_table_offset = read_int32(stream)
    hash_table_size = read_int32(stream)
    hash_table_offset = read_int32(stream)

    if magic == 0 or count <= 0:
        raise MalformedStream(BAD_DESCRIPTIONS)

    if magic != MAGIC_NUMBER:
        if magic == MAGIC_REVERSED:
            raise ByteOrderReversed("Magic Number is reversed. We do not support this yet!")
        raise MagicMismatch("The Magic Number does not match in all cases!")

    return CatalogHeader(
        magic_number=magic,
        file_format_version=version,
        string_count=count,
        original_table_offset=original_table_offset,
        translation_table_offset=translation_table_offset,
        hash_table_size=hash_table_size,
        hash_table_offset=hash_table_offset,
    )


def _read_descriptor_table(
    stream: BinaryIO,
    count: int,
    declared_offset: int,
    strict_offsets: bool,
) -> list[tuple[int, int]]:
    """Read `count` consecutive (length, offset) pairs from the current position."""
    if strict_offsets:
        position = _tell(stream)
        if position != declared_offset:
            raise MalformedStream(
                f"Descriptor table expected at offset {declared_offset}, "
                f"stream is at {position}"
            )
    raw = read_exact(stream, count * DESCRIPTOR_SIZE)
    return list(_DESCRIPTOR.iter_unpack(raw))


def parse_descriptors(
    stream: BinaryIO,
    header: CatalogHeader,
    strict_offsets: bool = False,
) -> list[TranslationPairDescriptor]:
    """
    Read the original and translation descriptor tables.

    Both tables are read sequentially from the current position, which
    for well-formed catalogs immediately follows the header. With
    `strict_offsets` the position must equal the offset declared in the
    header before each table.
    """
    originals = _read_descriptor_table(
        stream, header.string_count, header.original_table_offset, strict_offsets
    )
    translations = _read_descriptor_table(
        stream, header.string_count, header.translation_table_offset, strict_offsets
    )

    return [
        TranslationPairDescriptor(
            original_length=or_length,
            original_offset=or_offset,
            translation_length=tr_length,
            translation_offset=tr_offset,
        )
        for (or_length, or_offset), (tr_length, tr_offset) in zip(originals, translations)
    ]


def parse(
    stream: BinaryIO,
    strict_offsets: bool = False,
) -> tuple[CatalogHeader, list[TranslationPairDescriptor]]:
    """Parse header and descriptor tables from a seekable binary stream."""
    header = parse_header(stream)
    descriptors = parse_descriptors(stream, header, strict_offsets=strict_offsets)
    return header, descriptors
