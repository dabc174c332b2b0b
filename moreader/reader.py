#!/usr/bin/env python3
"""
Caller-owned .mo catalog reader.

Usage:
    reader = MoFileReader()
    if reader.read_file("languages/nl.mo") is not ErrorCode.SUCCESS:
        print(reader.last_error_description())
    reader.lookup("String English One")
    reader.lookup_with_context("menu", "Open")

The reader is not thread-safe. Hosts sharing one instance across threads
must serialise loads and clears themselves.
"""

import io
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .lookup import LookupTable, build_table
from .mo_format import (
    CatalogHeader,
    CatalogNotFound,
    ErrorCode,
    MoFileError,
    StreamUnreadable,
    parse,
)


class MoFileReader:
    """
    Loads one catalog at a time and answers gettext-style lookups.

    Each load discards whatever was loaded before; there is no merging of
    several catalogs into one reader. Lookups of unknown ids return the id
    unchanged.
    """

    def __init__(self, encoding: str = "utf-8", strict_offsets: bool = False):
        """
        Initialize reader.

        Args:
            encoding: Codec for string bytes (catalogs in other charsets need this set)
            strict_offsets: Require descriptor tables at the offsets the header declares
        """
        self.encoding = encoding
        self.strict_offsets = strict_offsets
        self.table = LookupTable()
        self.header: Optional[CatalogHeader] = None
        self._error: Optional[MoFileError] = None

    # --- loading -----------------------------------------------------------

    def read_file(self, filename: Union[str, Path]) -> ErrorCode:
        """Check the file exists, then load it. Returns SUCCESS or an error code."""
        path = Path(filename)
        if not path.is_file():
            return self._fail(CatalogNotFound(f"Cannot open File {filename}"))

        try:
            with open(path, "rb") as handle:
                return self.read_stream(handle)
        except OSError as e:
            return self._fail(StreamUnreadable(f"Cannot read File {filename}: {e}"))

    def parse_data(self, data: bytes) -> ErrorCode:
        """Load a catalog held in memory."""
        return self.read_stream(io.BytesIO(data))

    def read_stream(self, stream: BinaryIO) -> ErrorCode:
        """
        Load a catalog from a seekable binary stream.

        The previous table is dropped before loading. On failure the table
        stays empty and the message is available from last_error_description().
        """
        self.table = LookupTable()
        self.header = None
        try:
            header, descriptors = parse(stream, strict_offsets=self.strict_offsets)
            table = build_table(stream, descriptors, encoding=self.encoding)
        except MoFileError as e:
            return self._fail(e)

        self.header = header
        self.table = table
        return ErrorCode.SUCCESS

    def _fail(self, error: MoFileError) -> ErrorCode:
        self._error = error
        return error.code

    # --- queries -----------------------------------------------------------

    def lookup(self, id: str) -> str:
        """Return the translation of `id`, or `id` itself if there is none."""
        return self.table.lookup(id)

    def lookup_with_context(self, context: str, id: str) -> str:
        """
        Return the translation of `id` restricted to `context`.

        See https://www.gnu.org/software/gettext/manual/html_node/Contexts.html
        """
        return self.table.lookup_with_context(context, id)

    def entry_count(self) -> int:
        """Number of strings resolved by the last load, flat and contextual."""
        return self.table.entry_count

    def clear(self) -> None:
        """Empty the lookup table."""
        self.table.clear()

    def last_error(self) -> Optional[MoFileError]:
        """The most recent failure, or None if nothing failed yet."""
        return self._error

    def last_error_description(self) -> Optional[str]:
        """Message of the most recent failure, or None if nothing failed yet."""
        if self._error is None:
            return None
        return self._error.message

    def metadata(self) -> dict[str, str]:
        return self.table.metadata()
