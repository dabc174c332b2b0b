"""
moreader - reader for GNU gettext compiled catalogs (.mo files)

Parses the binary catalog into in-memory maps and answers gettext-style
lookups, optionally scoped by message context.

Quick start:
    from moreader import MoFileReader, ErrorCode

    reader = MoFileReader()
    if reader.read_file("languages/nl.mo") is ErrorCode.SUCCESS:
        reader.lookup("String English One")
        reader.lookup_with_context("TEST|String|1", "String English")
"""

__version__ = "1.0.0"

from .lookup import LookupTable, build_table, parse_and_build
from .mo_format import (
    ByteOrderReversed,
    CatalogHeader,
    CatalogNotFound,
    ErrorCode,
    MagicMismatch,
    MalformedStream,
    MoFileError,
    SplitError,
    StreamUnreadable,
    TranslationPairDescriptor,
    parse,
)
from .reader import MoFileReader

__all__ = [
    "MoFileReader",
    "LookupTable",
    "build_table",
    "parse_and_build",
    "parse",
    "CatalogHeader",
    "TranslationPairDescriptor",
    "ErrorCode",
    "MoFileError",
    "StreamUnreadable",
    "CatalogNotFound",
    "MalformedStream",
    "MagicMismatch",
    "ByteOrderReversed",
    "SplitError",
]
