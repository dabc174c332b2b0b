#!/usr/bin/env python3
"""
Process-wide default reader and gettext-style convenience wrappers.

The shared reader is a plain MoFileReader held in a module variable.
Call init_shared_reader() to construct it with options; otherwise the
first convenience call constructs one with defaults. It is never reset
implicitly: only reset_shared_reader() drops it.

    from moreader.shared import read_mo_file, _

    read_mo_file("languages/nl.mo")
    print(_("String English One"))
"""

from pathlib import Path
from typing import Optional, Union

from .mo_format import ErrorCode
from .reader import MoFileReader

_shared_reader: Optional[MoFileReader] = None


def init_shared_reader(encoding: str = "utf-8", strict_offsets: bool = False) -> MoFileReader:
    """Construct (or replace) the shared reader."""
    global _shared_reader
    _shared_reader = MoFileReader(encoding=encoding, strict_offsets=strict_offsets)
    return _shared_reader


def get_shared_reader() -> MoFileReader:
    """Return the shared reader, constructing a default one on first use."""
    if _shared_reader is None:
        return init_shared_reader()
    return _shared_reader


def reset_shared_reader() -> None:
    global _shared_reader
    _shared_reader = None


def read_mo_file(filename: Union[str, Path]) -> ErrorCode:
    return get_shared_reader().read_file(filename)


def gettext(id: str) -> str:
    return get_shared_reader().lookup(id)


_ = gettext


def pgettext(context: str, id: str) -> str:
    return get_shared_reader().lookup_with_context(context, id)


def clear_table() -> None:
    get_shared_reader().clear()


def get_error_description() -> Optional[str]:
    return get_shared_reader().last_error_description()


def get_num_strings() -> int:
    return get_shared_reader().entry_count()
