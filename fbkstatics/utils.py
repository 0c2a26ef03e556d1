"""Small helpers: swath names, value formatting, byte order and first-break file merging."""

from __future__ import annotations

import os
import shutil
import struct
from collections.abc import Iterable
from pathlib import Path

# Files whose leading file number reaches this value are never picked for merging.
_FILE_NUMBER_LIMIT = 10000000
_FILE_NUMBER = struct.Struct("<i")


def swath_name(swath: int) -> str:
    """Return the swath number padded with leading zeros to three characters."""
    digits = str(int(swath))
    return "0" * max(0, 3 - len(digits)) + digits


def format_value(value: int | float) -> str:
    """Format an integer plainly and a float with six decimals."""
    if isinstance(value, int):
        return str(value)
    return f"{value:f}"


def reverse_bytes(value: int) -> int:
    """Reverse the byte order of a 32-bit integer, returning a signed result."""
    (result,) = struct.unpack(">i", struct.pack("<I", value & 0xFFFFFFFF))
    return result


def _leading_file_number(path: Path) -> int:
    with path.open("rb") as stream:
        head = stream.read(_FILE_NUMBER.size)
    if len(head) < _FILE_NUMBER.size:
        raise ValueError(f"first break file {path} is too short to hold a file number")
    (number,) = _FILE_NUMBER.unpack(head)
    return number


def merge_first_break_files(
    paths: Iterable[str | os.PathLike[str]], output: str | os.PathLike[str]
) -> list[Path]:
    """Concatenate first-break files into ``output`` in order of their first file number.

    Returns the input paths in the order they were written.  Files whose
    leading file number is 10000000 or more are left out.
    """
    sources = [Path(p) for p in paths]
    numbered = [(_leading_file_number(p), p) for p in sources]
    ordered = [
        path
        for number, path in sorted(numbered, key=lambda item: item[0])
        if number < _FILE_NUMBER_LIMIT
    ]
    with Path(output).open("wb") as target:
        for path in ordered:
            with path.open("rb") as source:
                shutil.copyfileobj(source, target)
    return ordered