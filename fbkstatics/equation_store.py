"""Sparse linear systems A x = b kept in a pair of binary files.

File A starts with the number of unknowns as a 32-bit integer, followed by
one entry per equation: the number of non-zero terms, then that many term
records.  Each record is 16 bytes: four unused bytes, the unknown's index
as a 32-bit integer and its coefficient as a double.  File B holds the
right-hand side as one double per equation.  Everything is little-endian.
"""

from __future__ import annotations

import os
import struct
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

_COUNT = struct.Struct("<i")
_TERM = struct.Struct("<4xid")
_VALUE = struct.Struct("<d")


@dataclass(frozen=True)
class BlockTerm:
    """One non-zero entry of an equation row: an unknown's index and its coefficient."""

    block: int
    coefficient: float = 0.0


class EquationWriter:
    """Appends equations to a new pair of system files.

    On close, every unknown that no equation mentions gets an equation of
    its own setting it to ``VACANT_VALUE``, so that the system stays solvable.
    """

    VACANT_VALUE = 9999.0

    def __init__(
        self,
        path_a: str | os.PathLike[str],
        path_b: str | os.PathLike[str],
        columns: int,
    ) -> None:
        if columns <= 0:
            raise ValueError("an equation system needs at least one unknown")
        self.columns = int(columns)
        self._counts = [0] * self.columns
        self._vacant: list[int] | None = None
        self._stream_a: BinaryIO = Path(path_a).open("wb")
        try:
            self._stream_b: BinaryIO = Path(path_b).open("wb")
        except OSError:
            self._stream_a.close()
            raise
        self._stream_a.write(_COUNT.pack(self.columns))

    @property
    def closed(self) -> bool:
        """True once the files have been closed."""
        return self._stream_a.closed

    def append(self, terms: Iterable[BlockTerm], value: float) -> None:
        """Append one equation: the sum of the terms equals ``value``."""
        if self.closed:
            raise ValueError("cannot append to a closed equation system")
        row = list(terms)
        for term in row:
            if not 0 <= term.block < self.columns:
                raise ValueError(f"unknown index {term.block} is out of range")
        for term in row:
            self._counts[term.block] += 1
        self._stream_a.write(_COUNT.pack(len(row)))
        self._stream_a.write(
            b"".join(_TERM.pack(t.block, t.coefficient) for t in row)
        )
        self._stream_b.write(_VALUE.pack(value))

    def close(self) -> list[int]:
        """Fill vacant unknowns, close the files and return the vacant indices."""
        if self._vacant is not None:
            return list(self._vacant)
        vacant = [i for i, count in enumerate(self._counts) if count == 0]
        try:
            for index in vacant:
                self.append([BlockTerm(index, 1.0)], self.VACANT_VALUE)
        finally:
            self._close_files()
        self._vacant = vacant
        return list(vacant)

    def _close_files(self) -> None:
        self._stream_a.close()
        self._stream_b.close()

    def __enter__(self) -> EquationWriter:
        return self

    def __exit__(self, *args: object) -> None:
        if args and args[0] is not None:
            self._close_files()
            self._vacant = []
        else:
            self.close()


@dataclass
class SparseSystem:
    """An equation system held in memory, row by row."""

    columns: int
    rows: list[list[BlockTerm]] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.rows) != len(self.values):
            raise ValueError("the number of rows and right-hand values differ")

    def row(self, index: int) -> tuple[list[BlockTerm], float]:
        """Return the terms and right-hand value of one equation."""
        return list(self.rows[index]), self.values[index]

    def column_counts(self) -> list[int]:
        """Return, for each unknown, how many terms mention it."""
        counts = [0] * self.columns
        for row in self.rows:
            for term in row:
                counts[term.block] += 1
        return counts

    def vacant_columns(self) -> list[int]:
        """Return the unknowns that no equation mentions."""
        return [i for i, count in enumerate(self.column_counts()) if count == 0]

    def row_norms(self) -> list[float]:
        """Return the squared length of every row vector."""
        return [sum(t.coefficient * t.coefficient for t in row) for row in self.rows]

    def transpose(self) -> list[list[BlockTerm]]:
        """Return the columns; each term's ``block`` is then the row index."""
        columns: list[list[BlockTerm]] = [[] for _ in range(self.columns)]
        for row_index, row in enumerate(self.rows):
            for term in row:
                columns[term.block].append(BlockTerm(row_index, term.coefficient))
        return columns


def read_system(
    path_a: str | os.PathLike[str], path_b: str | os.PathLike[str]
) -> SparseSystem:
    """Read an equation system from its matrix file and right-hand-side file."""
    data_b = Path(path_b).read_bytes()
    if len(data_b) % _VALUE.size:
        raise ValueError(f"{path_b}: size is not a whole number of values")
    values = [v for (v,) in _VALUE.iter_unpack(data_b)]

    data_a = Path(path_a).read_bytes()
    if len(data_a) < _COUNT.size:
        raise ValueError(f"{path_a}: the equation file is missing its header")
    (columns,) = _COUNT.unpack_from(data_a, 0)
    if columns <= 0:
        raise ValueError(f"{path_a}: the equation system has no unknowns")

    offset = _COUNT.size
    rows: list[list[BlockTerm]] = []
    for number in range(len(values)):
        if offset + _COUNT.size > len(data_a):
            raise ValueError(f"{path_a}: equation {number + 1} is missing")
        (count,) = _COUNT.unpack_from(data_a, offset)
        offset += _COUNT.size
        end = offset + count * _TERM.size
        if count < 0 or end > len(data_a):
            raise ValueError(f"{path_a}: equation {number + 1} is truncated")
        row = [
            BlockTerm(block, coefficient)
            for block, coefficient in _TERM.iter_unpack(data_a[offset:end])
        ]
        for term in row:
            if not 0 <= term.block < columns:
                raise ValueError(
                    f"{path_a}: unknown index {term.block} in equation "
                    f"{number + 1} is out of range"
                )
        rows.append(row)
        offset = end
    return SparseSystem(columns, rows, values)