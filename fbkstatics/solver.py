"""Iterative solution of a sparse system A x = b with extrapolating acceleration.

Each step spreads the residual of every equation back over its unknowns in
proportion to the coefficients, and averages the corrections per unknown.
Four histories of the solution, sampled at different strides, are used to
extrapolate unknowns whose changes keep the same direction.
"""

from __future__ import annotations

import os
import struct
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from fbkstatics.equation_store import BlockTerm, SparseSystem

_VALUE = struct.Struct("<d")
_DEFAULT_START = 0.001


@dataclass
class _History:
    """Three snapshots of the solution taken every ``period`` steps inside a window."""

    after: int
    before: int | None
    period: int
    columns: int
    first: list[float] = field(init=False)
    second: list[float] = field(init=False)
    third: list[float] = field(init=False)
    samples: int = 0

    def __post_init__(self) -> None:
        self.first = [0.0] * self.columns
        self.second = [0.0] * self.columns
        self.third = [0.0] * self.columns

    def due(self, loop: int) -> bool:
        if loop <= self.after or loop % self.period:
            return False
        return self.before is None or loop < self.before

    def push(self, values: Sequence[float]) -> None:
        self.first, self.second, self.third = self.second, self.third, list(values)
        self.samples += 1

    def ready(self) -> bool:
        return self.samples > 3


def _extrapolate(
    x: list[float],
    first: Sequence[float],
    second: Sequence[float],
    latest: Sequence[float],
    *,
    skip_flat: bool,
    limit: Callable[[float, float], float],
) -> None:
    for i, (a, b, c) in enumerate(zip(first, second, latest)):
        d1 = b - a
        d2 = c - b
        product = d1 * d2
        if product < 0 or (skip_flat and product == 0):
            continue
        if abs(d2) >= abs(d1):
            x[i] -= d1
            continue
        shift = d2 * d2 / (d2 - d1)
        bound = limit(x[i], d2)
        if abs(shift) > bound:
            shift = -bound if d1 > 0 else bound
        x[i] -= shift


def _relative_limit(value: float, _d2: float) -> float:
    return abs(value * 0.1)


def _step_limit(_value: float, d2: float) -> float:
    return abs(3 * d2)


class Solver:
    """Solves an equation system step by step, starting from ``initial``.

    Without an initial guess every unknown starts at 0.001.
    """

    def __init__(
        self, system: SparseSystem, initial: Sequence[float] | None = None
    ) -> None:
        columns = system.columns
        if initial is None:
            x = [_DEFAULT_START] * columns
        else:
            x = [float(v) for v in initial]
            if len(x) != columns:
                raise ValueError(
                    f"initial guess has {len(x)} values for {columns} unknowns"
                )
        norms = system.row_norms()
        for number, norm in enumerate(norms, start=1):
            if norm == 0:
                raise ValueError(f"equation {number} has no non-zero coefficient")
        counts = system.column_counts()
        vacant = [i for i, count in enumerate(counts) if count == 0]
        if vacant:
            raise ValueError(f"unknowns {vacant} appear in no equation")

        self._rows: list[list[BlockTerm]] = [list(r) for r in system.rows]
        self._values = list(system.values)
        self._norms = norms
        self._columns = system.transpose()
        self._counts = counts
        self._x = x
        self._loop = 0
        self._short = _History(10, None, 1, columns)
        self._mid = _History(18, 600, 4, columns)
        self._long = _History(50, 500, 8, columns)
        self._ultra = _History(54, 400, 15, columns)

    @property
    def values(self) -> list[float]:
        """The current solution."""
        return list(self._x)

    @property
    def loop(self) -> int:
        """The number of steps taken so far."""
        return self._loop

    def _accelerate(self) -> None:
        loop = self._loop
        for history in (self._short, self._mid, self._long, self._ultra):
            if history.due(loop):
                history.push(self._x)

        short, mid, long_, ultra = self._short, self._mid, self._long, self._ultra
        if short.ready():
            _extrapolate(
                self._x, short.first, short.second, short.third,
                skip_flat=True, limit=_relative_limit,
            )
            short.samples = 0
        if mid.ready():
            _extrapolate(
                self._x, mid.first, mid.second, short.third,
                skip_flat=False, limit=_relative_limit,
            )
            mid.samples = 0
        if long_.ready():
            _extrapolate(
                self._x, long_.first, long_.second, short.third,
                skip_flat=False, limit=_step_limit,
            )
            long_.samples = 0
        if ultra.ready():
            _extrapolate(
                self._x, ultra.first, ultra.second, ultra.third,
                skip_flat=False, limit=_step_limit,
            )
            ultra.samples = 0

    def step(self) -> float:
        """Take one step and return the mean change of the solution."""
        self._accelerate()
        x = self._x
        factors = [
            (value - sum(t.coefficient * x[t.block] for t in row)) / norm
            for row, value, norm in zip(self._rows, self._values, self._norms)
        ]
        for i, (column, count) in enumerate(zip(self._columns, self._counts)):
            x[i] += sum(t.coefficient * factors[t.block] for t in column) / count
        self._loop += 1
        return self.change()

    def change(self) -> float:
        """Return the mean absolute difference from the second-latest snapshot."""
        second = self._short.second
        return sum(abs(a - b) for a, b in zip(self._x, second)) / len(self._x)

    def iterate(self, count: int) -> list[float]:
        """Take ``count`` steps and return the change after each one."""
        if count < 0:
            raise ValueError("the number of steps cannot be negative")
        return [self.step() for _ in range(count)]


def save_solution(path: str | os.PathLike[str], values: Sequence[float]) -> None:
    """Write the solution as little-endian doubles."""
    Path(path).write_bytes(b"".join(_VALUE.pack(v) for v in values))


def load_solution(path: str | os.PathLike[str], count: int) -> list[float]:
    """Read ``count`` doubles written by :func:`save_solution`."""
    data = Path(path).read_bytes()
    needed = count * _VALUE.size
    if count < 0 or len(data) < needed:
        raise ValueError(f"{path}: fewer than {count} values in the solution file")
    return [v for (v,) in _VALUE.iter_unpack(data[:needed])]


def write_solution_text(path: str | os.PathLike[str], values: Sequence[float]) -> None:
    """Write the solution as text, one ``index, value`` line per unknown."""
    with Path(path).open("w") as stream:
        for index, value in enumerate(values):
            stream.write(f"{index}, {value:15.10f}\n")


def read_solution_text(path: str | os.PathLike[str]) -> list[float]:
    """Read the values from a file written by :func:`write_solution_text`."""
    values = []
    for number, line in enumerate(Path(path).read_text().splitlines(), start=1):
        if not line.strip():
            continue
        parts = line.split(",")
        if len(parts) != 2:
            raise ValueError(f"{path}: line {number} is not an index and a value")
        try:
            int(parts[0])
            values.append(float(parts[1]))
        except ValueError as exc:
            raise ValueError(f"{path}: line {number} is malformed") from exc
    return values