"""Reading of P190 survey files: shot (.SRS), receiver (.GEO) and relation (.REL) records.

Every file is fixed-width text. Only lines whose first character is the
record type are used: ``S`` for shots, ``G`` for receivers and ``X`` for
relations between a shot and the receiver stations it recorded.
"""

from __future__ import annotations

import os
import re
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import groupby
from pathlib import Path

_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _field(line: str, start: int, width: int) -> str:
    return line[start : start + width]


def _to_int(text: str) -> int:
    """Parse a leading integer the way the C library does; 0 when there is none."""
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def _to_float(text: str) -> float:
    """Parse a leading real number the way the C library does; 0.0 when there is none."""
    match = _FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class ShotRecord:
    """A shot point: station number, position, latitude field, elevation and time code."""

    station: int
    east: float = 0.0
    north: float = 0.0
    latitude: float = 0.0
    elevation: float = 0.0
    time_code: int = 0


@dataclass
class ReceiverRecord:
    """A receiver point: station number, position, latitude field, elevation and time code."""

    station: int
    east: float = 0.0
    north: float = 0.0
    latitude: float = 0.0
    elevation: float = 0.0
    time_code: int = 0


@dataclass
class ReceiverRange:
    """An inclusive run of receiver stations on one receiver line."""

    start: int
    end: int

    @property
    def count(self) -> int:
        """The number of stations in the run."""
        return self.end - self.start + 1


@dataclass
class ShotRelation:
    """The receiver runs recorded by one shot, with the shot's field file number."""

    station: int
    file_number: int
    ranges: list[ReceiverRange] = field(default_factory=list)

    def receiver_count(self) -> int:
        """Return the total number of receiver stations over all runs."""
        return sum(r.count for r in self.ranges)


def _typed_lines(path: str | os.PathLike[str], kind: str) -> list[str]:
    text = Path(path).read_text(errors="replace")
    return [line for line in text.splitlines() if line.startswith(kind)]


def _point_fields(line: str, time_start: int) -> dict[str, float | int]:
    return {
        "station": _to_int(_field(line, 19, 6)),
        "east": _to_float(_field(line, 46, 9)),
        "north": _to_float(_field(line, 55, 9)),
        "latitude": _to_float(_field(line, 25, 10)),
        "elevation": _to_float(_field(line, 64, 6)),
        "time_code": _to_int(_field(line, time_start, 4)),
    }


def read_shots(path: str | os.PathLike[str]) -> list[ShotRecord]:
    """Read the shot records of a P190 shot file, sorted by station."""
    records = [ShotRecord(**_point_fields(line, 76)) for line in _typed_lines(path, "S")]
    records.sort(key=lambda r: r.station)
    return records


def read_receivers(path: str | os.PathLike[str]) -> list[ReceiverRecord]:
    """Read the receiver records of a P190 receiver file, sorted by station."""
    records = [
        ReceiverRecord(**_point_fields(line, 75)) for line in _typed_lines(path, "G")
    ]
    records.sort(key=lambda r: r.station)
    return records


def read_relations(path: str | os.PathLike[str]) -> list[ShotRelation]:
    """Read the relation records, joining consecutive lines of the same shot."""
    relations = []
    lines = _typed_lines(path, "X")
    for station, group in groupby(lines, key=lambda line: _to_int(_field(line, 19, 6))):
        group_lines = list(group)
        relations.append(
            ShotRelation(
                station=station,
                file_number=_to_int(_field(group_lines[0], 57, 4)),
                ranges=[
                    ReceiverRange(
                        _to_int(_field(line, 40, 6)), _to_int(_field(line, 46, 6))
                    )
                    for line in group_lines
                ],
            )
        )
    return relations


def _find(records: Sequence[ShotRecord | ReceiverRecord], station: int) -> int | None:
    index = bisect_left(records, station, key=lambda r: r.station)
    if index < len(records) and records[index].station == station:
        return index
    return None


@dataclass
class P190Survey:
    """The shots, receivers and shot-receiver relations of one survey."""

    shots: list[ShotRecord] = field(default_factory=list)
    receivers: list[ReceiverRecord] = field(default_factory=list)
    relations: list[ShotRelation] = field(default_factory=list)

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> P190Survey:
        """Read the .SRS, .GEO and .REL files that share the stem of ``path``."""
        base = Path(path)
        return cls(
            shots=read_shots(base.with_suffix(".SRS")),
            receivers=read_receivers(base.with_suffix(".GEO")),
            relations=read_relations(base.with_suffix(".REL")),
        )

    def find_shot(self, station: int) -> int | None:
        """Return the index of a shot station, or None."""
        return _find(self.shots, station)

    def find_receiver(self, station: int) -> int | None:
        """Return the index of a receiver station, or None."""
        return _find(self.receivers, station)

    def max_receivers_per_shot(self) -> int:
        """Return the largest number of receiver stations recorded by one shot."""
        return max((r.receiver_count() for r in self.relations), default=0)