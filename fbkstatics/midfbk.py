"""Middle first-break static correction files: station, east, north, value per record."""

from __future__ import annotations

import os
import struct
from bisect import bisect_left
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path


def _single(value: float) -> float:
    """Round a value to single precision, as the value column is stored."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class StationValue:
    """A station number with its coordinates and a correction value."""

    station: int
    east: float = 0.0
    north: float = 0.0
    value: float = 0.0

    def __post_init__(self) -> None:
        self.value = _single(self.value)


def read_station_values(path: str | os.PathLike[str]) -> list[StationValue]:
    """Read records of four whitespace-separated fields, sorted by station."""
    tokens = Path(path).read_text().split()
    if len(tokens) % 4:
        raise ValueError(f"{path}: incomplete record at the end of the file")
    records = []
    for start in range(0, len(tokens), 4):
        ph, east, north, value = tokens[start : start + 4]
        try:
            records.append(StationValue(int(ph), float(east), float(north), float(value)))
        except ValueError as exc:
            raise ValueError(f"{path}: malformed record {start // 4 + 1}") from exc
    records.sort(key=lambda r: r.station)
    return records


def write_station_values(
    path: str | os.PathLike[str], records: Iterable[StationValue]
) -> None:
    """Write records one per line with one decimal for each real field."""
    with Path(path).open("w") as stream:
        for r in records:
            stream.write(f"{r.station} {r.east:.1f} {r.north:.1f} {r.value:.1f}\n")


def find_station(records: Sequence[StationValue], station: int) -> int | None:
    """Return the index of ``station`` in records sorted by station, or None."""
    index = bisect_left(records, station, key=lambda r: r.station)
    if index < len(records) and records[index].station == station:
        return index
    return None


@dataclass
class MidFbkFile:
    """Shot and receiver correction records of the middle first-break result."""

    shots: list[StationValue] = field(default_factory=list)
    receivers: list[StationValue] = field(default_factory=list)

    def read_shots(self, path: str | os.PathLike[str]) -> None:
        """Load shot records from a file."""
        self.shots = read_station_values(path)

    def read_receivers(self, path: str | os.PathLike[str]) -> None:
        """Load receiver records from a file."""
        self.receivers = read_station_values(path)

    def write_shots(self, path: str | os.PathLike[str]) -> None:
        """Save shot records to a file."""
        write_station_values(path, self.shots)

    def write_receivers(self, path: str | os.PathLike[str]) -> None:
        """Save receiver records to a file."""
        write_station_values(path, self.receivers)

    def find_shot(self, station: int) -> int | None:
        """Return the index of a shot station, or None."""
        return find_station(self.shots, station)

    def find_receiver(self, station: int) -> int | None:
        """Return the index of a receiver station, or None."""
        return find_station(self.receivers, station)