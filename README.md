# fbkstatics

Library code for the static-correction stage of 3D seismic processing:
plane geometry helpers, axis tick selection, readers and writers for
middle-result and P190 survey files, a binary store for sparse linear
systems and an iterative solver for them.

It depends on nothing outside the standard library.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Modules

- `fbkstatics.geometry` – `Point`, `Point3D`, `PrecisePoint` (with
  `matches`, a comparison within a square tolerance) and `Segment`. A
  segment offers `length`, `cross` (meeting point of the two lines, and
  optionally whether it lies on both segments), `cross_in` (whether two
  segments cross, and where), `distance`, `equals`, `between`, `point_a`,
  `point_b`, `contains_point` and `perpendicular_foot`.
- `fbkstatics.ticks` – `snap_step` rounds a step up to the next value on a
  fixed ladder of round steps; `compute_ticks` returns label values that
  span a value range and fit a window of a given height and font height.
- `fbkstatics.utils` – `swath_name` (swath number padded to three digits),
  `format_value`, `reverse_bytes` (32-bit byte swap) and
  `merge_first_break_files`, which concatenates first-break files in order
  of the file number each one starts with.
- `fbkstatics.midfbk` – `StationValue` records (station, east, north,
  value), `read_station_values`, `write_station_values`, `find_station`,
  and `MidFbkFile` with `read_shots`, `read_receivers`, `write_shots`,
  `write_receivers`, `find_shot` and `find_receiver`.
- `fbkstatics.equation_store` – `EquationWriter` writes a sparse system
  `A x = b` as a pair of binary files, one `append` per equation of
  `BlockTerm`s; on `close` every unknown that no equation mentions gets an
  equation setting it to `EquationWriter.VACANT_VALUE`. `read_system` loads
  the pair back as a `SparseSystem`, which gives `row`, `column_counts`,
  `vacant_columns`, `row_norms` and `transpose`.
- `fbkstatics.solver` – `Solver` runs an accelerated row-projection
  iteration on a `SparseSystem` (`step`, `iterate`, `change`, `values`).
  `save_solution`/`load_solution` store a solution as binary doubles and
  `write_solution_text`/`read_solution_text` as `index, value` lines.
- `fbkstatics.p190` – `read_shots` (`.SRS`), `read_receivers` (`.GEO`) and
  `read_relations` (`.REL`) return `ShotRecord`, `ReceiverRecord` and
  `ShotRelation` (with `ReceiverRange` runs). `P190Survey.open` loads all
  three files sharing one stem and offers `find_shot`, `find_receiver` and
  `max_receivers_per_shot`.

## Example

```python
from fbkstatics.equation_store import BlockTerm, EquationWriter, read_system
from fbkstatics.solver import Solver

with EquationWriter("sys.a", "sys.b", columns=2) as writer:
    writer.append([BlockTerm(0, 1.0), BlockTerm(1, 1.0)], 3.0)
    writer.append([BlockTerm(0, 1.0)], 1.0)

system = read_system("sys.a", "sys.b")
solver = Solver(system, None)
solver.iterate(200)
print(solver.values)
```

## What it does not do

This is a library only. It has no command-line program and no graphical
screen: it does not display traces, pick or edit first breaks
interactively, or check picked first breaks against a line fit. It does
not build the static-correction equations from survey geometry itself;
callers supply the equation rows to `EquationWriter`.