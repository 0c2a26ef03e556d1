"""Geometry, survey-file readers and a sparse equation solver for seismic static corrections."""

__version__ = "0.1.0"

__all__ = [
    "equation_store",
    "geometry",
    "midfbk",
    "p190",
    "solver",
    "ticks",
    "utils",
]