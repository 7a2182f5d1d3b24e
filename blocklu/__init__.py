"""Sparse storage, symbolic fill-in, sorting helpers and timing for block LU."""

__version__ = "0.1.0"
__all__ = ["sparse", "symbolic", "sorting", "timing"]