"""pgntree — branching chess game records with a lossless PGN codec."""

__version__ = "0.1.0"
