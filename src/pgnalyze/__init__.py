"""pgnalyze — legality checker for games recorded in PGN."""

__version__ = "1.0.0"
