"""Game file format parsers."""

from .ttp import TTPFile, TTPFrame

__all__ = ["TTPFile", "TTPFrame"]
