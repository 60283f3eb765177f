"""Meeting-room booking REST backend."""

__version__ = "0.1.0"
