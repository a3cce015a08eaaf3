"""chessclick — click-driven chess game controller with a Qt board."""

__version__ = "0.1.0"
