"""Textured first-person raycaster: .cub scene parsing, ray casting, rendering and the game window."""

__version__ = "0.1.0"
__all__ = ["__version__"]