"""First-person maze explorer: .cub scene parsing, raycasting and a pygame game."""

__version__ = "0.1.0"