"""Flappy: a single-scene arcade game on pygame."""

__version__ = "0.1.0"
