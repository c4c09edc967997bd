"""Engine-independent core of a small raycasting game: geometry, input, render batches, asset files, sounds and a tile-map level."""

__version__ = "0.1.0"