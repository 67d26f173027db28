"""Building blocks for a small 2D engine: colours, timing, averages, random numbers, batching, 2D drawing, bitmap fonts and input state."""

__version__ = "0.1.0"