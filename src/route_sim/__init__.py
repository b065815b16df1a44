"""Route simulation and progress projection for map-navigation demos."""

__version__ = "0.1.0"
