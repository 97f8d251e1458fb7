"""gamerelay — real-time relay and referee for two-player games."""

__version__ = "0.3.0"
