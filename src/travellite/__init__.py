"""TravelLite luggage transport booking core."""

__version__ = "1.0.0"
