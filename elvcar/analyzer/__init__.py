"""
Analyzer package

Records what the car did from the broker's broadcast pipe.
"""

from .trip_recorder import TripRecorder

__all__ = ['TripRecorder']
