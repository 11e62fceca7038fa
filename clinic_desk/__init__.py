"""Clinic front-desk core: doctors, walk-in queue, appointments and stats."""

__version__ = "1.0.0"
