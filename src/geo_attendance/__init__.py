"""Geofenced attendance backend.

Feature modules (employees, locations, attendance) each ship a thin Flask
controller over service and repository layers.
"""

__version__ = "1.0.0"
