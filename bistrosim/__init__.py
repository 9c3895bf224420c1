"""Discrete-event simulation of a restaurant with tables, a buffet and fire alarms."""

__version__ = "0.1.0"