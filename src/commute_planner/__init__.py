"""Commute planner: car versus bike-and-train recommendations."""

__version__ = "0.1.0"
