"""Venue Seating Platform - venue layouts and guest seating assignments."""

__version__ = "1.0.0"
