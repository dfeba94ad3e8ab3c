"""Utility modules for the Venue Seating Platform."""
