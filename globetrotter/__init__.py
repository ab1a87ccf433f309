"""Globetrotter trip itinerary and budget engine."""
