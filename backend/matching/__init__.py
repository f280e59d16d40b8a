"""Listing classification and profile helpers (categories, subjects, availability, contact)."""
