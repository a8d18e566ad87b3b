"""Mood distribution statistics."""
