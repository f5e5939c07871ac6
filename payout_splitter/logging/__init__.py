"""Labeled console logging and the JSON Lines warnings log."""
