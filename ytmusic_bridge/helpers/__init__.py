"""Helpers for the YouTube Music bridge."""
