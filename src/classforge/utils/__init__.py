"""Utility helpers for classforge."""
