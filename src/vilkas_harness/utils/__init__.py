"""Utility helpers for the Vilkas harness."""
