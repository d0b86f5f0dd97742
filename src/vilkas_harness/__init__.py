"""Vilkas harness: integration-test client for the Vilkas recommendation service."""

__version__ = "0.1.0"
