"""Standalone verification tools run outside the test suite."""
