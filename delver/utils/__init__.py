"""Encoding helpers shared by the API."""
