"""HTTP routes for the map service."""
