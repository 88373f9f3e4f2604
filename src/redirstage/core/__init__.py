"""Redirect generation core."""
