"""Composition and classification core."""
