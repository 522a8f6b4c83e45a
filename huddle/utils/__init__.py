"""Utility modules for Huddle."""
