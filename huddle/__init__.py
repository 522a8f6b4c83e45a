"""Huddle - chat draft composition and message classification."""

__version__ = "0.1.0"
