"""Utilities for the registro application."""
