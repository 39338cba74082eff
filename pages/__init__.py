"""Page modules for the registro application."""
from pages import records

__all__ = ['records']
