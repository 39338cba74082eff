"""Personas page module.

This module provides the single page for managing personas.
It is split into:
- layout.py: Page layout, record cards and the form modal
- form.py: Persona input form component
- callbacks.py: All Dash callbacks for the page
"""
from .layout import layout, get_form_modal
from .form import create_persona_form

# Import callbacks to register them with the app
from . import callbacks  # noqa: F401

__all__ = ['layout', 'get_form_modal', 'create_persona_form']
