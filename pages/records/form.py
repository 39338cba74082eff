"""Persona form component."""
import dash_bootstrap_components as dbc
from dash import html

from utils.validation import normalize_draft


def _required_label(text: str, html_for: str):
    return dbc.Label([text, html.Span("*", className="text-danger ms-1")], html_for=html_for)


def create_persona_form(draft: dict | None = None):
    """Create the persona input form.

    Args:
        draft: Optional draft values to prefill; a fresh form is empty.

    Returns:
        dbc.Form component with the five draft fields.
    """
    draft = normalize_draft(draft)

    return dbc.Form(id="persona-form", children=[
        dbc.Row([
            dbc.Col([
                _required_label("Nombre", "input-nombre"),
                dbc.Input(type="text", id="input-nombre", value=draft['nombre'], required=True)
            ], md=6),
            dbc.Col([
                _required_label("Apellido", "input-apellido"),
                dbc.Input(type="text", id="input-apellido", value=draft['apellido'], required=True)
            ], md=6),
        ], className="mb-3"),

        dbc.Row([
            dbc.Col([
                dbc.Label("Ciudad", html_for="input-ciudad"),
                dbc.Input(type="text", id="input-ciudad", value=draft['ciudad'])
            ], md=6),
            dbc.Col([
                dbc.Label("Ocupación", html_for="input-ocupacion"),
                dbc.Input(type="text", id="input-ocupacion", value=draft['ocupacion'])
            ], md=6),
        ], className="mb-3"),

        dbc.Row([
            dbc.Col([
                dbc.Label("Relato", html_for="input-relato"),
                dbc.Textarea(id="input-relato", value=draft['relato'], rows=4)
            ]),
        ], className="mb-3"),
    ])
