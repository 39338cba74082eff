"""Common UI components shared across pages."""
import dash_bootstrap_components as dbc
from dash import html

from utils.constants import SUCCESS_MARK


def get_header():
    """Create the page header."""
    return html.Header([
        html.H1("📋 Registro Nacional", className="mb-1"),
        html.P("Gestiona tu registro de personas", className="text-muted mb-0"),
    ], className="text-center py-4 mb-4 border-bottom")


def status_color(message: str) -> str:
    """Bootstrap color for a status message."""
    return "success" if SUCCESS_MARK in message else "danger"


def create_status_alerts(results: list[dict]):
    """Create one alert per operation result, newest first.

    Args:
        results: Serialized OperationResult dicts

    Returns:
        List of dbc.Alert components (empty when there is nothing to show).
    """
    ordered = sorted(results, key=lambda r: r['seq'], reverse=True)
    return [
        dbc.Alert(
            r['message'],
            id={'type': 'status-alert', 'kind': r['kind']},
            color=status_color(r['message']),
            dismissable=True,
            className="mb-2",
        )
        for r in ordered if r.get('message')
    ]
