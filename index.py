"""Registro Nacional Application - Main entry point."""
import os

from dash import dcc, html

from app import app, server  # noqa: F401
from pages import records

# Main layout
app.layout = html.Div([
    dcc.Location(id='url', refresh=False),

    # Operation results, keyed by operation kind
    dcc.Store(id='store-status', storage_type='memory', data={}),

    # Main content area
    html.Div(records.layout(), id='page-content', className="container-fluid"),

    # Form modal
    records.get_form_modal(),
])


if __name__ == '__main__':
    app.run(debug=os.environ.get('DASH_DEBUG', 'false').lower() == 'true')
