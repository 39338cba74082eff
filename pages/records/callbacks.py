"""Callbacks for the personas page."""
import logging

from dash import callback_context, dcc, no_update
from dash.dependencies import Input, Output, State
from dash.exceptions import PreventUpdate

from app import app
from components.common import create_status_alerts
from utils.api_client import get_api_client
from utils.client_view import CREATE, EXPORT, LOAD, SEARCH, RecordClientView
from utils.constants import EXCEL_MEDIA_TYPE, ERROR_MARK
from utils.records import prepare_display_rows

from .form import create_persona_form
from .layout import (
    ADD_LABEL,
    CANCEL_LABEL,
    DOWNLOAD_LABEL,
    DOWNLOADING_LABEL,
    LOADING_LABEL,
    REFRESH_LABEL,
    SAVE_LABEL,
    SAVING_LABEL,
    SEARCH_LABEL,
    SEARCHING_LABEL,
    create_empty_state,
    create_persona_card,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = f"{ERROR_MARK} Error inesperado"

# Buttons that start a request; all of them are disabled while one runs
ACTION_BUTTONS = ('btn-search', 'btn-refresh', 'btn-download-excel', 'btn-save')


def running_outputs(busy_id: str, busy_label: str, idle_label: str) -> list:
    """Build a ``running`` spec: disable every action button, relabel the busy one."""
    return [(Output(button, 'disabled'), True, False) for button in ACTION_BUTTONS] + [
        (Output(busy_id, 'children'), busy_label, idle_label)
    ]


LOAD_RUNNING = running_outputs('btn-refresh', LOADING_LABEL, REFRESH_LABEL)
SEARCH_RUNNING = running_outputs('btn-search', SEARCHING_LABEL, SEARCH_LABEL)
SAVE_RUNNING = running_outputs('btn-save', SAVING_LABEL, SAVE_LABEL)
DOWNLOAD_RUNNING = running_outputs('btn-download-excel', DOWNLOADING_LABEL, DOWNLOAD_LABEL)


def _build_view(personas, status, **kwargs) -> RecordClientView:
    """Restore a view from the page stores."""
    return RecordClientView(
        get_api_client(),
        personas=personas,
        results=RecordClientView.results_from_dict(status),
        **kwargs
    )


def _unexpected_failure(kind: str, status=None) -> dict:
    """Status store contents after an unexpected error in ``kind``."""
    view = RecordClientView(None, results=RecordClientView.results_from_dict(status))
    view.record(kind, False, UNEXPECTED_ERROR)
    return view.results_to_dict()


# =============================================================================
# List Callbacks
# =============================================================================

@app.callback(
    [Output('store-personas', 'data'),
     Output('store-status', 'data')],
    [Input('url', 'pathname'),
     Input('btn-refresh', 'n_clicks')],
    [State('store-personas', 'data'),
     State('store-status', 'data')],
    running=LOAD_RUNNING
)
def load_personas(_pathname, _n_clicks, personas, status):
    """Load every persona on page load and on refresh."""
    try:
        view = _build_view(personas, status)
        view.load_all()
    except Exception:
        logger.exception("Persona load failed")
        return personas or [], _unexpected_failure(LOAD)
    return view.personas, view.results_to_dict()


@app.callback(
    [Output('store-personas', 'data', allow_duplicate=True),
     Output('store-status', 'data', allow_duplicate=True)],
    [Input('btn-search', 'n_clicks'),
     Input('search-nombre', 'n_submit'),
     Input('search-ciudad', 'n_submit')],
    [State('search-nombre', 'value'),
     State('search-ciudad', 'value'),
     State('store-personas', 'data'),
     State('store-status', 'data')],
    prevent_initial_call=True,
    running=SEARCH_RUNNING
)
def search_personas(n_clicks, nombre_submit, ciudad_submit, nombre, ciudad, personas, status):
    """Search by nombre/ciudad; an empty filter reloads everything."""
    if not (n_clicks or nombre_submit or ciudad_submit):
        raise PreventUpdate

    try:
        view = _build_view(personas, status, search={'nombre': nombre, 'ciudad': ciudad})
        view.search()
    except Exception:
        logger.exception("Persona search failed")
        return personas or [], _unexpected_failure(SEARCH)
    return view.personas, view.results_to_dict()


@app.callback(
    Output('personas-list', 'children'),
    Input('store-personas', 'data')
)
def render_personas(personas):
    """Render one card per persona, in the order received."""
    rows = prepare_display_rows(personas or [])
    if not rows:
        return create_empty_state()
    return [create_persona_card(row) for row in rows]


@app.callback(
    Output('status-container', 'children'),
    Input('store-status', 'data')
)
def render_status(status):
    """Render the recorded operation results."""
    return create_status_alerts(list((status or {}).values()))


# =============================================================================
# Form Callbacks
# =============================================================================

@app.callback(
    [Output('form-modal', 'is_open'),
     Output('modal-body', 'children')],
    [Input('btn-toggle-form', 'n_clicks'),
     Input('btn-cancel', 'n_clicks')],
    State('form-modal', 'is_open'),
    prevent_initial_call=True
)
def toggle_form_modal(toggle_click, cancel_click, is_open):
    """Open a blank form, or close it and discard the draft."""
    ctx = callback_context
    if not ctx.triggered or not ctx.triggered[0]['value']:
        raise PreventUpdate

    trigger_id = ctx.triggered[0]['prop_id'].split('.')[0]
    if trigger_id == 'btn-cancel' or is_open:
        return False, ''
    return True, create_persona_form()


@app.callback(
    Output('btn-toggle-form', 'children'),
    Input('form-modal', 'is_open')
)
def update_toggle_label(is_open):
    return CANCEL_LABEL if is_open else ADD_LABEL


@app.callback(
    [Output('store-personas', 'data', allow_duplicate=True),
     Output('store-status', 'data', allow_duplicate=True),
     Output('form-modal', 'is_open', allow_duplicate=True),
     Output('modal-body', 'children', allow_duplicate=True)],
    Input('btn-save', 'n_clicks'),
    [State('input-nombre', 'value'),
     State('input-apellido', 'value'),
     State('input-ciudad', 'value'),
     State('input-ocupacion', 'value'),
     State('input-relato', 'value'),
     State('store-personas', 'data'),
     State('store-status', 'data')],
    prevent_initial_call=True,
    running=SAVE_RUNNING
)
def save_persona(n_clicks, nombre, apellido, ciudad, ocupacion, relato, personas, status):
    """Create a persona from the form, then reload the list."""
    if not n_clicks:
        raise PreventUpdate

    draft = {
        'nombre': nombre,
        'apellido': apellido,
        'ciudad': ciudad,
        'ocupacion': ocupacion,
        'relato': relato,
    }
    try:
        view = _build_view(personas, status, draft=draft, form_visible=True)
        created = view.create()
    except Exception:
        logger.exception("Persona save failed")
        return no_update, _unexpected_failure(CREATE), no_update, no_update

    if not created:
        # Keep the modal open with the typed values
        return no_update, view.results_to_dict(), no_update, no_update
    return view.personas, view.results_to_dict(), view.form_visible, ''


# =============================================================================
# Export Callbacks
# =============================================================================

@app.callback(
    [Output('download-excel', 'data'),
     Output('store-status', 'data', allow_duplicate=True)],
    Input('btn-download-excel', 'n_clicks'),
    State('store-status', 'data'),
    prevent_initial_call=True,
    running=DOWNLOAD_RUNNING
)
def download_excel(n_clicks, status):
    """Download the spreadsheet export."""
    if not n_clicks:
        raise PreventUpdate

    downloads = []

    def save_file(content: bytes, filename: str):
        downloads.append(dcc.send_bytes(content, filename, type=EXCEL_MEDIA_TYPE))

    try:
        view = _build_view(None, status, save_file=save_file)
        view.export()
    except Exception:
        logger.exception("Excel download failed")
        return no_update, _unexpected_failure(EXPORT, status)

    return (downloads[0] if downloads else no_update), view.results_to_dict()
