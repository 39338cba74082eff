"""Layout components for the personas page."""
import dash_bootstrap_components as dbc
from dash import dcc, html

from components.common import get_header

ADD_LABEL = "➕ Agregar Persona"
CANCEL_LABEL = "❌ Cancelar"
SEARCH_LABEL = "🔍 Buscar"
REFRESH_LABEL = "🔄 Recargar"
DOWNLOAD_LABEL = "📊 Descargar Excel"
SAVE_LABEL = "💾 Guardar"

# Labels shown while the matching request is running
SEARCHING_LABEL = "⏳ Buscando..."
LOADING_LABEL = "⏳ Cargando..."
DOWNLOADING_LABEL = "⏳ Descargando..."
SAVING_LABEL = "⏳ Guardando..."
EMPTY_MESSAGE = "📭 No hay personas registradas"


def layout():
    """Create the personas page layout."""
    return dbc.Container([
        get_header(),

        # Operation results (one alert per operation kind)
        html.Div(id="status-container"),

        dbc.Row([
            dbc.Col([
                dbc.Input(id="search-nombre", type="text", placeholder="🔍 Buscar por nombre...")
            ], md=3),
            dbc.Col([
                dbc.Input(id="search-ciudad", type="text", placeholder="🔍 Buscar por ciudad...")
            ], md=3),
            dbc.Col([
                dbc.ButtonGroup([
                    dbc.Button(SEARCH_LABEL, id="btn-search", color="primary", outline=True),
                    dbc.Button(REFRESH_LABEL, id="btn-refresh", color="secondary", outline=True),
                ])
            ], md="auto"),
            dbc.Col([
                dbc.Button(ADD_LABEL, id="btn-toggle-form", color="primary", className="me-2"),
                dbc.Button(DOWNLOAD_LABEL, id="btn-download-excel", color="success"),
            ], md="auto", className="ms-auto"),
        ], className="mb-4 g-2 align-items-center"),

        # The store sits inside the spinner so pending loads show the spinner
        dbc.Spinner([
            dcc.Store(id='store-personas', storage_type='memory', data=[]),
            html.Div(id="personas-list"),
        ], color="primary"),

        dcc.Download(id="download-excel"),
    ], fluid="md")


def create_persona_card(row: dict):
    """Create a card for one display row (see utils.records.prepare_display_rows)."""
    body = [html.H5(row['nombre_completo'], className="card-title")]

    if row.get('ciudad'):
        body.append(html.P([html.Strong("📍 Ciudad: "), row['ciudad']], className="mb-1"))
    if row.get('ocupacion'):
        body.append(html.P([html.Strong("💼 Ocupación: "), row['ocupacion']], className="mb-1"))
    if row.get('relato'):
        body.append(html.P([html.Strong("📝 Relato: "), row['relato']], className="mb-1"))

    body.append(html.P(f"📅 {row['fecha_display']}", className="text-muted small mb-0"))

    return dbc.Card(dbc.CardBody(body), className="mb-3 persona-card")


def create_empty_state():
    """Placeholder shown when the list is empty."""
    return html.Div(
        html.P(EMPTY_MESSAGE, className="text-muted"),
        id="personas-empty-state",
        className="text-center py-5",
    )


def get_form_modal():
    """Create the persona form modal."""
    return dbc.Modal([
        dbc.ModalHeader(dbc.ModalTitle("Agregar Persona")),
        dbc.ModalBody(id="modal-body"),
        dbc.ModalFooter([
            dbc.Button(SAVE_LABEL, id="btn-save", color="primary", className="me-2"),
            dbc.Button(CANCEL_LABEL, id="btn-cancel", color="secondary", outline=True, n_clicks=0),
        ]),
    ], id="form-modal", size="lg", is_open=False, backdrop="static")
