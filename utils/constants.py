"""Application-wide constants."""
from datetime import timedelta

# Default backend origin (overridable with REGISTRO_API_URL)
DEFAULT_API_URL = 'https://registronacional-production.up.railway.app/api'
DEFAULT_HTTP_TIMEOUT = 30.0

# Backend endpoints, relative to the base URL
PERSONAS_PATH = '/personas'
SEARCH_PATH = '/personas/buscar'
EXCEL_PATH = '/personas/descargar/excel'

EXCEL_FILENAME = 'registro-nacional.xlsx'
EXCEL_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

# Draft fields in form order; the first two are required
DRAFT_FIELDS = ('nombre', 'apellido', 'ciudad', 'ocupacion', 'relato')
REQUIRED_FIELDS = ('nombre', 'apellido')
FILTER_FIELDS = ('nombre', 'ciudad')

# Fixed display offset applied to server timestamps (Ecuador)
FECHA_OFFSET = timedelta(hours=5)
FECHA_FORMAT = '%d/%m/%Y, %H:%M'
FECHA_PLACEHOLDER = 'N/A'

# Status message markers
SUCCESS_MARK = '✅'
ERROR_MARK = '❌'
