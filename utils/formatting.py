"""Display formatting for record fields."""
import logging

import pandas as pd

from utils.constants import FECHA_FORMAT, FECHA_OFFSET, FECHA_PLACEHOLDER

logger = logging.getLogger(__name__)


def parse_fecha(value) -> pd.Timestamp | None:
    """Parse a server timestamp into a naive UTC timestamp.

    Strings are parsed as ISO 8601 (offset-aware values are converted to UTC,
    naive values are taken as UTC). Numbers are epoch milliseconds.
    Returns None for missing or unparseable values.
    """
    if value is None or value == '':
        return None

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = pd.to_datetime(value, unit='ms', utc=True, errors='coerce')
    else:
        ts = pd.to_datetime(str(value), utc=True, errors='coerce')

    if pd.isna(ts):
        logger.debug(f"Unparseable fecha: {value!r}")
        return None
    return ts.tz_localize(None)


def format_fecha(value) -> str:
    """Format a record timestamp for display.

    Applies the fixed +5 hour offset and renders ``dd/mm/yyyy, HH:MM``.
    Missing or invalid timestamps render as ``N/A``.

    >>> format_fecha('2024-01-01T10:00:00')
    '01/01/2024, 15:00'
    """
    ts = parse_fecha(value)
    if ts is None:
        return FECHA_PLACEHOLDER
    return (ts + FECHA_OFFSET).strftime(FECHA_FORMAT)


def format_full_name(persona: dict) -> str:
    """Join nombre and apellido, skipping missing parts."""
    parts = [persona.get('nombre') or '', persona.get('apellido') or '']
    return ' '.join(p for p in parts if p)
