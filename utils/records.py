"""Preparation of record rows for display."""
import pandas as pd

from utils.constants import DRAFT_FIELDS
from utils.formatting import format_fecha, format_full_name


def prepare_display_rows(personas: list[dict]) -> list[dict]:
    """Add display columns to the records, keeping backend order.

    Every row gets all draft fields (missing ones as ''), plus
    ``nombre_completo`` and ``fecha_display``. No rows are dropped,
    merged or reordered.
    """
    if not personas:
        return []

    df = pd.DataFrame(personas)
    for field in DRAFT_FIELDS:
        if field not in df.columns:
            df[field] = ''
        df[field] = df[field].fillna('').astype(str)
    if 'fecha' not in df.columns:
        df['fecha'] = None

    df['nombre_completo'] = df.apply(format_full_name, axis=1)
    df['fecha_display'] = df['fecha'].apply(format_fecha)
    return df.to_dict('records')
