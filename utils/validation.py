"""Draft and search filter validation.

Only presence of the two required fields is checked; everything else is
passed to the backend as typed.
"""
from typing import Optional

from utils.constants import DRAFT_FIELDS, FILTER_FIELDS, REQUIRED_FIELDS


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def empty_draft() -> dict:
    """Return a draft with every field set to an empty string."""
    return {field: '' for field in DRAFT_FIELDS}


def empty_filter() -> dict:
    """Return a search filter with both fields empty."""
    return {field: '' for field in FILTER_FIELDS}


def normalize_draft(values: Optional[dict]) -> dict:
    """Build a complete draft from form values.

    Missing fields and ``None`` values (untouched Dash inputs) become empty
    strings. Keys outside the draft are dropped.
    """
    values = values or {}
    return {field: values.get(field) or '' for field in DRAFT_FIELDS}


def validate_draft(draft: dict) -> dict:
    """Check that the required fields are present.

    Args:
        draft: Draft dict as produced by ``normalize_draft``

    Returns:
        The draft, unchanged

    Raises:
        ValidationError: If ``nombre`` or ``apellido`` is empty
    """
    # Presence only: whitespace-only values are accepted
    if any(not draft.get(field) for field in REQUIRED_FIELDS):
        raise ValidationError("Nombre y apellido son requeridos")
    return draft


def is_empty_filter(nombre: Optional[str], ciudad: Optional[str]) -> bool:
    """True when neither filter field has a value."""
    return not nombre and not ciudad


def build_search_params(nombre: Optional[str] = None, ciudad: Optional[str] = None) -> dict:
    """Build query parameters from the non-empty filter fields.

    >>> build_search_params(ciudad='Quito')
    {'ciudad': 'Quito'}
    """
    params = {}
    if nombre:
        params['nombre'] = nombre
    if ciudad:
        params['ciudad'] = ciudad
    return params
