"""Common UI components."""
from components.common import (
    create_status_alerts,
    get_header,
    status_color,
)

__all__ = [
    'get_header',
    'create_status_alerts',
    'status_color',
]
