"""HTTP client for the personas backend."""
import logging
import os
from functools import lru_cache

import httpx

from utils.constants import (
    DEFAULT_API_URL,
    DEFAULT_HTTP_TIMEOUT,
    EXCEL_PATH,
    PERSONAS_PATH,
    SEARCH_PATH,
)
from utils.validation import build_search_params

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for any failed backend call (transport, status or body)."""
    pass


def _describe_status(response: httpx.Response) -> str:
    reason = response.reason_phrase or ''
    return f"HTTP {response.status_code} {reason}".strip()


class PersonasApi:
    """Client for the four personas endpoints.

    Args:
        base_url: Backend origin including the ``/api`` prefix
        timeout: Seconds per request, or None to wait indefinitely
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
    """

    def __init__(self, base_url: str, timeout: float | None = None,
                 transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip('/')
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        logger.debug(f"{method} {self.base_url}{path} {kwargs.get('params') or ''}")
        try:
            response = self._client.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise ApiError(_describe_status(response))
        return response

    def _get_list(self, path: str, params: dict | None = None) -> list[dict]:
        response = self._request('GET', path, params=params)
        try:
            data = response.json()
        except ValueError as e:
            raise ApiError("Respuesta inválida del servidor") from e
        if not isinstance(data, list):
            raise ApiError("Respuesta inválida del servidor")
        return data

    def list_personas(self) -> list[dict]:
        """Fetch every record, in backend order (newest first)."""
        return self._get_list(PERSONAS_PATH)

    def search_personas(self, nombre: str = '', ciudad: str = '') -> list[dict]:
        """Fetch records matching the filter; empty fields are not sent."""
        return self._get_list(SEARCH_PATH, params=build_search_params(nombre, ciudad))

    def create_persona(self, draft: dict) -> None:
        """Create a record from the draft. Only the response status is checked."""
        self._request('POST', PERSONAS_PATH, json=draft)
        logger.info(f"Persona created: {draft.get('nombre')} {draft.get('apellido')}")

    def download_excel(self) -> bytes:
        """Fetch the spreadsheet export as raw bytes."""
        response = self._request('GET', EXCEL_PATH)
        logger.info(f"Excel downloaded: {len(response.content)} bytes")
        return response.content


def _timeout_from_env() -> float | None:
    raw = os.environ.get('REGISTRO_HTTP_TIMEOUT', '').strip()
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Invalid REGISTRO_HTTP_TIMEOUT {raw!r}, using {DEFAULT_HTTP_TIMEOUT}")
        return DEFAULT_HTTP_TIMEOUT
    return timeout if timeout > 0 else None


@lru_cache(maxsize=1)
def get_api_client() -> PersonasApi:
    """Get the process-wide API client (cached), configured from the environment."""
    base_url = os.environ.get('REGISTRO_API_URL') or DEFAULT_API_URL
    return PersonasApi(base_url, timeout=_timeout_from_env())
