"""Record client view: UI state and operations for the personas page.

The view is independent of Dash. It owns the record list, the loading flag,
the search filter, the draft and the per-operation results, and talks to the
backend through a ``PersonasApi``-like object. The Dash callbacks build a view
from the page stores, run one operation and write the state back.

Every failure is converted into an ``OperationResult``; nothing raised by the
API or by validation escapes an operation.
"""
import logging
import threading
from dataclasses import asdict, dataclass
from typing import Callable, Optional

from utils.api_client import ApiError
from utils.constants import (
    DRAFT_FIELDS,
    ERROR_MARK,
    EXCEL_FILENAME,
    FILTER_FIELDS,
    SUCCESS_MARK,
)
from utils.validation import (
    ValidationError,
    empty_draft,
    empty_filter,
    is_empty_filter,
    normalize_draft,
    validate_draft,
)

logger = logging.getLogger(__name__)

# Operation kinds
LOAD = 'load'
SEARCH = 'search'
CREATE = 'create'
EXPORT = 'export'
OPERATION_KINDS = (LOAD, SEARCH, CREATE, EXPORT)

MESSAGES = {
    LOAD: f"{ERROR_MARK} Error al cargar: {{error}}",
    SEARCH: f"{ERROR_MARK} Error en búsqueda: {{error}}",
    CREATE: f"{ERROR_MARK} Error al guardar: {{error}}",
    EXPORT: f"{ERROR_MARK} Error al descargar: {{error}}",
}
CREATE_SUCCESS = f"{SUCCESS_MARK} Persona guardada exitosamente"
EXPORT_SUCCESS = f"{SUCCESS_MARK} Excel descargado exitosamente"


@dataclass
class OperationResult:
    """Outcome of one operation, rendered independently of the others."""
    kind: str
    ok: bool
    message: str
    seq: int

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'OperationResult':
        return cls(
            kind=data['kind'],
            ok=bool(data['ok']),
            message=data['message'],
            seq=int(data['seq']),
        )


SaveFile = Callable[[bytes, str], None]


class RecordClientView:
    """Client-side state for listing, searching, creating and exporting personas.

    Args:
        api: Object with ``list_personas``, ``search_personas``,
            ``create_persona`` and ``download_excel``
        save_file: Called with ``(content, filename)`` after a successful export
        personas: Initial record list, kept verbatim
        draft: Initial draft values
        search: Initial filter values
        form_visible: Initial form visibility
        results: Previously recorded results, keyed by operation kind
    """

    def __init__(self, api, save_file: Optional[SaveFile] = None,
                 personas: Optional[list] = None, draft: Optional[dict] = None,
                 search: Optional[dict] = None, form_visible: bool = False,
                 results: Optional[dict] = None):
        self.api = api
        self.save_file = save_file
        self.personas = list(personas or [])
        self.draft = normalize_draft(draft)
        self.search_filter = {**empty_filter(), **(search or {})}
        self.form_visible = form_visible
        self.results: dict[str, OperationResult] = dict(results or {})

        self._lock = threading.RLock()
        self._seq = max((r.seq for r in self.results.values()), default=0)
        self._list_token = 0
        self._in_flight = 0

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def status(self) -> str:
        """Message of the most recently recorded result, or '' if none."""
        latest = self.latest_result()
        return latest.message if latest else ''

    def latest_result(self) -> Optional[OperationResult]:
        with self._lock:
            if not self.results:
                return None
            return max(self.results.values(), key=lambda r: r.seq)

    # -------------------------------------------------------------------------
    # Local state mutations
    # -------------------------------------------------------------------------

    def set_draft_field(self, name: str, value: Optional[str]):
        if name not in DRAFT_FIELDS:
            raise KeyError(name)
        with self._lock:
            self.draft[name] = value or ''

    def set_filter_field(self, name: str, value: Optional[str]):
        if name not in FILTER_FIELDS:
            raise KeyError(name)
        with self._lock:
            self.search_filter[name] = value or ''

    def toggle_form(self) -> bool:
        """Show or hide the form. Hiding it cancels and clears the draft."""
        with self._lock:
            self.form_visible = not self.form_visible
            if not self.form_visible:
                self.draft = empty_draft()
            return self.form_visible

    # -------------------------------------------------------------------------
    # Bookkeeping
    # -------------------------------------------------------------------------

    def record(self, kind: str, ok: bool, message: str) -> OperationResult:
        with self._lock:
            self._seq += 1
            result = OperationResult(kind=kind, ok=ok, message=message, seq=self._seq)
            self.results[kind] = result
        if ok:
            logger.info(message)
        else:
            logger.warning(message)
        return result

    def clear_results(self):
        """Drop every recorded result, as a new load, search or create does."""
        with self._lock:
            self.results.clear()

    def _begin(self):
        with self._lock:
            self._in_flight += 1

    def _end(self):
        with self._lock:
            self._in_flight = max(0, self._in_flight - 1)

    def _fetch_list(self, kind: str, fetch: Callable[[], list]) -> bool:
        """Run a list request and apply it only if it is still the newest one."""
        with self._lock:
            self._list_token += 1
            token = self._list_token
            self.results.clear()
        self._begin()
        try:
            try:
                personas = fetch()
                error = None
            except ApiError as e:
                personas, error = None, e

            with self._lock:
                if token != self._list_token:
                    logger.debug(f"Discarding stale {kind} response (token {token})")
                    return False
                if error is not None:
                    self.record(kind, False, MESSAGES[kind].format(error=error))
                    return False
                self.personas = list(personas)
                logger.debug(f"{kind}: {len(self.personas)} personas")
                return True
        finally:
            self._end()

    # -------------------------------------------------------------------------
    # Network operations
    # -------------------------------------------------------------------------

    def load_all(self) -> bool:
        """Replace the list with every record from the backend."""
        return self._fetch_list(LOAD, self.api.list_personas)

    def search(self) -> bool:
        """Replace the list with the records matching the current filter.

        An empty filter is a plain reload.
        """
        nombre = self.search_filter.get('nombre', '')
        ciudad = self.search_filter.get('ciudad', '')
        if is_empty_filter(nombre, ciudad):
            return self.load_all()
        return self._fetch_list(SEARCH, lambda: self.api.search_personas(nombre, ciudad))

    def create(self) -> bool:
        """Submit the draft, then reload the full list on success."""
        self.clear_results()
        draft = normalize_draft(self.draft)
        try:
            validate_draft(draft)
        except ValidationError as e:
            self.record(CREATE, False, f"{ERROR_MARK} {e}")
            return False

        self._begin()
        try:
            self.api.create_persona(draft)
        except ApiError as e:
            self.record(CREATE, False, MESSAGES[CREATE].format(error=e))
            return False
        finally:
            self._end()

        with self._lock:
            self.draft = empty_draft()
            self.form_visible = False
        self.load_all()
        self.record(CREATE, True, CREATE_SUCCESS)
        return True

    def export(self) -> bool:
        """Download the spreadsheet and hand it to ``save_file``."""
        self._begin()
        try:
            content = self.api.download_excel()
            if self.save_file is not None:
                self.save_file(content, EXCEL_FILENAME)
        except (ApiError, OSError) as e:
            self.record(EXPORT, False, MESSAGES[EXPORT].format(error=e))
            return False
        finally:
            self._end()
        self.record(EXPORT, True, EXPORT_SUCCESS)
        return True

    # -------------------------------------------------------------------------
    # Serialization for dcc.Store
    # -------------------------------------------------------------------------

    def results_to_dict(self) -> dict:
        with self._lock:
            return {kind: r.to_dict() for kind, r in self.results.items()}

    @staticmethod
    def results_from_dict(data: Optional[dict]) -> dict:
        if not data:
            return {}
        return {kind: OperationResult.from_dict(r) for kind, r in data.items()
                if kind in OPERATION_KINDS}
