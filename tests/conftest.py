"""Shared fixtures: an in-memory personas backend behind httpx.MockTransport."""
import json

import httpx
import pytest

from utils.api_client import ApiError, PersonasApi

BASE_URL = 'https://backend.test/api'
EXCEL_BYTES = b'PK\x03\x04fake-xlsx'


class FakeBackend:
    """Minimal stand-in for the personas REST service."""

    def __init__(self):
        self.personas = []
        self.requests = []
        self.failing = set()
        self._next_id = 1

    def requested(self, method=None):
        return [
            (r.method, r.url.path, dict(r.url.params))
            for r in self.requests
            if method is None or r.method == method
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix('/api')

        if path in self.failing:
            return httpx.Response(500, text='boom')

        if request.method == 'GET' and path == '/personas':
            return httpx.Response(200, json=self.personas)

        if request.method == 'GET' and path == '/personas/buscar':
            nombre = request.url.params.get('nombre', '').lower()
            ciudad = request.url.params.get('ciudad', '').lower()
            found = [
                p for p in self.personas
                if nombre in (p.get('nombre') or '').lower()
                and ciudad in (p.get('ciudad') or '').lower()
            ]
            return httpx.Response(200, json=found)

        if request.method == 'POST' and path == '/personas':
            body = json.loads(request.content)
            persona = {'id': self._next_id, **body, 'fecha': '2024-03-01T12:00:00'}
            self._next_id += 1
            self.personas.insert(0, persona)
            return httpx.Response(201, json=persona)

        if request.method == 'GET' and path == '/personas/descargar/excel':
            return httpx.Response(200, content=EXCEL_BYTES)

        return httpx.Response(404)


class FakeApi:
    """In-process API double for view tests; records every call."""

    def __init__(self, personas=None, search_results=None):
        self.personas = list(personas or [])
        self.search_results = list(search_results or [])
        self.calls = []
        self.errors = {}
        self.hooks = {}

    def _call(self, name, *args):
        self.calls.append((name, *args))
        if name in self.hooks:
            self.hooks[name]()
        if name in self.errors:
            raise ApiError(self.errors[name])

    def list_personas(self):
        self._call('list_personas')
        return list(self.personas)

    def search_personas(self, nombre='', ciudad=''):
        self._call('search_personas', nombre, ciudad)
        return list(self.search_results)

    def create_persona(self, draft):
        self._call('create_persona', dict(draft))
        self.personas.insert(0, {'id': len(self.personas) + 1, **draft})

    def download_excel(self):
        self._call('download_excel')
        return EXCEL_BYTES

    def call_names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def api(backend):
    client = PersonasApi(BASE_URL, timeout=5, transport=httpx.MockTransport(backend.handler))
    yield client
    client.close()


@pytest.fixture
def fake_api():
    return FakeApi()
