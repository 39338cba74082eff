"""Tests for the personas HTTP client."""
import httpx
import pytest

from tests.conftest import BASE_URL, EXCEL_BYTES
from utils.api_client import ApiError, PersonasApi


class TestPersonasApi:
    def test_list_personas_returns_backend_order(self, api, backend):
        backend.personas = [
            {'id': 2, 'nombre': 'Luis', 'apellido': 'Mora'},
            {'id': 1, 'nombre': 'Ana', 'apellido': 'Lopez'},
        ]
        assert api.list_personas() == backend.personas
        assert backend.requested() == [('GET', '/api/personas', {})]

    def test_search_omits_empty_params(self, api, backend):
        api.search_personas(nombre='', ciudad='Quito')
        assert backend.requested() == [('GET', '/api/personas/buscar', {'ciudad': 'Quito'})]

    def test_search_sends_both_params(self, api, backend):
        api.search_personas(nombre='Ana', ciudad='Quito')
        _, _, params = backend.requested()[0]
        assert params == {'nombre': 'Ana', 'ciudad': 'Quito'}

    def test_create_posts_json(self, api, backend):
        draft = {'nombre': 'Ana', 'apellido': 'Lopez', 'ciudad': '', 'ocupacion': '', 'relato': ''}
        api.create_persona(draft)
        request = backend.requests[0]
        assert request.method == 'POST'
        assert request.headers['content-type'] == 'application/json'
        assert backend.personas[0]['nombre'] == 'Ana'

    def test_download_excel_returns_bytes(self, api):
        assert api.download_excel() == EXCEL_BYTES

    @pytest.mark.parametrize('path, call', [
        ('/personas', lambda a: a.list_personas()),
        ('/personas/buscar', lambda a: a.search_personas(nombre='x')),
        ('/personas/descargar/excel', lambda a: a.download_excel()),
    ])
    def test_non_success_status_raises(self, api, backend, path, call):
        backend.failing.add(path)
        with pytest.raises(ApiError, match='500'):
            call(api)

    def test_create_failure_raises(self, api, backend):
        backend.failing.add('/personas')
        with pytest.raises(ApiError):
            api.create_persona({'nombre': 'Ana', 'apellido': 'Lopez'})

    def test_network_error_raises(self):
        def handler(request):
            raise httpx.ConnectError('connection refused', request=request)

        with PersonasApi(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ApiError, match='connection refused'):
                client.list_personas()

    def test_invalid_url_raises(self):
        def handler(request):
            raise httpx.InvalidURL('Invalid URL')

        with PersonasApi(BASE_URL, transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ApiError, match='Invalid URL'):
                client.list_personas()

    def test_non_list_body_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={'error': 'x'}))
        with PersonasApi(BASE_URL, transport=transport) as client:
            with pytest.raises(ApiError):
                client.list_personas()

    def test_invalid_json_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text='<html>'))
        with PersonasApi(BASE_URL, transport=transport) as client:
            with pytest.raises(ApiError):
                client.list_personas()


class TestGetApiClient:
    def test_reads_environment(self, monkeypatch):
        from utils import api_client

        monkeypatch.setenv('REGISTRO_API_URL', 'https://example.test/api/')
        monkeypatch.setenv('REGISTRO_HTTP_TIMEOUT', '0')
        api_client.get_api_client.cache_clear()
        try:
            client = api_client.get_api_client()
            assert client.base_url == 'https://example.test/api'
            assert client._client.timeout.read is None
            assert api_client.get_api_client() is client
        finally:
            api_client.get_api_client.cache_clear()

    def test_invalid_timeout_falls_back_to_default(self, monkeypatch):
        from utils import api_client

        monkeypatch.setenv('REGISTRO_HTTP_TIMEOUT', 'soon')
        assert api_client._timeout_from_env() == api_client.DEFAULT_HTTP_TIMEOUT
