from app.services.catalog_service import SqlCatalogService
from app.services.errors import ServiceError
from app.version import API_PREFIX


def test_404_json_envelope(client):
    resp = client.get('/no/such/route')
    assert resp.status_code == 404
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == 404
    assert isinstance(data.get('message'), str)


def test_unexpected_500_json_envelope(client):
    resp = client.get('/__boom')
    assert resp.status_code == 500
    data = resp.get_json()
    assert data['status'] == 'error'
    assert data['code'] == 500
    assert 'RuntimeError' not in data['message']


def test_service_error_becomes_503(client, monkeypatch):
    def broken(self, category_id=None, search=None):
        raise ServiceError("Error fetching products", detail="timeout")

    monkeypatch.setattr(SqlCatalogService, "list_products", broken)
    resp = client.get(f'{API_PREFIX}/products')
    assert resp.status_code == 503
    assert 'timeout' not in resp.get_json()['message']


def test_ok_helper_endpoint(client):
    resp = client.get('/__ok')
    assert resp.status_code == 200
    data = resp.get_json()
    assert data == {
        'status': 'success',
        'message': 'success',
        'data': {'ping': 'pong'}
    }
