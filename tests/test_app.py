from fastapi.testclient import TestClient
from pymongo.errors import DocumentTooLarge, ServerSelectionTimeoutError

from coursehub.main import app
from coursehub.courses.dependencies import get_db


class _UnreachableCollection:
    def find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError('localhost:27017: connection refused')

    async def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError('localhost:27017: connection refused')


class _OversizedCollection:
    async def find_one(self, *args, **kwargs):
        return None

    async def insert_one(self, *args, **kwargs):
        raise DocumentTooLarge('BSON document too large')


class _BrokenCollection:
    def find(self, *args, **kwargs):
        raise RuntimeError('cursor exploded')


class _FakeDB:
    def __init__(self, collection):
        self.collection = collection

    def __getitem__(self, name):
        return self.collection


class _UnreachableDB:
    def __getitem__(self, name):
        return _UnreachableCollection()

    async def command(self, *args, **kwargs):
        raise ServerSelectionTimeoutError('localhost:27017: connection refused')


def test_root(client):
    r = client.get('/')
    assert r.status_code == 200
    assert r.json() == {'message': 'Online Course API running', 'docs': '/api-docs'}


def test_health_reports_database_status(client):
    r = client.get('/health')
    assert r.status_code == 200
    body = r.json()
    assert body['status']['api'] == 'UP'
    assert body['status']['database'] == 'UP'


def test_openapi_documents_every_collection(client):
    r = client.get('/openapi.json')
    assert r.status_code == 200
    spec = r.json()
    assert spec['info']['title'] == 'Online Course API'
    for name in ('users', 'courses', 'lessons', 'quizzes', 'submissions', 'enrollments'):
        assert f'/api/{name}' in spec['paths']
    assert client.get('/api-docs').status_code == 200


def test_store_failure_is_500_with_detail():
    app.dependency_overrides[get_db] = lambda: _UnreachableDB()
    try:
        client = TestClient(app)
        r = client.get('/api/courses')
        assert r.status_code == 500
        body = r.json()
        assert body['message'] == 'Server error'
        assert 'connection refused' in body['error']

        r = client.post('/api/users', json={'name': 'A', 'email': 'a@example.com', 'role': 'student'})
        assert r.status_code == 500

        health = client.get('/health').json()
        assert health['status']['database'] == 'DOWN'
    finally:
        app.dependency_overrides.clear()


def test_encoding_failure_is_json_500():
    app.dependency_overrides[get_db] = lambda: _FakeDB(_OversizedCollection())
    try:
        r = TestClient(app).post('/api/users', json={'name': 'A', 'email': 'a@example.com', 'role': 'student'})
        assert r.status_code == 500
        assert r.headers['content-type'].startswith('application/json')
        assert r.json() == {'message': 'Server error', 'error': 'BSON document too large'}
    finally:
        app.dependency_overrides.clear()


def test_unexpected_failure_is_json_500():
    app.dependency_overrides[get_db] = lambda: _FakeDB(_BrokenCollection())
    try:
        r = TestClient(app, raise_server_exceptions=False).get('/api/lessons')
        assert r.status_code == 500
        assert r.json() == {'message': 'Server error', 'error': 'cursor exploded'}
    finally:
        app.dependency_overrides.clear()
