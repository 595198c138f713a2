import asyncio


def test_create_user_returns_document_with_id(client):
    r = client.post('/api/users', json={'name': 'John Doe', 'email': 'john@example.com', 'role': 'student'})
    assert r.status_code == 201
    body = r.json()
    assert body['id'].startswith('USR_')
    assert body['name'] == 'John Doe'
    assert body['email'] == 'john@example.com'
    assert body['role'] == 'student'


def test_duplicate_email_is_rejected(client):
    payload = {'name': 'John Doe', 'email': 'john@example.com', 'role': 'student'}
    assert client.post('/api/users', json=payload).status_code == 201
    r = client.post('/api/users', json=payload)
    assert r.status_code == 400
    assert r.json() == {'message': 'User already exists'}
    # only one stored
    assert len(client.get('/api/users').json()) == 1


def test_missing_fields_are_rejected(client):
    r = client.post('/api/users', json={'email': 'a@example.com'})
    assert r.status_code == 400
    body = r.json()
    assert body['message'] == 'Missing required fields'
    fields = {e['field'] for e in body['errors']}
    assert fields == {'name', 'role'}


def test_empty_name_counts_as_missing(client):
    r = client.post('/api/users', json={'name': '', 'email': 'a@example.com', 'role': 'student'})
    assert r.status_code == 400
    assert r.json()['message'] == 'Missing required fields'


def test_unknown_role_is_invalid(client):
    r = client.post('/api/users', json={'name': 'A', 'email': 'a@example.com', 'role': 'admin'})
    assert r.status_code == 400
    assert r.json()['message'] == 'Invalid request body'


def test_email_format_is_not_validated(client):
    r = client.post('/api/users', json={'name': 'A', 'email': 'not-an-email', 'role': 'instructor'})
    assert r.status_code == 201


def test_list_users_hides_version_field(client, db, make_user):
    make_user(name='Alice')
    asyncio.run(db.users.insert_one({'_id': 'USR_LEGACY', 'name': 'Old', 'email': 'old@example.com', 'role': 'student', '__v': 0}))
    r = client.get('/api/users')
    assert r.status_code == 200
    users = r.json()
    assert {u['name'] for u in users} == {'Alice', 'Old'}
    assert all('__v' not in u for u in users)


def test_users_have_no_update_or_delete(client, make_user):
    user = make_user()
    assert client.put(f"/api/users/{user['id']}", json={'name': 'x'}).status_code in (404, 405)
    assert client.delete(f"/api/users/{user['id']}").status_code in (404, 405)
