"""
test_auth_api.py
----------------
Registration, login and per-user scoping of requests.
"""


def _register(client, username='alice', password='wonderland1'):
    return client.post('/api/auth/register', json={
        'username': username,
        'password': password,
        'display_name': 'Alice',
        'email': 'alice@example.com'
    })


def _auth(token):
    return {'Authorization': f'Bearer {token}'}


class TestRegisterAndLogin:
    """Test /api/auth."""

    def test_register(self, client):
        response = _register(client)

        assert response.status_code == 201
        data = response.get_json()
        assert data['user']['username'] == 'alice'
        assert 'password' not in data['user']
        assert data['token']

    def test_register_duplicate_username(self, client):
        response = _register(client, username='demo')

        assert response.status_code == 409

    def test_register_weak_password(self, client):
        response = _register(client, password='short')

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'password'

    def test_login_demo_user(self, client):
        response = client.post('/api/auth/login', json={'username': 'demo', 'password': 'password'})

        assert response.status_code == 200
        assert response.get_json()['user']['id'] == 1

    def test_login_wrong_password(self, client):
        response = client.post('/api/auth/login', json={'username': 'demo', 'password': 'nope'})

        assert response.status_code == 401

    def test_login_missing_fields(self, client):
        assert client.post('/api/auth/login', json={}).status_code == 400


class TestScoping:
    """Test that requests act for the token's user."""

    def test_demo_user_without_token(self, client):
        response = client.get('/api/users/me')

        assert response.status_code == 200
        assert response.get_json()['username'] == 'demo'
        assert 'password' not in response.get_json()

    def test_token_user_sees_own_data(self, client):
        token = _register(client).get_json()['token']
        demo_entry = client.post('/api/entries', json={'title': 'Demo', 'type': 'text'}).get_json()

        me = client.get('/api/users/me', headers=_auth(token)).get_json()
        entries = client.get('/api/entries', headers=_auth(token)).get_json()
        categories = client.get('/api/categories', headers=_auth(token)).get_json()
        other = client.get(f"/api/entries/{demo_entry['id']}", headers=_auth(token))

        assert me['username'] == 'alice'
        assert entries == []
        assert categories == []
        assert other.status_code == 404

    def test_cannot_schedule_someone_elses_entry(self, client):
        token = _register(client).get_json()['token']
        demo_entry = client.post('/api/entries', json={'title': 'Demo', 'type': 'text'}).get_json()
        contact = client.post('/api/contacts', json={'name': 'Bob'}, headers=_auth(token)).get_json()

        response = client.post('/api/schedules', headers=_auth(token), json={
            'entry_id': demo_entry['id'],
            'contact_id': contact['id'],
            'delivery_date': '2030-01-01T00:00:00'
        })

        assert response.status_code == 400

    def test_cannot_file_entry_under_someone_elses_category(self, client):
        token = _register(client).get_json()['token']
        demo_category = client.get('/api/categories').get_json()[0]

        response = client.post('/api/entries', headers=_auth(token), json={
            'title': 'Mine', 'type': 'text', 'category_id': demo_category['id']
        })

        assert response.status_code == 400
        assert response.get_json()['details'][0]['field'] == 'category_id'
        assert client.get('/api/entries', headers=_auth(token)).get_json() == []

    def test_cannot_move_entry_into_someone_elses_category(self, client):
        token = _register(client).get_json()['token']
        demo_category = client.get('/api/categories').get_json()[0]
        entry = client.post('/api/entries', headers=_auth(token), json={'title': 'Mine', 'type': 'text'}).get_json()

        response = client.patch(f"/api/entries/{entry['id']}", headers=_auth(token), json={
            'category_id': demo_category['id']
        })

        assert response.status_code == 400
        assert client.get(f"/api/entries/{entry['id']}", headers=_auth(token)).get_json()['category_id'] is None

    def test_auth_required_rejects_anonymous(self, auth_client):
        assert auth_client.get('/api/entries').status_code == 401

    def test_auth_required_accepts_token(self, auth_client):
        token = auth_client.post('/api/auth/login', json={
            'username': 'demo', 'password': 'password'
        }).get_json()['token']

        response = auth_client.get('/api/entries', headers=_auth(token))

        assert response.status_code == 200
