"""
test_sql_backend_api.py
-----------------------
The end-to-end journey against the SQL backend.
"""


def test_schedule_roundtrip(sql_app):
    client = sql_app.test_client()

    entry = client.post('/api/entries', json={'title': 'Hi', 'type': 'text', 'content': 'hello'}).get_json()
    assert entry['id'] == 1
    assert entry['visibility'] == 'private'

    schedule = client.post('/api/schedules', json={
        'entry_id': entry['id'],
        'contact_id': 2,
        'delivery_date': '2030-01-01T09:00:00Z'
    }).get_json()
    assert client.get(f"/api/entries/{entry['id']}").get_json()['visibility'] == 'scheduled'

    [view] = client.get('/api/scheduled-entries').get_json()
    assert view['schedule']['contact']['name'] == 'Mom'

    assert client.delete(f"/api/schedules/{schedule['id']}").status_code == 204
    assert client.get(f"/api/entries/{entry['id']}").get_json()['visibility'] == 'private'
    assert client.get('/api/scheduled-entries').get_json() == []


def test_seed_runs_once(sql_app):
    client = sql_app.test_client()

    names = [c['name'] for c in client.get('/api/categories').get_json()]

    assert names == ['Personal', 'Work', 'Ideas']
