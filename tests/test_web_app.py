"""Tests for the web API."""

import os

import pytest
from fastapi.testclient import TestClient

import web.app as web_app
from web.app import app

FLIGHTS_CSV = (
    "Date,Airtime,Glider\n"
    "01.10.2016,11,\n05.10.2016,12,\n02.11.2016,13,\n"
    "06.11.2016,14,\n03.12.2016,15,\n07.12.2016,16,\n"
)


@pytest.fixture
def client():
    return TestClient(app)


def upload(client, content=FLIGHTS_CSV, filename='flights.csv', **data):
    files = {'file': (filename, content.encode('utf-8'), 'text/csv')}
    return client.post('/api/statistics', files=files, data=data)


class TestStatistics:

    def test_statistics(self, client):
        response = upload(client, default_glider='Default')
        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['format_detected'] == 'csv'
        assert body['stats']['flights'] == 6
        assert body['stats']['airtime_minutes'] == 81.0
        assert body['stats']['gliders'] == {'Default': {'flights': 6, 'airtime_minutes': 81.0}}
        labels = [row['label'] for row in body['rows']]
        assert labels[:3] == ['01.10.2016', '05.10.2016', 'Total October 2016']
        assert labels[-3:] == ['Total', 'Glider', 'Default']

    def test_without_gliders(self, client):
        body = upload(client, default_glider='Default', gliders='false').json()
        assert body['rows'][-1] == {'label': 'Total', 'flights': 6, 'minutes': 81.0, 'kind': 'total'}

    @pytest.mark.parametrize("data", [{}, {'default_glider': ''}])
    def test_flights_without_glider_counted_as_unknown(self, client, data):
        body = upload(client, **data).json()
        assert body['stats']['gliders'] == {'Unknown': {'flights': 6, 'airtime_minutes': 81.0}}
        assert body['rows'][-1]['label'] == 'Unknown'

    def test_downloads(self, client):
        body = upload(client).json()
        csv_response = client.get(body['download_url'])
        assert csv_response.status_code == 200
        assert 'Total October 2016,2,23.00' in csv_response.text
        xlsx_response = client.get(body['xlsx_url'])
        assert xlsx_response.status_code == 200
        assert xlsx_response.content[:2] == b'PK'

    def test_unsupported_file_type(self, client):
        response = upload(client, filename='flight.igc')
        assert response.status_code == 400

    def test_unreadable_columns(self, client):
        response = upload(client, content="Foo,Bar\n1,2\n")
        assert response.status_code == 400
        assert response.json()['success'] is False

    def test_unknown_job(self, client):
        assert client.get('/api/download/nope/csv').status_code == 404

    def test_unknown_kind(self, client):
        body = upload(client).json()
        assert client.get(f"/api/download/{body['job_id']}/pdf").status_code == 404


class TestJobPruning:

    def test_oldest_jobs_removed_with_their_files(self, client, monkeypatch):
        monkeypatch.setattr(web_app, 'MAX_JOBS', 2)
        first = upload(client).json()
        first_dir = web_app._jobs[first['job_id']]['work_dir']
        second = upload(client).json()
        third = upload(client).json()

        assert first['job_id'] not in web_app._jobs
        assert not os.path.exists(first_dir)
        assert client.get(first['download_url']).status_code == 404
        assert client.get(second['download_url']).status_code == 200
        assert client.get(third['xlsx_url']).status_code == 200
        assert len(web_app._jobs) == 2


def test_index(client):
    response = client.get('/')
    assert response.status_code == 200
    assert 'Flight Statistics' in response.text
