import datetime

import pytest
import requests
from dateutil import tz

from time_report.common import TimeEntry

START = datetime.datetime(2024, 3, 4, 8, 0, tzinfo=tz.UTC)


def make_entry(name, hours, deleted=False, entry_id=None):
    return TimeEntry(
        id=entry_id or f'{name}-{hours}',
        employee_name=name,
        start_time=START,
        end_time=START + datetime.timedelta(hours=hours),
        notes=None,
        deleted_on=START if deleted else None,
    )


def make_record(name, hours, deleted=False):
    end = START + datetime.timedelta(hours=hours)
    return {
        'Id': f'{name}-{hours}',
        'EmployeeName': name,
        'StarTimeUtc': START.strftime('%Y-%m-%dT%H:%M:%S'),
        'EndTimeUtc': end.strftime('%Y-%m-%dT%H:%M:%S'),
        'EntryNotes': 'work',
        'DeletedOn': START.strftime('%Y-%m-%dT%H:%M:%S') if deleted else None,
    }


class FakeResponse:

    def __init__(self, payload=None, status_code=200, reason='OK', invalid_json=False):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason
        self._invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Server Error: {self.reason}', response=self)

    def json(self):
        if self._invalid_json:
            raise requests.JSONDecodeError('Expecting value', '<html>', 0)
        return self._payload


class FakeSession:

    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None):
        self.calls.append((url, params))
        if self._error:
            raise self._error
        return self._response

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


@pytest.fixture
def fake_session(monkeypatch):
    """Installs a FakeSession in place of requests.Session and returns a setter for it."""
    holder = {'session': FakeSession(FakeResponse([]))}

    def install(session):
        holder['session'] = session
        return session

    monkeypatch.setattr(requests, 'Session', lambda: holder['session'])
    return install
