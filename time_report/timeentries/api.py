import logging
import typing

import click
import requests

from time_report.common import TimeEntry

DEFAULT_URL = 'https://rc-vault-fap-live-1.azurewebsites.net/api/gettimeentries'

logger = logging.getLogger(__name__)


class TimeEntriesAPI:

    def __init__(self, url, code, session: requests.Session):
        self.url = url
        self.code = code
        self.session = session

    def redact(self, message: str) -> str:
        return message.replace(self.code, '***') if self.code else message

    def call_api(self):
        logger.debug('GET %s', self.url)
        response = self.session.get(self.url,
                                    params={'code': self.code},
                                    headers={'Accept': 'application/json',
                                             'User-Agent': 'Employee time report generator'})
        response.raise_for_status()
        return response.json()

    def get_time_entries(self) -> list[TimeEntry]:
        payload = self.call_api()
        if not isinstance(payload, list):
            raise ValueError(f'expected a list of time entries, got {type(payload).__name__}')
        entries = [TimeEntry.from_json(record) for record in payload]
        logger.debug('received %d time entries', len(entries))
        return entries


def describe_error(api: TimeEntriesAPI, error: Exception) -> tuple[str, typing.Optional[str]]:
    if isinstance(error, requests.HTTPError):
        return (f'HTTP Request Error: {error.response.status_code} {error.response.reason}',
                'The API endpoint rejected the request, please check the endpoint and access code.')
    if isinstance(error, requests.JSONDecodeError):
        return (f'JSON Deserialization Error: {error}',
                'The API response might not be in the expected JSON format.')
    if isinstance(error, requests.RequestException):
        return (f'HTTP Request Error: {api.redact(str(error))}',
                'Please check your internet connection or the API endpoint.')
    if isinstance(error, (ValueError, TypeError)):
        return (f'JSON Deserialization Error: {error}',
                'The API response might not be in the expected JSON format.')
    return f'An unexpected error occurred: {api.redact(str(error))}', None


def fetch_time_entries(api: TimeEntriesAPI) -> typing.Optional[list[TimeEntry]]:
    """Single best-effort fetch; any failure is reported and yields None."""
    try:
        return api.get_time_entries()
    except Exception as e:
        logger.debug('fetching time entries failed', exc_info=True)
        message, hint = describe_error(api, e)
        click.echo(message)
        if hint:
            click.echo(hint)
        return None
