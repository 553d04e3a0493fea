import contextlib
import typing

import click
import requests

from time_report.timeentries.api import TimeEntriesAPI, DEFAULT_URL


class ReportContext:

    def __init__(self, config: typing.Mapping = None, api_url: str = None, api_code: str = None, output_dir='.'):
        self._config = config or {}
        self._api_url = api_url
        self._api_code = api_code
        self._output_dir = output_dir

    @property
    def api_config(self) -> typing.Mapping:
        return self._config.get('api') or {}

    @property
    def api_url(self) -> str:
        return self._api_url or self.api_config.get('url') or DEFAULT_URL

    @property
    def api_code(self) -> str:
        code = self._api_code or self.api_config.get('code')
        if not code:
            raise click.UsageError('missing API access code, use --api-code, TIME_REPORT_API_CODE '
                                   'or the api.code entry of the config file')
        return code

    @property
    def output_dir(self):
        return self._output_dir

    @contextlib.contextmanager
    def open_api(self) -> typing.Iterator[TimeEntriesAPI]:
        url, code = self.api_url, self.api_code
        with requests.Session() as session:
            yield TimeEntriesAPI(url, code, session)


pass_report = click.make_pass_decorator(ReportContext)
