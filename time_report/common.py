import abc
import datetime
import os
import tempfile
import typing
from dataclasses import dataclass
from pathlib import Path

import dateutil.parser
from dateutil import tz


def parse_timestamp(value: typing.Optional[str]) -> typing.Optional[datetime.datetime]:
    if value is None:
        return None
    parsed = dateutil.parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


@dataclass
class TimeEntry:
    id: str
    employee_name: str
    start_time: datetime.datetime
    end_time: datetime.datetime
    notes: typing.Optional[str] = None
    deleted_on: typing.Optional[datetime.datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_on is not None

    @property
    def hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600

    @classmethod
    def from_json(cls, record: typing.Mapping[str, typing.Any]):
        if not isinstance(record, dict):
            raise ValueError(f'time entry expected to be an object, got {type(record).__name__}')
        fields = {key.lower(): value for key, value in record.items()}
        for required in ('startimeutc', 'endtimeutc'):
            if fields.get(required) is None:
                raise ValueError(f'time entry {fields.get("id")} has no {required} value')
        for text in ('id', 'employeename', 'entrynotes'):
            if not isinstance(fields.get(text), (str, type(None))):
                raise ValueError(f'time entry {text} expected to be a string, got {type(fields[text]).__name__}')
        return cls(
            id=fields.get('id'),
            employee_name=fields.get('employeename'),
            start_time=parse_timestamp(fields['startimeutc']),
            end_time=parse_timestamp(fields['endtimeutc']),
            notes=fields.get('entrynotes'),
            deleted_on=parse_timestamp(fields.get('deletedon'))
        )


@dataclass
class EmployeeSummary:
    name: str
    total_hours: float
    percentage: typing.Optional[float] = None

    @property
    def label(self) -> str:
        return self.name if self.name is not None else '(unnamed)'


class EmptyTotalError(ValueError):

    def __init__(self, total_hours: float):
        super().__init__(f'overall total time worked is zero or negative ({total_hours:.2f} hours)')
        self.total_hours = total_hours


def active_entries(entries: typing.Iterable[TimeEntry]) -> list[TimeEntry]:
    return [entry for entry in entries if not entry.is_deleted]


def _hours_by_employee(entries: typing.Iterable[TimeEntry]) -> dict[str, float]:
    totals = {}
    for entry in active_entries(entries):
        totals[entry.employee_name] = totals.get(entry.employee_name, 0.0) + entry.hours
    return totals


def summarize(entries: typing.Iterable[TimeEntry]) -> list[EmployeeSummary]:
    summaries = [EmployeeSummary(name, total) for name, total in _hours_by_employee(entries).items()]
    return sorted(summaries, key=lambda summary: summary.total_hours, reverse=True)


def summarize_shares(entries: typing.Iterable[TimeEntry]) -> list[EmployeeSummary]:
    totals = _hours_by_employee(entries)
    overall = sum(totals.values())
    if overall <= 0:
        raise EmptyTotalError(overall)
    summaries = [EmployeeSummary(name, total, total / overall * 100) for name, total in totals.items()]
    return sorted(summaries, key=lambda summary: summary.percentage, reverse=True)


def default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ReportWriter(abc.ABC):
    """Renders employee summaries into a single artifact file.

    The artifact is rendered in memory first and then moved into place, so
    a failing render or write leaves any previous file untouched.
    """

    filename = ''

    def __init__(self, directory='.'):
        self._path = Path(directory) / self.filename

    @property
    def path(self) -> Path:
        return self._path

    @abc.abstractmethod
    def render(self, summaries: typing.Sequence[EmployeeSummary]) -> bytes:
        pass

    def write(self, summaries: typing.Sequence[EmployeeSummary]) -> Path:
        content = self.render(summaries)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=f'.{self._path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(content)
            os.chmod(tmp_path, default_file_mode())
            os.replace(tmp_path, self._path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        return self._path.resolve()
