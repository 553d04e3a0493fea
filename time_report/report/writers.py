import typing

from jinja2 import Environment, PackageLoader

from time_report.common import EmployeeSummary, ReportWriter

LOW_HOURS_THRESHOLD = 100


def hours_to_label(hours: float) -> str:
    return f'{hours:.2f}'


def make_environment() -> Environment:
    env = Environment(loader=PackageLoader('time_report.report', 'templates'), autoescape=True)
    env.filters['hours'] = hours_to_label
    return env


class HtmlReportWriter(ReportWriter):

    filename = 'EmployeeTimeReport.html'
    template = 'EmployeeTimeReport.html'
    title = 'Employee Time Report'
    _header = ['Employee Name', 'Total Time Worked (Hours)']

    def __init__(self, directory='.', threshold: float = LOW_HOURS_THRESHOLD):
        super().__init__(directory)
        self._threshold = threshold
        self._env = make_environment()

    def is_low(self, summary: EmployeeSummary) -> bool:
        return summary.total_hours < self._threshold

    def render_document(self, summaries: typing.Sequence[EmployeeSummary]) -> str:
        return self._env.get_template(self.template).render(
            title=self.title,
            headers=self._header,
            summaries=summaries,
            threshold=self._threshold,
        ) + '\n'

    def render(self, summaries: typing.Sequence[EmployeeSummary]) -> bytes:
        return self.render_document(summaries).encode('utf-8')
