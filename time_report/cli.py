import logging
import os
import sys

import click
from yaml import load
try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader

from time_report.chart.commands import pie_chart
from time_report.context import ReportContext
from time_report.logging_config import setup_logging
from time_report.report.commands import html_report


@click.group(context_settings={'auto_envvar_prefix': 'TIME_REPORT'})
@click.option('--config', default='config.yaml', type=click.Path(dir_okay=False), help='YAML settings file')
@click.option('--api-url', help='Time entries endpoint, without the access code')
@click.option('--api-code', help='Time entries endpoint access code')
@click.option('--verbose', '-v', is_flag=True, help='Print diagnostic logs')
@click.pass_context
def entry_point(ctx, config, api_url, api_code, verbose):
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    settings = {}
    if os.path.exists(config):
        with open(config, 'r') as f:
            settings = load(f.read(), Loader=Loader) or {}
    ctx.obj = ReportContext(settings, api_url=api_url, api_code=api_code)


entry_point.add_command(html_report)
entry_point.add_command(pie_chart)


def html_report_main():
    entry_point.main(args=sys.argv[1:] + ['html'], prog_name='employee-time-report')


def pie_chart_main():
    entry_point.main(args=sys.argv[1:] + ['pie-chart'], prog_name='employee-time-pie-chart')


if __name__ == '__main__':
    entry_point()
