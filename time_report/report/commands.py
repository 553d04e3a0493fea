import logging

import click

from time_report.common import summarize
from time_report.context import pass_report, ReportContext
from time_report.timeentries import fetch_time_entries
from .writers import HtmlReportWriter

logger = logging.getLogger(__name__)


def generate(ctx: ReportContext):
    click.echo('Fetching employee time entries...')
    with ctx.open_api() as api:
        time_entries = fetch_time_entries(api)

    if not time_entries:
        click.echo('No time entries found or failed to fetch data.')
        return

    click.echo('Processing data and generating HTML...')
    summaries = summarize(time_entries)
    if not summaries:
        click.echo('No active employee summaries to display after filtering, nothing to render.')
        return

    writer = HtmlReportWriter(ctx.output_dir)
    try:
        path = writer.write(summaries)
    except OSError as e:
        logger.debug('writing %s failed', writer.path, exc_info=True)
        click.echo(f'Error writing HTML file: {e}')
        click.echo('Please ensure you have write permissions to the output directory.')
        return
    click.echo(f'HTML report generated successfully at: {path}')
    click.echo('Please open this file in your web browser to view the table.')


@click.command('html')
@pass_report
def html_report(ctx: ReportContext):
    """Writes the per-employee hours table as an HTML page."""
    generate(ctx)
    click.pause('Press any key to exit.')
