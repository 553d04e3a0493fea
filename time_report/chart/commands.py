import logging

import click

from time_report.common import summarize_shares, EmptyTotalError
from time_report.context import pass_report, ReportContext
from time_report.timeentries import fetch_time_entries
from .writers import PieChartWriter

logger = logging.getLogger(__name__)


@click.command('pie-chart')
@pass_report
def pie_chart(ctx: ReportContext):
    """Draws each employee's share of the worked hours as a PNG pie chart."""
    click.echo('Fetching employee time entries for pie chart...')
    with ctx.open_api() as api:
        time_entries = fetch_time_entries(api)

    if not time_entries:
        click.echo('No time entries found or failed to fetch data.')
        return

    click.echo('Processing data for pie chart...')
    try:
        summaries = summarize_shares(time_entries)
    except EmptyTotalError as e:
        click.echo(f'Overall total time worked is {e.total_hours:.2f} hours, cannot generate pie chart.')
        return

    writer = PieChartWriter(ctx.output_dir)
    try:
        click.echo('Generating pie chart image...')
        path = writer.write(summaries)
    except Exception as e:
        logger.debug('rendering %s failed', writer.path, exc_info=True)
        click.echo(f'Error generating pie chart: {e}')
        click.echo('Ensure Pillow is installed and the output directory is writable.')
        return
    click.echo(f'Pie chart generated successfully at: {path}')
