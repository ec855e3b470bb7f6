"""
CLI commands for logstruct.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from logstruct.exceptions import LogStructError
from logstruct.models import MinerSettings
from logstruct.services import MiningSession, ProgressReporter, read_lines, render_tree, build_rich_tree


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_tree(session: MiningSession, pretty: bool) -> None:
    if pretty:
        Console().print(build_rich_tree(session.tree, session.reporter))
    else:
        for line in render_tree(session.tree, session.reporter):
            click.echo(line)


@click.command()
@click.option('--input', '-i', 'input_file', type=click.File('rb'),
              default='-', help='Input log file path (default: stdin)')
@click.option('--report-progress', '-p', is_flag=True, help='Display progress indicators on stderr')
@click.option('--verbose', '-v', is_flag=True, help='Log squashing and prefix/suffix decisions')
@click.option('--pretty', is_flag=True, help='Render trees with rich instead of the plain dump')
@click.option('--no-initial-tree', is_flag=True, help='Only print the tree after refinement')
@click.option('--measure', '-m', is_flag=True, help='Display mining statistics')
def analyze(input_file, report_progress, verbose, pretty, no_initial_tree, measure):
    """
    Mine the structure of a log file and print it as a tree.

    Example:
        logstruct analyze -i /var/log/messages -p
    """
    setup_logging(verbose)
    settings = MinerSettings(report_progress=report_progress)
    reporter = ProgressReporter(enabled=settings.report_progress)
    session = MiningSession(settings, reporter=reporter)

    try:
        with reporter:
            session.add_lines(read_lines(input_file, settings.max_line_length))
            if not no_initial_tree:
                _print_tree(session, pretty)
            session.refine()
            _print_tree(session, pretty)
    except LogStructError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if measure:
        stats = session.stats()
        click.echo("\n=== Mining Results ===", err=True)
        click.echo(f"Lines processed: {stats.lines}", err=True)
        click.echo(f"Nodes before refinement: {stats.nodes_before_refine}", err=True)
        click.echo(f"Nodes after refinement: {stats.nodes}", err=True)
        click.echo(f"Chains squashed: {stats.squashed}", err=True)
        click.echo(f"Prefix/suffix splits: {stats.disjoined}", err=True)
