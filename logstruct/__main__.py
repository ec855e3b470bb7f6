"""
Entry point for python -m logstruct
"""

import click
from logstruct.cli import analyze


@click.group()
@click.version_option(version='1.0.0')
def cli():
    """logstruct - Heuristic Log Structure Mining"""
    pass


cli.add_command(analyze)

if __name__ == '__main__':
    cli()
