"""
CLI commands for logstruct.
"""

from logstruct.cli.commands import analyze

__all__ = ['analyze']
