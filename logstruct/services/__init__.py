"""
Services layer - application orchestration.
"""

from logstruct.services.miner import MiningSession, MiningStats, read_lines
from logstruct.services.reporter import ProgressReporter
from logstruct.services.tree_printer import render_tree, build_rich_tree

# Provide consistent naming
Miner = MiningSession

__all__ = [
    'MiningSession',
    'MiningStats',
    'ProgressReporter',
    'read_lines',
    'render_tree',
    'build_rich_tree',
    # Aliases
    'Miner',
]
