"""
Structure extraction context: the pattern tree and its refinement pass.
"""

from logstruct.context.extraction.pattern_tree import PatternTree
from logstruct.context.extraction.refiner import TreeRefiner, common_affixes, squash_duplicate_values

__all__ = ['PatternTree', 'TreeRefiner', 'common_affixes', 'squash_duplicate_values']
