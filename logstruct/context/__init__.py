"""
Context layer - domain-specific implementations.
"""

from logstruct.context.tokenization import WordStack, TokenSource, Tokenizer, preprocess_line
from logstruct.context.extraction import PatternTree, TreeRefiner
from logstruct.context.classification import detect_syntax

__all__ = [
    'WordStack',
    'TokenSource',
    'Tokenizer',
    'preprocess_line',
    'PatternTree',
    'TreeRefiner',
    'detect_syntax',
]
