"""
Tokenization context for log lines.
"""

from logstruct.context.tokenization.tokenizer import WordStack, TokenSource, preprocess_line, tokenize

# Provide consistent naming
Tokenizer = TokenSource

__all__ = ['WordStack', 'TokenSource', 'Tokenizer', 'preprocess_line', 'tokenize']
