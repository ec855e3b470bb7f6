"""
Syntax classification context.
"""

from logstruct.context.classification.syntaxes import (
    POSINT,
    TIME_24HR,
    DURATION,
    IPV4,
    DATE_RFC3164,
    DATE_RFC5424,
    detect_syntax,
)

__all__ = [
    'POSINT',
    'TIME_24HR',
    'DURATION',
    'IPV4',
    'DATE_RFC3164',
    'DATE_RFC5424',
    'detect_syntax',
]
