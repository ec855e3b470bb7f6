"""
Syntaxes: recognition of well-known value shapes

Every recognizer takes a text and a start offset and returns the number of
characters it consumed there (0 means no match). Recognized values are
replaced by a canonical placeholder:

- %posint%          123
- %time-24hr%       23:59:07
- %duration%        105:02:11
- %ipv4%            10.0.0.1
- %date-rfc3164%    Oct 11 22:14:15
- %date-rfc5424%    2003-10-11T22:14:15.003Z

The two date syntaxes contain blanks, so they are applied to the raw line
(see logstruct.context.tokenization.preprocess_line) rather than to tokens.
"""

import re
from typing import Callable, List, Tuple

from logstruct.models import WordInfo

__all__ = [
    'POSINT', 'TIME_24HR', 'DURATION', 'IPV4', 'DATE_RFC3164', 'DATE_RFC5424',
    'match_posint', 'match_time24hr', 'match_duration', 'match_ipv4',
    'match_rfc3164_date', 'match_rfc5424_date',
    'TOKEN_SYNTAXES', 'LINE_SYNTAXES', 'PLACEHOLDERS',
    'detect_syntax',
]

POSINT = '%posint%'
TIME_24HR = '%time-24hr%'
DURATION = '%duration%'
IPV4 = '%ipv4%'
DATE_RFC3164 = '%date-rfc3164%'
DATE_RFC5424 = '%date-rfc5424%'

Recognizer = Callable[[str, int], int]

_POSINT_PATTERN = re.compile(r'[0-9]+')
_TIME_24HR_PATTERN = re.compile(r'([0-9]{2}):([0-9]{2}):([0-9]{2})')
_DURATION_PATTERN = re.compile(r'[0-9]+:[0-5][0-9]:[0-5][0-9]')
_IPV4_PATTERN = re.compile(r'([0-9]+)\.([0-9]+)\.([0-9]+)\.([0-9]+)')

# Oct 11 22:14:15, Oct  1 22:14:15, Oct 11 2015 22:14:15 (trailing ':' allowed)
_RFC3164_PATTERN = re.compile(
    r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) {1,2}'
    r'([0-9]{1,2}) (?:([0-9]{4}) )?'
    r'([0-9]{1,2}):([0-9]{1,2}):([0-9]{1,2})(?![0-9]):?',
    re.IGNORECASE,
)

# 2003-10-11T22:14:15.003Z, 2003-08-24T05:14:15.000003-07:00
_RFC5424_PATTERN = re.compile(
    r'([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})'
    r'(?:\.[0-9]+)?'
    r'(?:Z|[+-]([0-9]{2}):([0-9]{2}))'
    r'(?= |$)'
)


def match_posint(text: str, start: int = 0) -> int:
    m = _POSINT_PATTERN.match(text, start)
    return m.end() - start if m else 0


def match_time24hr(text: str, start: int = 0) -> int:
    """HH:MM:SS with two digits per field"""
    m = _TIME_24HR_PATTERN.match(text, start)
    if m is None:
        return 0
    hour, minute, second = (int(g) for g in m.groups())
    if hour > 23 or minute > 59 or second > 59:
        return 0
    return m.end() - start


def match_duration(text: str, start: int = 0) -> int:
    """H...H:MM:SS, any number of hour digits"""
    m = _DURATION_PATTERN.match(text, start)
    return m.end() - start if m else 0


def match_ipv4(text: str, start: int = 0) -> int:
    """
    Dotted-quad IPv4 address.

    Only the address itself is consumed, so callers can inspect whatever
    follows it (e.g. a /mask).
    """
    m = _IPV4_PATTERN.match(text, start)
    if m is None:
        return 0
    if any(len(octet) > 3 or int(octet) > 255 for octet in m.groups()):
        return 0
    return m.end() - start


def match_rfc3164_date(text: str, start: int = 0) -> int:
    m = _RFC3164_PATTERN.match(text, start)
    if m is None:
        return 0
    day, year, hour, minute, second = m.groups()
    if not 1 <= int(day) <= 31:
        return 0
    if year is not None and not 1967 <= int(year) <= 2099:
        return 0
    if int(hour) > 23 or int(minute) > 59 or int(second) > 60:
        return 0
    return m.end() - start


def match_rfc5424_date(text: str, start: int = 0) -> int:
    m = _RFC5424_PATTERN.match(text, start)
    if m is None:
        return 0
    _, month, day, hour, minute, second, tz_hour, tz_minute = m.groups()
    if not 1 <= int(month) <= 12 or not 1 <= int(day) <= 31:
        return 0
    if int(hour) > 23 or int(minute) > 59 or int(second) > 60:
        return 0
    if tz_hour is not None and (int(tz_hour) > 23 or int(tz_minute) > 59):
        return 0
    return m.end() - start


# Order matters: %duration% accepts everything %time-24hr% does
TOKEN_SYNTAXES: List[Tuple[Recognizer, str]] = [
    (match_posint, POSINT),
    (match_time24hr, TIME_24HR),
    (match_duration, DURATION),
    (match_ipv4, IPV4),
]

LINE_SYNTAXES: List[Tuple[Recognizer, str]] = [
    (match_rfc3164_date, DATE_RFC3164),
    (match_rfc5424_date, DATE_RFC5424),
]

PLACEHOLDERS = frozenset(
    placeholder for _, placeholder in TOKEN_SYNTAXES + LINE_SYNTAXES
)


def _set_special(wi: WordInfo, placeholder: str) -> None:
    wi.word = placeholder
    wi.is_special = True


def detect_syntax(wi: WordInfo, word_stack=None) -> bool:
    """
    Replace wi.word by a placeholder if a recognizer consumes all of it.

    Args:
        wi: token to classify, updated in place
        word_stack: pending-token stack. When given, "<ipv4>/<posint>" is
            split into %ipv4%, '/' and %posint%; the latter two are pushed
            so that they are popped in reading order.

    Returns:
        True if the token was replaced
    """
    word = wi.word
    wordlen = len(word)
    if wordlen == 0:
        return False

    for recognizer, placeholder in TOKEN_SYNTAXES:
        nproc = recognizer(word, 0)
        if nproc == wordlen:
            _set_special(wi, placeholder)
            return True

    if word_stack is not None:
        nproc = match_ipv4(word, 0)
        if 0 < nproc < wordlen and word[nproc] == '/':
            start_mask = nproc + 1
            if start_mask < wordlen and match_posint(word, start_mask) == wordlen - start_mask:
                _set_special(wi, IPV4)
                wi.is_subword = True
                word_stack.push(WordInfo(POSINT, is_subword=True, is_special=True))
                word_stack.push(WordInfo('/', is_subword=True))
                return True

    return False
