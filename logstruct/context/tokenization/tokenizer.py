"""
Tokenizer: turns one log line into a sequence of WordInfo tokens

Tokenization runs in two stages:
1. preprocess_line() replaces multi-word syntaxes (dates containing blanks)
   by their placeholders on the raw line
2. TokenSource splits the result at whitespace and runs single-token
   syntax detection on every word

Some recognizers split one raw word into several tokens. The extra tokens
are parked on a WordStack and handed out before more raw input is read.
"""

from typing import List, Optional

from logstruct.context.classification.syntaxes import LINE_SYNTAXES, PLACEHOLDERS, detect_syntax
from logstruct.exceptions import WordStackOverflow
from logstruct.models import WordInfo
from logstruct.protocols import TokenSourceProtocol

__all__ = ['WordStack', 'TokenSource', 'preprocess_line', 'tokenize']

SIZE_WORDSTACK = 8


class WordStack:
    """Bounded LIFO of tokens already detected but not yet consumed."""

    def __init__(self, capacity: int = SIZE_WORDSTACK):
        self.capacity = capacity
        self._items: List[WordInfo] = []

    def push(self, wi: WordInfo) -> None:
        if len(self._items) >= self.capacity:
            raise WordStackOverflow(self.capacity)
        self._items.append(wi)

    def pop(self) -> Optional[WordInfo]:
        """Returns the most recently pushed token or None if empty"""
        return self._items.pop() if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def __len__(self):
        return len(self._items)


def preprocess_line(line: str) -> str:
    """
    Replace multi-word syntaxes on the raw line with their placeholders.

    Only syntaxes that can be detected very reliably AND span blanks belong
    here; everything else is safer to detect per word.
    """
    out = []
    i = 0
    length = len(line)
    while i < length:
        for recognizer, placeholder in LINE_SYNTAXES:
            nproc = recognizer(line, i)
            if nproc > 0:
                out.append(placeholder)
                i += nproc
                break
        else:
            out.append(line[i])
            i += 1
    return ''.join(out)


class TokenSource(TokenSourceProtocol):
    """
    Hands out the tokens of a single (preprocessed) line.

    The word stack is shared with the owning session and is always drained
    before further raw text is read.
    """

    def __init__(self, line: str, word_stack: WordStack):
        self.line = line
        self.pos = 0
        self.word_stack = word_stack

    def next_token(self) -> Optional[WordInfo]:
        wi = self.word_stack.pop()
        if wi is not None:
            return wi

        line = self.line
        length = len(line)
        i = self.pos
        while i < length and line[i].isspace():
            i += 1
        begin = i
        while i < length and not line[i].isspace():
            i += 1
        self.pos = i
        if begin == i:
            return None

        wi = WordInfo(line[begin:i])
        if wi.is_placeholder:
            # e.g. a date put in place by preprocess_line
            wi.is_special = wi.word in PLACEHOLDERS
        else:
            detect_syntax(wi, self.word_stack)
        return wi

    def __iter__(self):
        while True:
            wi = self.next_token()
            if wi is None:
                return
            yield wi


def tokenize(line: str, word_stack: Optional[WordStack] = None) -> List[WordInfo]:
    """Preprocess and fully tokenize a line (convenience for callers/tests)"""
    if word_stack is None:
        word_stack = WordStack()
    return list(TokenSource(preprocess_line(line), word_stack))
