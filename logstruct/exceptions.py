"""
Exceptions raised by logstruct.

Recognition failures are not errors: unmatched text simply stays literal.
The only error the core can raise is a fatal configuration problem.
"""


class LogStructError(Exception):
    """Base class for logstruct errors"""


class WordStackOverflow(LogStructError):
    """A recognizer produced more pending tokens than the word stack holds"""

    def __init__(self, capacity: int):
        super().__init__(f"word stack too small (capacity {capacity})")
        self.capacity = capacity
