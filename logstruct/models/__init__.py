"""
Data models for logstruct.

This module contains pure data structures with no business logic.
"""

from dataclasses import dataclass, field as dataclass_field
from typing import List, Optional

__all__ = [
    'PLACEHOLDER_MARKER',
    'ROOT_WORD',
    'WordInfo',
    'PatternNode',
    'MinerSettings',
]

# Every canonical syntax placeholder starts with this character
PLACEHOLDER_MARKER = '%'

ROOT_WORD = '[ROOT]'


@dataclass
class WordInfo:
    """A single value observed at a tree slot."""
    word: str
    occurs: int = 1
    is_subword: bool = False  # produced by prefix/suffix factoring
    is_special: bool = False  # recognized syntax placeholder

    @property
    def is_placeholder(self) -> bool:
        return self.word.startswith(PLACEHOLDER_MARKER)

    def __repr__(self):
        flags = ''
        if self.is_subword:
            flags += 's'
        if self.is_special:
            flags += '%'
        return f"WordInfo('{self.word[:30]}', occurs={self.occurs}{', ' + flags if flags else ''})"


@dataclass
class PatternNode:
    """
    One slot of the structure tree.

    Links are node ids inside the owning PatternTree arena, None meaning
    "no such node". A node without a child may terminate a line.
    """
    values: List[WordInfo] = dataclass_field(default_factory=list)
    parent: Optional[int] = None
    child: Optional[int] = None
    sibling: Optional[int] = None
    terminal_count: int = 0

    def find_value(self, word: str) -> Optional[WordInfo]:
        """Exact-text lookup within this node's value set"""
        for wi in self.values:
            if wi.word == word:
                return wi
        return None

    @property
    def first_word(self) -> str:
        return self.values[0].word


@dataclass
class MinerSettings:
    """Run settings shared by the CLI and MiningSession."""
    report_progress: bool = False
    max_line_length: int = 32 * 1024 - 1
    word_stack_size: int = 8
