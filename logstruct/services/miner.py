"""
Miner: drives tokenization, tree building and refinement

A MiningSession owns all mutable state of one run (tree, pending word
stack, reporter), so independent runs never share anything.

Example:
    session = MiningSession()
    session.add_lines(["user bob login", "user alice login"])
    session.refine()
    for line in render_tree(session.tree):
        print(line)
"""

from dataclasses import dataclass
from typing import IO, Iterable, Iterator, Optional

from logstruct.context.extraction import PatternTree, TreeRefiner
from logstruct.context.tokenization import TokenSource, WordStack, preprocess_line
from logstruct.models import MinerSettings
from logstruct.services.reporter import ProgressReporter

__all__ = ['MiningSession', 'MiningStats', 'read_lines']


@dataclass
class MiningStats:
    """Summary of a mining run"""
    lines: int
    nodes_before_refine: int
    nodes: int
    squashed: int
    disjoined: int


def read_lines(stream: IO, max_line_length: int = MinerSettings.max_line_length) -> Iterator[str]:
    """
    Yield the non-empty lines of a stream without their newline.

    Lines end at '\\n' only; a bare '\\r' stays inside the line. Binary
    streams are decoded as UTF-8, invalid bytes being replaced. Anything
    beyond max_line_length characters in one line is dropped.
    """
    for raw in stream:
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8', 'replace')
        line = raw[:-1] if raw.endswith('\n') else raw
        if len(line) > max_line_length:
            line = line[:max_line_length]
        if line:
            yield line


class MiningSession:
    """Mine the structure of a set of log lines into a PatternTree"""

    def __init__(self, settings: Optional[MinerSettings] = None, reporter=None):
        self.settings = settings or MinerSettings()
        self.reporter = reporter if reporter is not None \
            else ProgressReporter(enabled=self.settings.report_progress)
        self.tree = PatternTree()
        self.word_stack = WordStack(self.settings.word_stack_size)
        self.lines = 0
        self.nodes_before_refine = 0
        self.refiner: Optional[TreeRefiner] = None

    def add_line(self, line: str) -> int:
        """
        Tokenize one line and insert it into the tree.

        Returns:
            Id of the node the line ended at
        """
        self.reporter.report('reading')
        source = TokenSource(preprocess_line(line), self.word_stack)
        node_id = self.tree.add_line(source)
        self.lines += 1
        return node_id

    def add_lines(self, lines: Iterable[str]) -> int:
        count = 0
        for line in lines:
            self.add_line(line)
            count += 1
        return count

    def refine(self) -> PatternTree:
        self.nodes_before_refine = self.tree.node_count
        self.refiner = TreeRefiner(self.tree, self.reporter)
        return self.refiner.refine()

    def process(self, lines: Iterable[str]) -> PatternTree:
        """Ingest all lines, then refine the finished tree"""
        self.add_lines(lines)
        return self.refine()

    def stats(self) -> MiningStats:
        return MiningStats(
            lines=self.lines,
            nodes_before_refine=self.nodes_before_refine or self.tree.node_count,
            nodes=self.tree.node_count,
            squashed=self.refiner.squashed if self.refiner else 0,
            disjoined=self.refiner.disjoined if self.refiner else 0,
        )
