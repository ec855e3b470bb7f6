"""
Pytest configuration and shared fixtures for logstruct tests
"""

import io
from typing import List

import pytest
from rich.console import Console

from logstruct.context.extraction import PatternTree
from logstruct.context.tokenization import WordStack, tokenize
from logstruct.services import ProgressReporter


@pytest.fixture
def tree() -> PatternTree:
    return PatternTree()


@pytest.fixture
def word_stack() -> WordStack:
    return WordStack()


@pytest.fixture
def add_lines():
    """Insert raw lines into a tree, returning the tree"""
    def _add(tree: PatternTree, lines: List[str]) -> PatternTree:
        stack = WordStack()
        for line in lines:
            tree.add_line(tokenize(line, stack))
        return tree
    return _add


@pytest.fixture
def console_output():
    """A rich console writing into a string buffer"""
    buffer = io.StringIO()
    return Console(file=buffer, width=120), buffer


@pytest.fixture
def enabled_reporter(console_output) -> ProgressReporter:
    console, _ = console_output
    return ProgressReporter(enabled=True, console=console)


@pytest.fixture
def sample_logs() -> List[str]:
    """Sample log lines for testing"""
    return [
        "Oct 11 22:14:15 host1 sshd[1201]: Accepted password for bob from 10.0.0.1 port 50122 ssh2",
        "Oct 11 22:14:17 host1 sshd[1202]: Accepted password for alice from 10.0.0.7 port 50123 ssh2",
        "Oct 11 22:15:02 host2 sshd[1203]: Connection closed by 192.168.1.20/24",
        "Oct 11 22:15:09 host2 sshd[1210]: Connection closed by 192.168.1.21/24",
        "2003-10-11T22:14:15.003Z kernel: link up after 0:00:12",
        "2003-10-11T22:14:16.003Z kernel: link up after 0:00:13",
    ]


@pytest.fixture
def log_file(tmp_path, sample_logs):
    path = tmp_path / "sample.log"
    path.write_text("\n".join(sample_logs) + "\n", encoding="utf-8")
    return path
