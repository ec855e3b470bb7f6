"""
logstruct - Heuristic Log Structure Mining

Builds a compact structural template from unstructured log lines: a tree of
recurring tokens and the variable slots between them.

Architecture:
- Models: Pure data structures (WordInfo, PatternNode, MinerSettings)
- Protocols: Interface contracts (TokenSourceProtocol, ProgressSinkProtocol)
- Context: Domain implementations (Classification, Tokenization, Extraction)
- Services: Application orchestration (MiningSession, reporting, printing)
- CLI: User interface (analyze command)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from logstruct import models, protocols
from logstruct.context import PatternTree, TreeRefiner, TokenSource, WordStack, detect_syntax
from logstruct.services import MiningSession, ProgressReporter, render_tree

__all__ = [
    'models',
    'protocols',
    'PatternTree',
    'TreeRefiner',
    'TokenSource',
    'WordStack',
    'detect_syntax',
    'MiningSession',
    'ProgressReporter',
    'render_tree',
]
