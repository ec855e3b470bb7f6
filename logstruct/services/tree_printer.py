"""
Tree printer: human readable dumps of a PatternTree.

Plain format, one line per value:

     0l:[ROOT]
     1l:   user
     2l:      bob
     2v:      alice
     3l:         login [nterm 2]

'l' marks the first value of a node, 'v' every further value of the same
node. Subwords are tagged {subword}, repeated values {count}.
"""

from typing import Iterator, Optional

from rich.markup import escape
from rich.tree import Tree

from logstruct.context.extraction.pattern_tree import PatternTree
from logstruct.models import WordInfo

__all__ = ['format_wordinfo', 'render_tree', 'build_rich_tree']


def _indent(level: int, indicator: str) -> str:
    return f"{level:2d}{indicator}:" + "   " * level


def format_wordinfo(wi: WordInfo) -> str:
    text = wi.word
    if wi.is_subword:
        text += " {subword}"
    if wi.occurs > 1:
        text += f" {{{wi.occurs}}}"
    return text


def render_tree(tree: PatternTree, reporter=None) -> Iterator[str]:
    """Yield the plain text dump of the tree line by line"""
    for level, node_id in tree.walk():
        if reporter is not None:
            reporter.report('print')
        node = tree[node_id]
        line = _indent(level, 'l') + format_wordinfo(node.values[0])
        if node.terminal_count:
            line += f" [nterm {node.terminal_count}]"
        yield line
        for wi in node.values[1:]:
            yield _indent(level, 'v') + format_wordinfo(wi)


def build_rich_tree(tree: PatternTree, reporter=None, start: Optional[int] = None) -> Tree:
    """Build a rich Tree with one branch per node; values joined by ' | '"""

    def label(node_id: int) -> str:
        node = tree[node_id]
        text = " | ".join(
            f"[bold cyan]{escape(format_wordinfo(wi))}[/]" if wi.is_special
            else escape(format_wordinfo(wi))
            for wi in node.values
        )
        if node.terminal_count:
            text += f" [dim]\\[nterm {node.terminal_count}][/]"
        return text

    root_id = tree.root if start is None else start
    rich_root = Tree(label(root_id))
    stack = [(tree[root_id].child, rich_root)]
    while stack:
        node_id, branch = stack.pop()
        if node_id is None:
            continue
        if reporter is not None:
            reporter.report('print')
        sub = branch.add(label(node_id))
        node = tree[node_id]
        # child subtree first, then the next sibling
        stack.append((node.sibling, branch))
        stack.append((node.child, sub))
    return rich_root
