"""
Refiner: post-pass over a finished PatternTree

Walks the tree depth first and, per node:
1. squashes chains of single-valued, sibling-less nodes into one literal
   ("connection" -> "closed" becomes "connection closed")
2. disjoins a prefix/suffix common to all values of a multi-valued node
   into separate nodes, then re-runs syntax detection on what remains
   ({"a=1", "a=22"} becomes "a=" -> {%posint%})

Factoring is done once per node; a restructured child never triggers
factoring of its ancestors again.
"""

import logging
from typing import List, Optional, Tuple

from logstruct.context.classification.syntaxes import detect_syntax
from logstruct.context.extraction.pattern_tree import PatternTree
from logstruct.models import PatternNode, WordInfo

__all__ = ['TreeRefiner', 'common_affixes', 'squash_duplicate_values']

logger = logging.getLogger(__name__)

# opening delimiter -> closing delimiter
DELIMITER_PAIRS = {
    '"': '"',
    "'": "'",
    '[': ']',
    '(': ')',
    '<': '>',
}
KEY_VALUE_SEPARATORS = '=:'


def _find_matching_term(word: str, len_suffix: int, term: str) -> Optional[int]:
    """Length of the suffix starting at the last term inside the suffix area"""
    for i in range(len_suffix):
        if word[len(word) - i - 1] == term:
            return i + 1
    return None


def common_affixes(words) -> Tuple[int, int]:
    """
    Compute the lengths of the prefix and suffix shared by all words.

    The raw result is corrected so common field syntaxes are not cut
    apart: a prefix ending inside name="..." (or '', [], (), <>) is moved
    so that the whole delimited value stays variable, and a prefix running
    past a key/value separator ('=' or ':') is cut right after it.

    Returns:
        (len_prefix, len_suffix); never overlapping on the shortest word
    """
    base = words[0]
    len_base = len(base)
    len_prefix = len_base
    len_suffix = len_base

    for word in words[1:]:
        if len_prefix > 0:
            jmax = min(len_prefix, len(word))
            j = 0
            while j < jmax and word[j] == base[j]:
                j += 1
            len_prefix = j
        if len_suffix > 0:
            len_word = len(word)
            jmax = min(len_word, len_suffix)
            j = 0
            while j < jmax and word[len_word - j - 1] == base[len_base - j - 1]:
                j += 1
            len_suffix = j

    for j in range(len_prefix - 1, -1, -1):
        c = base[j]
        if c in DELIMITER_PAIRS:
            new_suffix = _find_matching_term(base, len_suffix, DELIMITER_PAIRS[c])
            if new_suffix is not None:
                len_prefix = j + 1
                len_suffix = new_suffix
                break
        elif c in KEY_VALUE_SEPARATORS:
            len_prefix = j + 1
            break

    shortest = min(len(word) for word in words)
    if len_prefix + len_suffix > shortest:
        len_suffix = max(0, shortest - len_prefix)

    return len_prefix, len_suffix


def squash_duplicate_values(node: PatternNode) -> int:
    """
    Merge values with identical text, summing their occurrence counts.

    Leaves the values sorted by text.

    Returns:
        Number of values removed
    """
    if len(node.values) <= 1:
        return 0
    node.values.sort(key=lambda wi: wi.word)
    squashed = [node.values[0]]
    for wi in node.values[1:]:
        if wi.word == squashed[-1].word:
            squashed[-1].occurs += wi.occurs
        else:
            squashed.append(wi)
    removed = len(node.values) - len(squashed)
    node.values = squashed
    return removed


class TreeRefiner:
    """
    Squash chains and disjoin common prefixes/suffixes in a PatternTree

    The [ROOT] sentinel itself is never merged with its child.
    """

    def __init__(self, tree: PatternTree, reporter=None):
        self.tree = tree
        self.reporter = reporter
        self.squashed = 0
        self.disjoined = 0

    def refine(self) -> PatternTree:
        tree = self.tree
        first = tree[tree.root].child
        if first is None:
            return tree

        # (node id, whether that node's sibling chain has more than one member)
        stack = [(first, tree[first].sibling is not None)]
        while stack:
            node_id, has_sibling = stack.pop()
            if self.reporter is not None:
                self.reporter.report('squashing')
            if not has_sibling:
                while self._squash_child(node_id):
                    pass
            self.check_prefixes(node_id)

            node = tree[node_id]
            if node.sibling is not None:
                stack.append((node.sibling, has_sibling))
            if node.child is not None:
                stack.append((node.child, tree[node.child].sibling is not None))
        return tree

    def _can_squash(self, node: PatternNode) -> bool:
        if node.child is None or len(node.values) != 1:
            return False
        child = self.tree[node.child]
        if child.sibling is not None or len(child.values) != 1:
            return False
        # never merge syntax placeholders into a literal
        return not node.values[0].is_placeholder and not child.values[0].is_placeholder

    def _squash_child(self, node_id: int) -> bool:
        """Merge the sole child into node_id; False if not applicable"""
        tree = self.tree
        node = tree[node_id]
        if not self._can_squash(node):
            return False

        child_id = node.child
        child = tree[child_id]
        node.values[0].word = f"{node.first_word} {child.first_word}"
        logger.debug("squashing: %s", node.first_word)
        # lossy: a line ending at node is no longer told apart
        node.terminal_count = child.terminal_count
        node.child = child.child
        self._reparent(node.child, node_id)
        tree.delete_node(child_id)
        self.squashed += 1
        return True

    def _reparent(self, first: Optional[int], parent: int) -> None:
        for sibling_id in self.tree.siblings(first):
            self.tree[sibling_id].parent = parent

    def _splice_child(self, node_id: int, values: List[WordInfo]) -> int:
        """Insert a new node owning values between node_id and its child"""
        tree = self.tree
        node = tree[node_id]
        new_id = tree.new_node(values[0], parent=node_id)
        tree[new_id].values = values
        tree[new_id].child = node.child
        self._reparent(node.child, new_id)
        node.child = new_id
        return new_id

    def check_prefixes(self, node_id: int) -> bool:
        """
        Disjoin a common prefix and/or suffix of the values of node_id.

        Returns:
            True if the node was restructured
        """
        node = self.tree[node_id]
        if len(node.values) <= 1 or node.values[0].is_subword:
            return False

        len_prefix, len_suffix = common_affixes([wi.word for wi in node.values])
        if len_prefix == 0 and len_suffix == 0:
            return False

        if logger.isEnabledFor(logging.DEBUG):
            self._log_prefixes(node, len_prefix, len_suffix)
        self.disjoin_common(node_id, len_prefix, len_suffix)
        return True

    def disjoin_common(self, node_id: int, len_prefix: int, len_suffix: int) -> int:
        """
        Move prefix and suffix into nodes of their own.

        The prefix stays in node_id so the surrounding tree keeps its shape;
        the stripped values move to a new child.

        Returns:
            Id of the node holding the remaining variable values
        """
        tree = self.tree
        target_id = node_id

        if len_prefix > 0:
            node = tree[node_id]
            words = node.values
            prefix = WordInfo(words[0].word[:len_prefix], is_subword=True)
            node.values = [prefix]
            target_id = self._splice_child(node_id, words)
            for wi in words:
                wi.word = wi.word[len_prefix:]

        target = tree[target_id]
        if len_suffix > 0:
            first_word = target.first_word
            suffix = WordInfo(first_word[len(first_word) - len_suffix:], is_subword=True)
            self._splice_child(target_id, [suffix])
            for wi in target.values:
                wi.word = wi.word[:len(wi.word) - len_suffix]

        for wi in target.values:
            wi.is_subword = True
            detect_syntax(wi)
        squash_duplicate_values(target)
        self.disjoined += 1
        return target_id

    @staticmethod
    def _log_prefixes(node: PatternNode, len_prefix: int, len_suffix: int) -> None:
        logger.debug("prefix %d, suffix %d", len_prefix, len_suffix)
        for wi in node.values[:5]:
            word = wi.word
            start_suffix = len(word) - len_suffix
            logger.debug('"%s" "%s" "%s"', word[:len_prefix],
                         word[len_prefix:start_suffix], word[start_suffix:])
