"""
Pattern Tree: structural model of the mined log format

Every node is a slot in the template shared by all lines reaching it:
- values:  interchangeable words seen at this slot
- child:   next slot (None = a line may end here)
- sibling: structurally different alternative under the same parent

Nodes live in an arena and reference each other by integer id, so the
refiner can splice nodes in and out by rewriting ids.

Example:
    Input lines:
        "user bob login"
        "user alice login"

    Tree:
        [ROOT]
          user
            bob | alice
              login
"""

from typing import Iterator, List, Optional

from logstruct.models import PatternNode, WordInfo, ROOT_WORD

__all__ = ['PatternTree']


class PatternTree:
    """Arena-backed structure tree rooted at a [ROOT] sentinel"""

    def __init__(self):
        self._nodes: List[Optional[PatternNode]] = []
        self.root = self.new_node(WordInfo(ROOT_WORD))

    # -- arena -------------------------------------------------------------

    def node(self, node_id: int) -> PatternNode:
        node = self._nodes[node_id]
        if node is None:
            raise KeyError(f"node {node_id} has been deleted")
        return node

    def __getitem__(self, node_id: int) -> PatternNode:
        return self.node(node_id)

    def new_node(self, wi: WordInfo, parent: Optional[int] = None) -> int:
        self._nodes.append(PatternNode(values=[wi], parent=parent))
        return len(self._nodes) - 1

    def delete_node(self, node_id: int) -> None:
        """Free a node together with all the values it owns"""
        node = self.node(node_id)
        node.values.clear()
        self._nodes[node_id] = None

    @property
    def node_count(self) -> int:
        """Number of live nodes, root included"""
        return sum(1 for node in self._nodes if node is not None)

    def siblings(self, first: Optional[int]) -> Iterator[int]:
        """Iterate a sibling chain starting at node id first"""
        node_id = first
        while node_id is not None:
            yield node_id
            node_id = self.node(node_id).sibling

    def children(self, node_id: int) -> Iterator[int]:
        return self.siblings(self.node(node_id).child)

    # -- insertion ---------------------------------------------------------

    def add_to_level(self, level: int, wi: WordInfo,
                     next_wi: Optional[WordInfo] = None) -> int:
        """
        Place wi below the node level and return the node that now holds it.

        Args:
            level: id of the parent node
            wi: token to insert
            next_wi: the token following wi on the line, if any

        Returns:
            Id of the node wi was counted in or added to
        """
        parent = self.node(level)

        # 1. exact match among existing alternatives
        prev = None
        for node_id in self.siblings(parent.child):
            existing = self.node(node_id).find_value(wi.word)
            if existing is not None:
                existing.occurs += 1
                return node_id
            prev = node_id

        # 2. same follow-up word: wi is another value of that slot
        if next_wi is not None:
            for node_id in self.siblings(parent.child):
                candidate = self.node(node_id)
                if candidate.child is not None \
                        and self.node(candidate.child).first_word == next_wi.word:
                    wi.occurs = 1
                    candidate.values.append(wi)
                    return node_id

        # 3. structurally new alternative
        node_id = self.new_node(wi, parent=level)
        if prev is None:
            parent.child = node_id
        else:
            self.node(prev).sibling = node_id
        return node_id

    def add_line(self, tokens) -> int:
        """
        Insert the tokens of one line, keeping one token of lookahead.

        Args:
            tokens: a TokenSource or any iterable of WordInfo

        Returns:
            Id of the node the line terminated at
        """
        if hasattr(tokens, 'next_token'):
            next_token = tokens.next_token
        else:
            iterator = iter(tokens)

            def next_token():
                return next(iterator, None)

        level = self.root
        next_wi = next_token()
        while True:
            wi = next_wi
            if wi is None:
                self.node(level).terminal_count += 1
                return level
            next_wi = next_token()
            level = self.add_to_level(level, wi, next_wi)

    # -- inspection --------------------------------------------------------

    def walk(self, start: Optional[int] = None, level: int = 0):
        """Yield (level, node_id) depth first: node, its children, siblings"""
        stack = [(self.root if start is None else start, level)]
        while stack:
            node_id, depth = stack.pop()
            if node_id is None:
                continue
            node = self.node(node_id)
            yield depth, node_id
            stack.append((node.sibling, depth))
            stack.append((node.child, depth + 1))
