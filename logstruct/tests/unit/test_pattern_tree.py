"""
Unit tests for PatternTree insertion
"""

import random

import pytest

from logstruct.context.extraction import PatternTree
from logstruct.context.tokenization import TokenSource, WordStack, preprocess_line
from logstruct.models import WordInfo, ROOT_WORD


def canonical(tree, first):
    """Order-independent form of a sibling chain"""
    return tuple(sorted(
        (
            tuple(sorted((wi.word, wi.occurs) for wi in tree[node_id].values)),
            tree[node_id].terminal_count,
            canonical(tree, tree[node_id].child),
        )
        for node_id in tree.siblings(first)
    ))


def path_words(tree):
    """First words along the first-child path below the root"""
    result = []
    node_id = tree[tree.root].child
    while node_id is not None:
        result.append(tree[node_id].first_word)
        node_id = tree[node_id].child
    return result


class TestInsertion:
    """Test the exact-match / lookahead / new-branch insertion rules"""

    def test_root_sentinel(self, tree):
        assert tree[tree.root].first_word == ROOT_WORD
        assert tree[tree.root].child is None
        assert tree.node_count == 1

    def test_lookahead_merges_variable_slot(self, tree, add_lines):
        add_lines(tree, ["user bob login", "user alice login"])

        user_ids = list(tree.children(tree.root))
        assert len(user_ids) == 1
        user = tree[user_ids[0]]
        assert [wi.word for wi in user.values] == ["user"]
        assert user.values[0].occurs == 2

        slot_ids = list(tree.children(user_ids[0]))
        assert len(slot_ids) == 1
        slot = tree[slot_ids[0]]
        assert [wi.word for wi in slot.values] == ["bob", "alice"]

        login = tree[slot.child]
        assert login.first_word == "login"
        assert login.values[0].occurs == 2
        assert login.terminal_count == 2
        assert login.sibling is None
        assert tree.node_count == 4

    def test_different_follow_up_creates_sibling(self, tree, add_lines):
        add_lines(tree, ["user bob login", "user bob logout"])

        bob_id = next(tree.children(tree[tree.root].child))
        alternatives = [tree[n].first_word for n in tree.children(bob_id)]
        assert alternatives == ["login", "logout"]

    def test_exact_match_found_in_later_sibling(self, tree):
        a = tree.add_to_level(tree.root, WordInfo("a"))
        b = tree.add_to_level(tree.root, WordInfo("b"))
        again = tree.add_to_level(tree.root, WordInfo("b"))
        assert again == b
        assert tree[a].sibling == b
        assert tree[b].values[0].occurs == 2

    def test_lookahead_without_matching_child_creates_node(self, tree):
        first = tree.add_to_level(tree.root, WordInfo("x"), WordInfo("y"))
        second = tree.add_to_level(tree.root, WordInfo("z"), WordInfo("y"))
        # x has no child yet, so z cannot join its slot
        assert first != second
        assert tree[first].sibling == second

    def test_terminal_counts(self, tree, add_lines):
        add_lines(tree, ["a", "a b", "a b"])
        a = tree[tree[tree.root].child]
        b = tree[a.child]
        assert a.terminal_count == 1
        assert b.terminal_count == 2

    def test_empty_line_terminates_at_root(self, tree):
        assert tree.add_line([]) == tree.root
        assert tree[tree.root].terminal_count == 1

    def test_stacked_mask_is_three_insertions(self, tree):
        source = TokenSource(preprocess_line("net 10.0.0.1/24"), WordStack())
        tree.add_line(source)
        assert path_words(tree) == ["net", "%ipv4%", "/", "%posint%"]

    def test_parent_links(self, tree, add_lines):
        add_lines(tree, ["a b"])
        a_id = tree[tree.root].child
        b_id = tree[a_id].child
        assert tree[a_id].parent == tree.root
        assert tree[b_id].parent == a_id

    def test_deleted_node_is_gone(self, tree):
        node_id = tree.add_to_level(tree.root, WordInfo("a"))
        tree[tree.root].child = None
        tree.delete_node(node_id)
        with pytest.raises(KeyError):
            tree.node(node_id)
        assert tree.node_count == 1


class TestDeterminism:
    """Test that line order only affects sibling order"""

    LINES = [
        "a b c",
        "a b d",
        "x y",
        "x y",
        "start 42 stop",
        "q",
    ]

    def test_shuffled_input_gives_same_tree(self, add_lines):
        reference = add_lines(PatternTree(), self.LINES)
        expected = canonical(reference, reference[reference.root].child)

        rng = random.Random(7)
        for _ in range(5):
            lines = list(self.LINES)
            rng.shuffle(lines)
            tree = add_lines(PatternTree(), lines)
            assert canonical(tree, tree[tree.root].child) == expected

    def test_walk_is_preorder(self, add_lines):
        tree = add_lines(PatternTree(), ["a b", "c"])
        visited = [(level, tree[node_id].first_word) for level, node_id in tree.walk()]
        assert visited == [(0, ROOT_WORD), (1, "a"), (2, "b"), (1, "c")]
