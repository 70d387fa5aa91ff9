import pytest

from tcfinder.builder import build_tree
from tcfinder.exceptions import (
    CyclicTree,
    DanglingAncestor,
    InconsistentNodeType,
    InvalidNodeRecord,
    MalformedTree,
)
from tcfinder.models import NodeRecord, NodeType


def records(*rows):
    """Build mapping records from (node, ancestor, label, nodetype) tuples."""
    return [
        {"node": node, "ancestor": ancestor, "label": label, "nodetype": nodetype}
        for node, ancestor, label, nodetype in rows
    ]


def test_build_cherry(cherry_records):
    tree = build_tree(cherry_records)

    assert len(tree) == 3
    assert tree.root == 1
    assert tree.root_node.children == [2, 3]
    assert [leaf.label for leaf in tree.leaves()] == ["A", "B"]
    assert tree[2].ancestor == 1
    assert tree.root_node.is_root


def test_children_keep_input_order():
    tree = build_tree(
        records(
            (5, 1, "E", "tip"),
            (3, 1, "C", "tip"),
            (1, 0, None, "root"),
            (4, 1, "D", "tip"),
        )
    )
    assert tree.root_node.children == [5, 3, 4]
    assert [node.index for node in tree.traverse()] == [1, 5, 3, 4]


def test_build_from_mappings_coerces_values():
    tree = build_tree(
        records(
            ("1", "0", "", "root"),
            ("2", "1", "A", " TIP "),
            (3.0, 1, "B", "tip"),
        )
    )
    assert tree.root_node.label is None
    assert tree[2].nodetype is NodeType.TIP
    assert tree[3].label == "B"


@pytest.mark.parametrize("written", ["03", "+3", " 3"])
def test_index_strings_with_sign_or_padding(written):
    tree = build_tree(
        records(
            ("1", "0", None, "root"),
            ("2", "1", "A", "tip"),
            (written, "01", "B", "tip"),
        )
    )
    assert 3 in tree
    assert tree.root_node.children == [2, 3]


def test_single_tip_tree():
    tree = build_tree(records((1, 0, "A", "tip")))
    assert tree.root_node.is_leaf
    assert tree.leaf_labels() == ["A"]


def test_two_roots_is_malformed():
    with pytest.raises(MalformedTree, match="found 2"):
        build_tree(
            records(
                (1, 0, None, "root"),
                (2, 0, None, "internal"),
                (3, 1, "A", "tip"),
            )
        )


def test_no_root_is_malformed():
    with pytest.raises(MalformedTree, match="No root"):
        build_tree(records((1, 2, None, "internal"), (2, 1, "A", "tip")))


def test_empty_input_is_malformed():
    with pytest.raises(MalformedTree):
        build_tree([])


def test_duplicate_index_is_malformed():
    with pytest.raises(MalformedTree, match="Duplicate node index 2"):
        build_tree(
            records(
                (1, 0, None, "root"),
                (2, 1, "A", "tip"),
                (2, 1, "B", "tip"),
            )
        )


def test_root_tag_below_root_is_malformed():
    with pytest.raises(MalformedTree, match="tagged 'root'"):
        build_tree(
            records(
                (1, 0, None, "internal"),
                (2, 1, None, "root"),
                (3, 2, "A", "tip"),
            )
        )


def test_dangling_ancestor():
    with pytest.raises(DanglingAncestor) as excinfo:
        build_tree(
            records(
                (1, 0, None, "root"),
                (2, 1, "A", "tip"),
                (3, 99, "B", "tip"),
            )
        )
    assert excinfo.value.node == 3
    assert excinfo.value.ancestor == 99


def test_cycle_detected():
    with pytest.raises(CyclicTree):
        build_tree(
            records(
                (1, 0, None, "root"),
                (2, 1, "A", "tip"),
                (3, 4, None, "internal"),
                (4, 3, None, "internal"),
            )
        )


def test_self_loop_detected():
    with pytest.raises(CyclicTree) as excinfo:
        build_tree(
            records(
                (1, 0, None, "root"),
                (2, 1, "A", "tip"),
                (3, 3, "B", "tip"),
            )
        )
    assert excinfo.value.node == 3


def test_tip_with_children_strict():
    rows = records(
        (1, 0, None, "root"),
        (2, 1, "A", "tip"),
        (3, 2, "B", "tip"),
    )
    with pytest.raises(InconsistentNodeType) as excinfo:
        build_tree(rows, strict_node_types=True)
    assert excinfo.value.node == 2
    assert excinfo.value.nodetype == "tip"


def test_internal_without_children_strict():
    rows = records(
        (1, 0, None, "root"),
        (2, 1, "A", "tip"),
        (3, 1, None, "internal"),
    )
    with pytest.raises(InconsistentNodeType):
        build_tree(rows, strict_node_types=True)


def test_inconsistent_type_lenient_uses_structure():
    tree = build_tree(
        records(
            (1, 0, None, "root"),
            (2, 1, "A", "tip"),
            (3, 1, None, "internal"),
        )
    )
    assert tree[3].is_leaf
    assert len(tree.leaves()) == 2


def test_unknown_node_type():
    with pytest.raises(InvalidNodeRecord, match="Unknown node type"):
        build_tree(records((1, 0, None, "branch")))


def test_invalid_indices():
    with pytest.raises(InvalidNodeRecord):
        NodeRecord(0, 0)
    with pytest.raises(InvalidNodeRecord):
        NodeRecord(2, -1)
    with pytest.raises(InvalidNodeRecord, match="must be an integer"):
        build_tree(records(("one", 0, None, "root")))
    with pytest.raises(InvalidNodeRecord, match="must be an integer"):
        build_tree(records((1.5, 0, None, "root")))


def test_missing_key():
    with pytest.raises(InvalidNodeRecord, match="nodetype"):
        build_tree([{"node": 1, "ancestor": 0}])


def test_unsupported_record_type():
    with pytest.raises(InvalidNodeRecord):
        build_tree([(1, 0, None, "root")])


def test_deep_chain_builds_without_recursion():
    depth = 5000
    rows = [(1, 0, None, "root")]
    rows += [(i, i - 1, None, "internal") for i in range(2, depth)]
    rows += [(depth, depth - 1, "leaf", "tip")]
    tree = build_tree(records(*rows))

    assert len(tree) == depth
    assert tree.leaf_labels() == ["leaf"]
    assert len(tree.ancestors(depth)) == depth - 1
