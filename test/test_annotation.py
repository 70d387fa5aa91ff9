import random

from random_trees import random_records

from tcfinder.annotation import annotate, unmatched_targets
from tcfinder.builder import build_tree


def test_leaf_counts_itself(cherry_records):
    tree, unmatched = annotate(build_tree(cherry_records), {"A"})

    assert tree[2].leaf_count == 1
    assert tree[2].target_count == 1
    assert tree[3].leaf_count == 1
    assert tree[3].target_count == 0
    assert tree.root_node.leaf_count == 2
    assert tree.root_node.target_count == 1
    assert unmatched == 0


def test_internal_sums_children(chain_records):
    tree, _ = annotate(build_tree(chain_records), {"Y", "Z"})

    assert (tree[2].leaf_count, tree[2].target_count) == (2, 2)
    assert (tree[1].leaf_count, tree[1].target_count) == (2, 2)


def test_labels_match_exactly(cherry_records):
    tree, unmatched = annotate(build_tree(cherry_records), {"a", "B "})
    assert tree.root_node.target_count == 0
    assert unmatched == 2


def test_internal_labels_are_not_targets(chain_records):
    tree, unmatched = annotate(build_tree(chain_records), {"X"})
    assert tree.root_node.target_count == 0
    assert unmatched == 1


def test_unmatched_targets_listed(cherry_records):
    tree = build_tree(cherry_records)
    tree, unmatched = annotate(tree, {"A", "Q", "C"})
    assert unmatched == 2
    assert unmatched_targets(tree, {"A", "Q", "C"}) == ["C", "Q"]


def test_empty_target_set(cherry_records):
    tree, unmatched = annotate(build_tree(cherry_records), set())
    assert tree.root_node.target_count == 0
    assert unmatched == 0
    assert all(node.is_annotated for node in tree)


def test_root_totals_on_random_trees():
    for seed in range(20):
        records = random_records(30, seed)
        rng = random.Random(seed)
        targets = {f"t{i}" for i in rng.sample(range(1, 31), 12)}
        targets.add("absent")

        tree, unmatched = annotate(build_tree(records), targets)
        leaves = tree.leaves()

        assert tree.root_node.leaf_count == len(leaves) == 30
        assert tree.root_node.target_count == sum(
            1 for leaf in leaves if leaf.label in targets
        )
        assert unmatched == 1
        for node in tree:
            assert 0 <= node.target_count <= node.leaf_count
