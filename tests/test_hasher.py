"""Tests for canonical serialization, hashing and flattening."""

import hashlib

import pytest

from constants import Constants
from errors import UnsupportedAlgorithmError
from resolution.hasher import hash_tree, serialize_tree, tree_to_flat_structure
from versioning.models import DependencyNode


def node(name, version, *children):
    return DependencyNode(name, version, {c.name: c for c in children})


def depth_of_line(line):
    return (len(line) - len(line.lstrip(" "))) // 2


def test_serialize_single_dependency():
    tree = node("A", "1.0.0", node("B", "1.1.0"))
    assert serialize_tree(tree) == "A@1.0.0\n  B@1.1.0"


def test_serialize_sorts_children_by_name_not_insertion_order():
    tree = DependencyNode("root", "1.0.0", {
        "zeta": node("zeta", "1.0.0"),
        "alpha": node("alpha", "2.0.0", node("gamma", "0.1.0")),
    })
    assert serialize_tree(tree) == (
        "root@1.0.0\n"
        "  alpha@2.0.0\n"
        "    gamma@0.1.0\n"
        "  zeta@1.0.0"
    )


def test_serialize_has_no_trailing_newline():
    assert not serialize_tree(node("A", "1.0.0")).endswith("\n")


def test_line_count_and_indentation_match_tree_shape():
    tree = node("a", "1.0.0",
                node("b", "1.0.0", node("c", "1.0.0"), node("d", "1.0.0")),
                node("e", "1.0.0"))
    lines = serialize_tree(tree).split("\n")
    assert len(lines) == tree.node_count() == 5
    assert [depth_of_line(line) for line in lines] == [0, 1, 2, 2, 1]


def test_hash_is_independent_of_insertion_order():
    b, c = node("b", "1.0.0"), node("c", "2.0.0", node("d", "3.0.0"))
    first = DependencyNode("a", "1.0.0", {"b": b, "c": c})
    second = DependencyNode("a", "1.0.0", {"c": c, "b": b})
    assert hash_tree(first) == hash_tree(second)
    assert hash_tree(first, "sha512") == hash_tree(second, "sha512")


def test_hash_matches_digest_of_serialization():
    tree = node("A", "1.0.0", node("B", "1.0.0"))
    expected = hashlib.sha256("A@1.0.0\n  B@1.0.0".encode("utf-8")).hexdigest()
    assert hash_tree(tree) == expected
    assert hash_tree(tree, "sha256") == expected


def test_sha512_digest_is_lowercase_hex():
    digest = hash_tree(node("A", "1.0.0"), "sha512")
    assert len(digest) == 128
    assert digest == digest.lower()
    assert digest == hashlib.sha512(b"A@1.0.0").hexdigest()


@pytest.mark.parametrize("algorithm", ["md5", "sha1", "SHA-256", ""])
def test_unsupported_algorithm_raises(algorithm):
    with pytest.raises(UnsupportedAlgorithmError):
        hash_tree(node("A", "1.0.0"), algorithm)


def test_different_versions_hash_differently():
    assert hash_tree(node("A", "1.0.0", node("B", "1.0.0"))) != \
        hash_tree(node("A", "1.0.0", node("B", "1.1.0")))


def test_flatten_records_every_package():
    tree = node("A", "1.0.0", node("B", "1.1.0", node("C", "2.0.0")))
    assert tree_to_flat_structure(tree) == {"A": "1.0.0", "B": "1.1.0", "C": "2.0.0"}


def test_flatten_keeps_last_visited_version():
    # pre-order visits x's child "shared@1.0.0" before y's "shared@2.0.0"
    tree = DependencyNode("root", "1.0.0", {
        "x": node("x", "1.0.0", node("shared", "1.0.0")),
        "y": node("y", "1.0.0", node("shared", "2.0.0")),
    })
    assert tree_to_flat_structure(tree)["shared"] == "2.0.0"


def test_default_algorithm_read_at_call_time(monkeypatch):
    monkeypatch.setattr(Constants, "DEFAULT_ALGORITHM", "sha512")
    assert hash_tree(node("A", "1.0.0")) == hashlib.sha512(b"A@1.0.0").hexdigest()
