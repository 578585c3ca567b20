import pytest
from pyroost.engine.nodelist import NodeList
from pyroost.interfaces.exceptions import NotFoundError
from pyroost.test_utils.helpers import make_node, make_root


def test_scan_finds_type_id_directories(sample_root):
    assert sample_root.nodes.identifiers == ["people/ara", "people/mo", "teams/core"]
    assert sample_root.nodes.types == ["people", "teams"]
    assert sample_root.nodes.of_type("people").identifiers == ["people/ara", "people/mo"]


def test_lookup_shares_instances(sample_root):
    assert sample_root.node("people/ara") is sample_root.node("/people/ara/")


def test_unknown_node(sample_root):
    with pytest.raises(NotFoundError, match="people/ghost"):
        sample_root.node("people/ghost")


def test_hidden_and_plain_files_are_not_nodes(content_dir):
    make_node(content_dir, "people/ara")
    make_node(content_dir, ".roost/cache")
    make_node(content_dir, "people/.draft")
    (content_dir / "README.md").write_text("hi", "utf-8")
    (content_dir / "people" / "notes.txt").write_text("hi", "utf-8")

    assert make_root(content_dir).nodes.identifiers == ["people/ara"]


def test_refresh_rescans(content_dir):
    make_node(content_dir, "people/ara")
    root = make_root(content_dir)
    assert len(root.nodes) == 1

    make_node(content_dir, "people/mo")
    assert len(root.nodes) == 1
    assert root.refresh().identifiers == ["people/ara", "people/mo"]


def test_missing_root_has_no_nodes(tmp_path):
    assert make_root(tmp_path / "nowhere").nodes == []


def test_nodelist_add_is_identifier_unique(sample_root):
    ara = sample_root.node("people/ara")
    nodes = NodeList(sample_root)

    assert nodes.add(ara) is True
    assert nodes.add(ara) is False
    assert nodes.get("people/ara") is ara
    assert nodes.get("people/mo") is None
    assert len(nodes) == 1
