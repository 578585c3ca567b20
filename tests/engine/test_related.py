import logging

from pyroost.engine.nodelist import NodeList
from pyroost.test_utils.helpers import make_node, make_root


def test_related_by_name(ara, sample_root):
    teams = ara.related("team")

    assert isinstance(teams, NodeList)
    assert teams.identifiers == ["teams/core"]
    assert teams[0] is sample_root.node("teams/core")
    assert teams[0].is_loaded


def test_related_nodes_are_deduplicated_in_order(sample_root):
    core = sample_root.node("teams/core")

    members = core.related("members")

    assert members.identifiers == ["people/ara", "people/mo"]
    assert members[0] is sample_root.node("people/ara")


def test_related_without_names_returns_everything(sample_root):
    assert sample_root.node("teams/core").related().identifiers == ["people/ara", "people/mo"]


def test_related_filtered_with_where(sample_root):
    core = sample_root.node("teams/core")

    writers = core.related(where=lambda node: node.get("role") == "writer")

    assert writers.identifiers == ["people/mo"]


def test_no_relationships(sample_root):
    mo = sample_root.node("people/mo")

    assert mo.related() == []
    assert sample_root.node("people/ara").related("nope") == []


def test_relationship_named_after_type(content_dir):
    make_node(content_dir, "people/mo", {"attributes.yml": {"name": "Mo"}})
    make_node(content_dir, "people/ara", {"attributes.yml": {"related": {"people": "mo"}}})

    ara = make_root(content_dir).node("people/ara")

    assert ara.related("people").identifiers == ["people/mo"]


def test_unknown_related_nodes_are_skipped(content_dir, caplog):
    caplog.set_level(logging.WARNING, logger="pyroost.engine.node")
    make_node(content_dir, "people/mo", {"attributes.yml": {"name": "Mo"}})
    make_node(content_dir, "people/ara", {"attributes.yml": {"related": {"friends": {"people": ["ghost", "mo"]}}}})

    ara = make_root(content_dir).node("people/ara")

    assert ara.related("friends").identifiers == ["people/mo"]
    assert "people/ghost" in caplog.text


def test_non_mapping_related_is_ignored(content_dir, caplog):
    caplog.set_level(logging.WARNING, logger="pyroost.engine.node")
    make_node(content_dir, "people/ara", {"attributes.yml": {"related": ["mo"]}})

    ara = make_root(content_dir).node("people/ara")

    assert ara.related() == []
    assert "non-mapping" in caplog.text


def test_mutually_related_nodes(content_dir):
    make_node(content_dir, "people/ara", {"attributes.yml": {"related": {"team": {"teams": "core"}}}})
    make_node(content_dir, "teams/core", {"attributes.yml": {"related": {"lead": {"people": "ara"}}}})
    root = make_root(content_dir)
    ara = root.node("people/ara")

    core = ara.related("team")[0]

    assert core.related("lead")[0] is ara
