import pytest
from pyroost.engine.attributes import AttributeMap
from pyroost.engine.loader import AttributeLoader, key_for, load_sidecar
from pyroost.engine.promise import Promise
from pyroost.interfaces.exceptions import MalformedInputError
from pyroost.test_utils.helpers import PNG_BYTES, make_node, make_root


def _node(content_dir, files):
    make_node(content_dir, "people/ara", files)
    return make_root(content_dir).node("people/ara")


@pytest.mark.parametrize(
    "rel, key",
    [
        ("bio.html", ("bio",)),
        ("about.md", ("about",)),
        ("posts/first.html.md", ("posts", "first")),
        ("links/home.txt", ("links", "home")),
        ("README", ("README",)),
    ],
)
def test_key_for(rel, key):
    assert key_for(rel) == key


def test_sidecar_scalar_root_goes_under_fallback_key(tmp_path):
    sidecar = tmp_path / "attributes.yml"
    sidecar.write_text("- a\n- b\n", "utf-8")

    assert load_sidecar(sidecar) == {"_": ["a", "b"]}


def test_missing_or_empty_sidecar_is_empty(tmp_path):
    assert load_sidecar(tmp_path / "attributes.yml") == {}

    empty = tmp_path / "attributes.yml"
    empty.write_text("", "utf-8")
    assert load_sidecar(empty) == {}


def test_invalid_sidecar_yaml_is_malformed_input(tmp_path):
    sidecar = tmp_path / "attributes.yml"
    sidecar.write_text("name: [unclosed\n", "utf-8")

    with pytest.raises(MalformedInputError, match="could not be parsed"):
        load_sidecar(sidecar)


def test_reserved_assets_key_fails_before_any_render(content_dir):
    node = _node(content_dir, {"attributes.yml": {"assets": ["x.png"]}, "bio.html": "<p/>"})
    loader = AttributeLoader(node)

    with pytest.raises(MalformedInputError, match="assets"):
        loader.load()

    assert loader.context.promises == []


def test_attribute_files_skip_sidecar_hidden_files_and_assets(content_dir):
    node = _node(
        content_dir,
        {
            "attributes.yml": {"name": "Ara"},
            ".DS_Store": "junk",
            "bio.html": "<p/>",
            "links/home.txt": "https://ara.example.com",
            ".cache/render.txt": "stale",
            "posts/.draft.md": "wip",
            "assets/logo.png": PNG_BYTES,
        },
    )

    rels = [path.relative_to(node.path).as_posix() for path in AttributeLoader(node).attribute_files()]

    assert rels == ["bio.html", "links/home.txt"]


def test_load_schedules_promises_without_rendering(content_dir, monkeypatch):
    node = _node(
        content_dir,
        {"attributes.yml": {"name": "Ara", "links": {"twitter": "@ara"}}, "bio.html": "<p/>", "links/home.txt": "h"},
    )
    calls = []
    monkeypatch.setattr(node.config.renderer, "render", lambda path, node: calls.append(path) or "rendered")

    loader = AttributeLoader(node)
    attributes = loader.load()

    assert isinstance(attributes, AttributeMap)
    assert calls == []
    assert isinstance(attributes.raw("bio"), Promise)
    assert loader.context.keys == [("bio",), ("links", "home")]

    # sidecar and files merge into one nested mapping
    assert attributes.get("links.twitter") == "@ara"
    assert attributes.get("links.home") == "rendered"
    assert len(calls) == 1


def test_file_overrides_sidecar_value_of_same_key(content_dir):
    node = _node(content_dir, {"attributes.yml": {"bio": "short"}, "bio.txt": "long"})

    attributes = AttributeLoader(node).load()

    assert attributes["bio"] == "long"


def test_load_into_existing_map(content_dir):
    node = _node(content_dir, {"attributes.yml": {"name": "Ara"}})
    target = AttributeMap()

    result = AttributeLoader(node).load(target)

    assert result is target
    assert target.to_dict() == {"name": "Ara"}


def test_promises_remember_their_source_file(content_dir):
    node = _node(content_dir, {"bio.html": "<p/>", "posts/first.html.md": "# hi"})

    loader = AttributeLoader(node)
    loader.load()

    assert [(p.key, p.source) for p in loader.context.promises] == [
        (("bio",), "bio.html"),
        (("posts", "first"), "posts/first.html.md"),
    ]


def test_restore_schedules_fresh_promises(content_dir):
    node = _node(content_dir, {"attributes.yml": {"name": "Ara"}, "bio.html": "<p>{{ node.id }}</p>"})
    cached = AttributeLoader(node).load()
    assert cached["bio"] == "<p>ara</p>"

    loader = AttributeLoader(node)
    restored = loader.restore(cached)

    fresh = restored.raw("bio")
    assert isinstance(fresh, Promise)
    assert fresh is not cached.raw("bio")
    assert not fresh.resolved
    assert fresh.context is loader.context
    assert restored["name"] == "Ara"
    assert restored["bio"] == "<p>ara</p>"


def test_restore_rejects_promises_without_source(content_dir):
    node = _node(content_dir, {})
    cached = AttributeMap()
    cached.set("bio", AttributeLoader(node).context.promise(["bio"], lambda: "x"))

    with pytest.raises(MalformedInputError, match="no source file"):
        AttributeLoader(node).restore(cached)
