import pytest
import yaml
from pyroost.application.factory import create_config, create_root
from pyroost.engine.cache import MemoryCache
from pyroost.engine.config import ConfigManager
from pyroost.interfaces.exceptions import MalformedInputError
from pyroost.test_utils.helpers import make_node, write_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ROOST_URL", "ROOST_CACHE_READ", "ROOST_ROOT"):
        monkeypatch.delenv(name, raising=False)


def _write_config(root, data):
    return write_file(root / ".roost" / "config.yml", data)


def test_defaults_without_config_file(content_dir):
    manager = ConfigManager(content_dir)

    assert manager.user_config == {}
    assert manager.get("url") == "/"
    assert manager.get("cache.enabled") is True
    assert manager.get("cache.read") is False
    assert manager.get("missing.key", "fallback") == "fallback"


def test_config_file_overrides_defaults(content_dir):
    _write_config(content_dir, {"url": "https://file.example", "cache": {"read": True}})
    manager = ConfigManager(content_dir)

    assert manager.get("url") == "https://file.example"
    assert manager.get("cache.read") is True
    assert manager.get("cache.enabled") is True


def test_invalid_config_file(content_dir):
    _write_config(content_dir, "url: [oops\n")

    with pytest.raises(MalformedInputError, match="config.yml"):
        ConfigManager(content_dir)


def test_non_mapping_config_file_is_ignored(content_dir):
    _write_config(content_dir, "- a\n- b\n")

    assert ConfigManager(content_dir).user_config == {}


def test_set_and_save(content_dir):
    manager = ConfigManager(content_dir)
    manager.set("cache.enabled", False)
    manager.save()

    saved = yaml.safe_load((content_dir / ".roost" / "config.yml").read_text("utf-8"))
    assert saved == {"cache": {"enabled": False}}
    assert ConfigManager(content_dir).get("cache.enabled") is False


def test_create_config_defaults(content_dir):
    config = create_config(content_dir)

    assert config.root == content_dir.resolve()
    assert config.url == "/"
    assert isinstance(config.cache, MemoryCache)
    assert config.read_from_cache is False


def test_url_precedence(content_dir, monkeypatch):
    _write_config(content_dir, {"url": "https://file.example"})
    assert create_config(content_dir).url == "https://file.example"

    monkeypatch.setenv("ROOST_URL", "https://env.example")
    assert create_config(content_dir).url == "https://env.example"

    assert create_config(content_dir, url="https://arg.example").url == "https://arg.example"


def test_cache_read_precedence(content_dir, monkeypatch):
    _write_config(content_dir, {"cache": {"read": True}})
    assert create_config(content_dir).read_from_cache is True

    monkeypatch.setenv("ROOST_CACHE_READ", "no")
    assert create_config(content_dir).read_from_cache is False

    assert create_config(content_dir, read_from_cache=True).read_from_cache is True


def test_cache_can_be_disabled(content_dir):
    _write_config(content_dir, {"cache": {"enabled": False}})

    assert create_config(content_dir).cache is None


def test_nodes_load_without_a_cache(content_dir):
    _write_config(content_dir, {"cache": {"enabled": False}})
    make_node(content_dir, "people/ara", {"attributes.yml": {"name": "Ara"}})

    node = create_root(content_dir).node("people/ara")

    assert node.get("name") == "Ara"
    assert node.loaded_from == "disk"


def test_create_root_from_environment(content_dir, monkeypatch):
    make_node(content_dir, "people/ara")
    monkeypatch.setenv("ROOST_ROOT", str(content_dir))

    root = create_root()

    assert root.path == content_dir.resolve()
    assert root.nodes.identifiers == ["people/ara"]


def test_templates_can_include_files_from_the_root(content_dir):
    write_file(content_dir / "_partials" / "sig.html", "-- {{ node.id }}")
    make_node(content_dir, "people/ara", {"bio.html": '<p>hi</p>{% include "_partials/sig.html" %}'})

    node = create_root(content_dir).node("people/ara")

    assert node.get("bio") == "<p>hi</p>-- ara"


def test_memory_cache_size_from_config(content_dir):
    assert create_config(content_dir).cache.max_entries == 1024

    _write_config(content_dir, {"cache": {"max_entries": 8}})

    assert create_config(content_dir).cache.max_entries == 8
