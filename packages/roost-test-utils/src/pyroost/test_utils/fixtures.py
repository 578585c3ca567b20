from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pyroost.engine.root import Root
from typer.testing import CliRunner

from .helpers import PNG_BYTES, make_node, make_root

# --- Global & Core Fixtures ---


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root_dir = tmp_path / "content"
    root_dir.mkdir()
    return root_dir


@pytest.fixture
def sample_content(content_dir: Path) -> Path:
    """
    people/ara  - sidecar, an html bio with an asset reference, a markdown
                  page, nested files and two assets
    people/mo   - sidecar only
    teams/core  - related to both people (ara listed twice)
    """
    make_node(
        content_dir,
        "people/ara",
        {
            "attributes.yml": {"name": "Ara", "role": "editor", "related": {"team": {"teams": "core"}}},
            "bio.html": '<p>{{ node.get("name") }} writes.</p><img src="assets/profile-pic.jpg"/>',
            "about.md": "# About {{ attributes.name }}\n\nSee ![glacier](assets/images/glacier.png)\n",
            "links/home.txt": "https://ara.example.com",
            "assets/profile-pic.jpg": PNG_BYTES,
            "assets/images/glacier.png": PNG_BYTES,
        },
    )
    make_node(content_dir, "people/mo", {"attributes.yml": {"name": "Mo", "role": "writer"}})
    make_node(
        content_dir,
        "teams/core",
        {"attributes.yml": {"name": "Core", "related": {"members": {"people": ["ara", "mo", "ara"]}}}},
    )
    return content_dir


@pytest.fixture
def sample_root(sample_content: Path) -> Root:
    return make_root(sample_content)


@pytest.fixture
def ara(sample_root: Root):
    return sample_root.node("people/ara")


# --- CLI Layer Fixtures ---


@pytest.fixture
def mock_bus(monkeypatch):
    m_bus = MagicMock()
    m_bus.get.side_effect = lambda msg_id, **kwargs: msg_id

    patch_targets = [
        "pyroost.cli.main.bus",
        "pyroost.cli.commands.helpers.bus",
        "pyroost.cli.commands.query.bus",
        "pyroost.cli.commands.assets.bus",
        "pyroost.cli.commands.cache.bus",
    ]
    for target in patch_targets:
        monkeypatch.setattr(target, m_bus, raising=False)
    return m_bus
