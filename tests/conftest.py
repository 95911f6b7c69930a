"""Shared fixtures for component-release tests"""

from pathlib import Path
from typing import Dict, Optional

import pytest

from component_release import api
from component_release.constants import ENV_REGISTRY_PATH, ENV_WORKSPACE_ROOT
from component_release.core import Workspace
from component_release.models import RegistryTarget
from component_release.registry import MemoryRegistry


def write_files(root: Path, files: Dict[str, str]) -> None:
    """Write text files below ``root``"""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep environment overrides and shared registries out of the tests"""
    monkeypatch.delenv(ENV_WORKSPACE_ROOT, raising=False)
    monkeypatch.delenv(ENV_REGISTRY_PATH, raising=False)
    MemoryRegistry.reset_shared()
    yield
    MemoryRegistry.reset_shared()


@pytest.fixture
def make_workspace(tmp_path):
    """Factory creating a workspace with components on disk

    ``components`` maps a component name to its files; ``index.js`` is the
    main file. Without ``registry_path`` the workspace publishes to the
    shared in-memory registry, so several workspaces see the same packages.
    """
    def factory(name: str = "ws",
                scope: Optional[str] = "acme",
                owner: Optional[str] = None,
                template: Optional[str] = None,
                auto_publish: bool = False,
                registry_path: Optional[Path] = None,
                components: Optional[Dict[str, Dict[str, str]]] = None) -> Workspace:
        root = tmp_path / name
        workspace = api.init(
            root,
            default_scope=scope,
            owner=owner,
            remote_scope_path=str(tmp_path / f"{name}-remote"),
            registry_path=str(registry_path) if registry_path else None,
        )

        for component_name, files in (components or {}).items():
            write_files(root / component_name, files)
            workspace.add_component(component_name)

        workspace.config.package_name_template = template
        workspace.config.auto_publish = auto_publish
        if registry_path is None:
            workspace.config.registry = RegistryTarget(type="memory")
        workspace.save_config()

        # Reload so plugins follow the saved configuration
        return Workspace.load(root)

    return factory


@pytest.fixture
def simple_workspace(make_workspace):
    """Workspace ``acme`` with one component ``comp1`` owned by ``@ci``"""
    return make_workspace(
        owner="@ci",
        components={"comp1": {"index.js": "module.exports = () => 'comp1';\n"}},
    )


@pytest.fixture
def chain_workspace(make_workspace):
    """Three components: comp3 requires comp2, which requires comp1"""
    return make_workspace(
        owner="@ci",
        components={
            "comp1": {"index.js": "module.exports = () => 'comp1';\n"},
            "comp2": {"index.js": "const c1 = require('@ci/acme.comp1');\nmodule.exports = () => c1() + ' comp2';\n"},
            "comp3": {"index.js": "const c2 = require('@ci/acme.comp2');\nmodule.exports = () => c2() + ' comp3';\n"},
        },
    )
