"""Tests for dependency discovery"""

import json

import pytest

from component_release import api
from component_release.api.exceptions import CyclicDependencyError
from component_release.core.dependency_grapher import DependencyGrapher, extract_specifiers
from component_release.models import ComponentId, ComponentRef

from .conftest import write_files


def test_extract_specifiers():
    source = """
    const a = require('@ci/acme.comp1');
    import b from "lib-b";
    import { c } from 'lib-c/sub';
    export * from 'lib-d';
    import 'side-effect';
    const e = await import('lazy-e');
    const local = require('./local');
    const again = require('@ci/acme.comp1');
    """
    assert extract_specifiers(source) == [
        "@ci/acme.comp1", "lazy-e", "lib-b", "lib-c/sub", "lib-d", "side-effect",
    ]
    assert "./local" not in extract_specifiers(source)


def test_direct_dependencies(chain_workspace):
    comp2 = chain_workspace.get_id("comp2")
    deps = chain_workspace.grapher.compute_dependencies(comp2)

    assert [ref.id for ref in deps] == [ComponentId(name="comp1", scope="acme")]
    assert deps[0].version is None
    assert deps[0].package_name == "@ci/acme.comp1"


def test_dependency_version_follows_latest_tag(chain_workspace):
    api.tag(chain_workspace, ["comp1"])
    deps = chain_workspace.grapher.compute_dependencies(chain_workspace.get_id("comp2"))
    assert [str(ref) for ref in deps] == ["acme/comp1@0.0.1"]


def test_topological_order(chain_workspace):
    ids = chain_workspace.component_ids()
    order = chain_workspace.grapher.topological_order(reversed(ids))
    assert [cid.name for cid in order] == ["comp1", "comp2", "comp3"]


def test_transitive_dependencies(chain_workspace):
    refs = chain_workspace.grapher.transitive_dependencies(chain_workspace.get_id("comp3"))
    assert [ref.id.name for ref in refs] == ["comp1", "comp2"]


def test_cycle_is_reported(make_workspace):
    workspace = make_workspace(components={
        "a": {"index.js": "require('acme.b');\n"},
        "b": {"index.js": "require('acme.a');\n"},
    })

    with pytest.raises(CyclicDependencyError) as exc_info:
        workspace.grapher.topological_order(workspace.component_ids())
    assert exc_info.value.cycle[0] == exc_info.value.cycle[-1]

    with pytest.raises(CyclicDependencyError):
        api.tag(workspace)


def test_find_cycle_none_for_dag():
    a, b = ComponentId("a"), ComponentId("b")
    graph = {a: [ComponentRef(id=b)], b: []}
    assert DependencyGrapher.find_cycle(graph) is None


def test_installed_package_is_resolved(make_workspace):
    workspace = make_workspace(scope=None, components={
        "app": {"index.js": "const button = require('react.x7k2.ui.button');\n"},
    })
    root = workspace.paths.workspace_root
    manifest = {
        "name": "react.x7k2.ui.button",
        "version": "0.0.1",
        "main": "dist/index.js",
        "componentId": {"scope": None, "name": "ui/button", "version": "0.0.1"},
    }
    write_files(root / "node_modules" / "react.x7k2.ui.button", {"package.json": json.dumps(manifest)})

    assert api.dependencies(workspace, "app") == ["ui/button@0.0.1"]


def test_unrelated_installed_packages_are_ignored(make_workspace):
    workspace = make_workspace(components={"app": {"index.js": "require('left-pad');\n"}})
    write_files(
        workspace.paths.workspace_root / "node_modules" / "left-pad",
        {"package.json": json.dumps({"name": "left-pad", "version": "1.3.0"})},
    )
    assert api.dependencies(workspace, "app") == []
