"""Tests for exporting to the remote scope"""

import pytest

from component_release import api
from component_release.api.exceptions import ConfigError, PartialFailure
from component_release.constants import Stage
from component_release.core import Workspace
from component_release.plugins import HookPoint, Plugin, PluginContext, PluginInfo
from component_release.plugins.builtin import AutoPublishPlugin
from component_release.registry import MemoryRegistry
from component_release.utils.async_utils import run_async


class FailingPlugin(Plugin):

    def get_info(self):
        return PluginInfo(name="failing", version="1.0.0", description="test",
                          hook_points=[HookPoint.POST_EXPORT])

    async def on_export_post(self, context):
        raise RuntimeError("boom")


def share_remote(workspace, other):
    """Point ``workspace`` at the remote scope of ``other`` and reload it"""
    workspace.config.remote_scope.path = other.config.remote_scope.path
    workspace.save_config()
    return Workspace.load(workspace.paths.workspace_root)


def test_requires_remote_scope(tmp_path):
    with pytest.raises(ConfigError, match="No remote scope"):
        api.export(Workspace(tmp_path))


def test_export_staged(chain_workspace):
    api.tag(chain_workspace, ["comp1"])
    result = api.export(chain_workspace)

    assert result.exported == {"acme/comp1": ["0.0.1"]}
    assert set(result.skipped) == {"acme/comp2", "acme/comp3"}
    assert chain_workspace.remote_scope.versions(chain_workspace.get_id("comp1")) == ["0.0.1"]


def test_export_is_persisted(simple_workspace):
    api.tag(simple_workspace)
    api.export(simple_workspace)

    reloaded = Workspace.load(simple_workspace.paths.workspace_root)
    comp1 = reloaded.get_id("comp1")
    assert reloaded.lifecycle.stage_of(comp1) == Stage.EXPORTED
    tag = reloaded.remote_scope.latest_tag(comp1)
    assert reloaded.remote_scope.read_files(tag) == {"index.js": b"module.exports = () => 'comp1';\n"}


def test_export_every_unexported_tag(simple_workspace):
    comp1 = simple_workspace.get_id("comp1")
    api.tag(simple_workspace)
    (simple_workspace.component_dir(comp1) / "index.js").write_text("// two\n")
    api.tag(simple_workspace)

    result = api.export(simple_workspace)
    assert result.exported == {"acme/comp1": ["0.0.1", "0.0.2"]}


def test_nothing_left_to_export(simple_workspace):
    api.tag(simple_workspace)
    api.export(simple_workspace)

    result = api.export(simple_workspace)
    assert result.exported == {}
    assert "acme/comp1" in result.skipped


def test_dependency_must_be_exported(chain_workspace):
    api.tag(chain_workspace)

    with pytest.raises(PartialFailure) as exc_info:
        api.export(chain_workspace, ["comp2"])

    assert exc_info.value.failures["acme/comp2"] == (
        "unable to export acme/comp2, the following dependencies are not exported: acme/comp1@0.0.1"
    )
    assert chain_workspace.remote_scope.component_keys() == []


def test_dependencies_exported_together(chain_workspace):
    api.tag(chain_workspace)
    result = api.export(chain_workspace, ["comp3", "comp2", "comp1"])
    assert list(result.exported) == ["acme/comp1", "acme/comp2", "acme/comp3"]


def test_exported_version_is_immutable(make_workspace):
    first = make_workspace(name="first", components={"comp1": {"index.js": "// first\n"}})
    api.tag(first)
    api.export(first)

    second = make_workspace(name="second", components={"comp1": {"index.js": "// second\n"}})
    second = share_remote(second, first)
    api.tag(second)

    with pytest.raises(PartialFailure) as exc_info:
        api.export(second)
    assert "already exported with different content" in exc_info.value.failures["acme/comp1"]


def test_export_must_increase_remote_version(make_workspace):
    first = make_workspace(name="first", components={"comp1": {"index.js": "// first\n"}})
    api.tag(first, version="1.0.0")
    api.export(first)

    second = make_workspace(name="second", components={"comp1": {"index.js": "// second\n"}})
    second = share_remote(second, first)
    api.tag(second, version="0.5.0")

    with pytest.raises(PartialFailure) as exc_info:
        api.export(second)
    assert "not greater than the exported version 1.0.0" in exc_info.value.failures["acme/comp1"]


def test_auto_publish_after_export(make_workspace):
    workspace = make_workspace(
        owner="@ci",
        auto_publish=True,
        components={
            "comp1": {"index.js": "module.exports = () => 'comp1';\n"},
            "comp2": {"index.js": "require('@ci/acme.comp1');\n"},
        },
    )
    api.tag(workspace)
    result = api.export(workspace)

    assert result.published == ["@ci/acme.comp1@0.0.1", "@ci/acme.comp2@0.0.1"]
    assert result.warnings == []
    assert len(MemoryRegistry.shared("default")) == 2

    records = workspace.local_scope.published("acme/comp1@0.0.1")
    assert records == {"default": "@ci/acme.comp1@0.0.1"}


def test_auto_publish_failure_is_a_warning(make_workspace):
    workspace = make_workspace(
        template="invalid/name/{name}",
        auto_publish=True,
        components={"comp1": {"index.js": "module.exports = 1;\n"}},
    )
    api.tag(workspace)
    result = api.export(workspace)

    assert result.exported == {"acme/comp1": ["0.0.1"]}
    assert result.published == []
    assert result.warnings == [
        'auto-publish of acme/comp1 failed: registry error: Invalid name: "invalid/name/comp1"'
    ]


def test_auto_publish_uses_exported_versions(simple_workspace):
    api.tag(simple_workspace)
    api.export(simple_workspace)
    (simple_workspace.paths.workspace_root / "comp1" / "index.js").write_text("module.exports = 2;\n")
    api.tag(simple_workspace)

    context = PluginContext(hook_point=HookPoint.POST_EXPORT, operation="export",
                            data={"versions": {"acme/comp1": "0.0.1"}})
    run_async(AutoPublishPlugin(simple_workspace).on_export_post(context))

    assert context.data["published"] == ["@ci/acme.comp1@0.0.1"]
    assert context.warnings == []
    assert not run_async(MemoryRegistry.shared("default").exists("@ci/acme.comp1", "0.0.2"))


def test_hook_error_is_a_warning(simple_workspace):
    simple_workspace.plugin_manager.register(FailingPlugin())
    api.tag(simple_workspace)

    result = api.export(simple_workspace)

    assert result.exported == {"acme/comp1": ["0.0.1"]}
    assert result.warnings == ["Plugin failing error: boom"]
