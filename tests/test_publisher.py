"""Tests for publishing to the registry"""

import pytest

from component_release import api
from component_release.api import Publisher
from component_release.api.exceptions import NotExportedError, PartialFailure
from component_release.core.builder import read_tarball
from component_release.models import PublishRequest
from component_release.plugins import HookPoint, Plugin, PluginInfo
from component_release.registry import MemoryRegistry
from component_release.utils.async_utils import run_async


def registry():
    return MemoryRegistry.shared("default")


def test_publish_requires_export(simple_workspace):
    api.tag(simple_workspace)

    with pytest.raises(NotExportedError) as exc_info:
        api.publish(simple_workspace, ["comp1"])

    assert str(exc_info.value) == (
        "unable to publish the following component(s), "
        "please make sure they are exported: comp1"
    )
    assert len(registry()) == 0


def test_dry_run_renders_package_line(make_workspace):
    workspace = make_workspace(
        scope="remote",
        owner="@scope",
        components={"comp1": {"index.js": "module.exports = 1;\n"}},
    )
    api.tag(workspace)

    first = api.publish(workspace, ["comp1"], dry_run=True)
    second = api.publish(workspace, ["comp1"], dry_run=True)

    assert first.output == "+ @scope/remote.comp1@0.0.1"
    assert second.output == first.output
    assert len(registry()) == 0
    assert workspace.local_scope.published("remote/comp1@0.0.1") == {}


def test_dry_run_needs_a_tag(simple_workspace):
    with pytest.raises(NotExportedError):
        api.publish(simple_workspace, ["comp1"], dry_run=True)


def test_publish_exported(simple_workspace):
    api.tag(simple_workspace)
    api.export(simple_workspace)

    result = api.publish(simple_workspace)

    assert result.output == "+ @ci/acme.comp1@0.0.1"
    assert run_async(registry().exists("@ci/acme.comp1", "0.0.1"))


def test_published_manifest(chain_workspace):
    api.tag(chain_workspace)
    api.export(chain_workspace)
    api.publish(chain_workspace)

    artifact = run_async(registry().fetch("@ci/acme.comp2", "0.0.1"))
    manifest = artifact.manifest.to_dict()

    assert manifest["main"] == "dist/index.js"
    assert manifest["dependencies"] == {"@ci/acme.comp1": "0.0.1"}
    assert manifest["componentId"] == {"scope": "acme", "name": "comp2", "version": "0.0.1"}

    files = read_tarball(artifact.payload)
    assert sorted(files) == ["dist/index.js", "package.json"]


def test_allow_staged(simple_workspace):
    api.tag(simple_workspace)
    result = api.publish(simple_workspace, ["comp1"], allow_staged=True)
    assert result.output == "+ @ci/acme.comp1@0.0.1"

    artifact = run_async(registry().fetch("@ci/acme.comp1", "0.0.1"))
    assert artifact.manifest.component_id == {"scope": None, "name": "comp1", "version": "0.0.1"}


def test_invalid_name_surfaced_verbatim(make_workspace):
    workspace = make_workspace(
        template="invalid/name/{name}",
        components={"comp1": {"index.js": "module.exports = 1;\n"}},
    )
    api.tag(workspace)
    api.export(workspace)

    with pytest.raises(PartialFailure) as exc_info:
        api.publish(workspace, ["comp1"])

    assert exc_info.value.failures == {
        "acme/comp1": 'registry error: Invalid name: "invalid/name/comp1"'
    }
    assert len(registry()) == 0


def test_duplicate_version_fails(simple_workspace):
    api.tag(simple_workspace)
    api.export(simple_workspace)
    api.publish(simple_workspace)

    with pytest.raises(PartialFailure) as exc_info:
        api.publish(simple_workspace)

    assert exc_info.value.failures["acme/comp1"] == (
        "registry error: You cannot publish over the previously published versions: 0.0.1."
    )


def test_failures_do_not_stop_siblings(make_workspace):
    workspace = make_workspace(components={
        "comp1": {"index.js": "module.exports = 1;\n"},
        "comp2": {"index.js": "module.exports = 2;\n"},
    })
    workspace.config.components["comp1"].package_name = "_hidden"
    api.tag(workspace)
    api.export(workspace)

    with pytest.raises(PartialFailure) as exc_info:
        api.publish(workspace)

    assert exc_info.value.failed_ids == ["acme/comp1"]
    assert exc_info.value.result.output == "+ acme.comp2@0.0.1"


def test_publish_request(simple_workspace):
    api.tag(simple_workspace)
    api.export(simple_workspace)
    comp1 = simple_workspace.get_id("comp1")

    publisher = Publisher(simple_workspace)
    result = publisher.publish_request(PublishRequest(
        component_id=comp1,
        version="0.0.1",
        registry_target="default",
    ))

    assert result.success
    assert result.spec == "@ci/acme.comp1@0.0.1"
    assert result.checksum == run_async(registry().fetch("@ci/acme.comp1", "0.0.1")).checksum


def test_nothing_tagged_publishes_nothing(simple_workspace):
    result = api.publish(simple_workspace)
    assert result.components == []


class PublishListener(Plugin):

    def __init__(self):
        super().__init__()
        self.packages = []

    def get_info(self):
        return PluginInfo(name="listener", version="1.0.0", description="test",
                          hook_points=[HookPoint.POST_PUBLISH])

    async def handle_hook(self, context):
        self.packages.extend(context.data["packages"])
        return context


def test_post_publish_hook(simple_workspace):
    listener = PublishListener()
    simple_workspace.plugin_manager.register(listener)
    api.tag(simple_workspace)

    api.publish(simple_workspace, dry_run=True)
    assert listener.packages == []

    api.export(simple_workspace)
    api.publish(simple_workspace)
    assert listener.packages == ["@ci/acme.comp1@0.0.1"]
