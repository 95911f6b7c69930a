"""Tests for tagging"""

import pytest

from component_release import api
from component_release.api.exceptions import PartialFailure, VersionError
from component_release.constants import Stage
from component_release.core import VersionTagger
from component_release.plugins import HookPoint, Plugin, PluginInfo


class RecordingPlugin(Plugin):
    """Collects the contexts of one hook point"""

    def __init__(self, hook_point):
        super().__init__()
        self.hook_point = hook_point
        self.contexts = []

    def get_info(self):
        return PluginInfo(name="recorder", version="1.0.0", description="test",
                          hook_points=[self.hook_point])

    async def handle_hook(self, context):
        self.contexts.append(context)
        return context


def test_first_tag_is_0_0_1(simple_workspace):
    result = api.tag(simple_workspace)
    assert result.tagged == {"acme/comp1": "0.0.1"}
    assert result.is_success


def test_bump_types(simple_workspace):
    comp1 = simple_workspace.get_id("comp1")
    source = simple_workspace.component_dir(comp1) / "index.js"

    api.tag(simple_workspace, version="1.2.3")
    source.write_text("// minor\n")
    api.tag(simple_workspace, bump="minor")
    source.write_text("// major\n")
    api.tag(simple_workspace, bump="major")

    assert simple_workspace.local_scope.versions(comp1) == ["1.2.3", "1.3.0", "2.0.0"]


def test_tags_are_persisted(simple_workspace):
    api.tag(simple_workspace)
    reloaded = type(simple_workspace).load(simple_workspace.paths.workspace_root)
    tag = reloaded.local_scope.latest_tag(reloaded.get_id("comp1"))
    assert tag.version == "0.0.1"
    assert tag.main == "index.js"
    assert reloaded.local_scope.read_files(tag) == {"index.js": b"module.exports = () => 'comp1';\n"}


def test_pinned_version_must_increase(simple_workspace):
    api.tag(simple_workspace, version="1.0.0")
    comp1 = simple_workspace.get_id("comp1")
    (simple_workspace.component_dir(comp1) / "index.js").write_text("// next\n")

    with pytest.raises(PartialFailure) as exc_info:
        api.tag(simple_workspace, version="0.9.0")

    assert "acme/comp1" in exc_info.value.failures
    assert "must be greater" in exc_info.value.failures["acme/comp1"]
    assert simple_workspace.local_scope.versions(comp1) == ["1.0.0"]


def test_invalid_version_rejected_up_front(simple_workspace):
    with pytest.raises(VersionError):
        api.tag(simple_workspace, version="v1")
    with pytest.raises(VersionError):
        api.tag(simple_workspace, bump="huge")


def test_staged_component_is_skipped(simple_workspace):
    api.tag(simple_workspace)
    result = api.tag(simple_workspace, ["comp1"])

    assert result.tagged == {}
    assert "acme/comp1" in result.skipped


def test_force_retags(simple_workspace):
    api.tag(simple_workspace)
    result = api.tag(simple_workspace, ["comp1"], force=True)
    assert result.tagged == {"acme/comp1": "0.0.2"}


def test_dependencies_tagged_in_one_batch(chain_workspace):
    result = api.tag(chain_workspace)
    assert result.tagged == {"acme/comp1": "0.0.1", "acme/comp2": "0.0.1", "acme/comp3": "0.0.1"}

    tag = chain_workspace.local_scope.latest_tag(chain_workspace.get_id("comp3"))
    assert [str(ref) for ref in tag.dependencies] == ["acme/comp2@0.0.1"]


def test_unresolved_dependency_isolated(chain_workspace):
    with pytest.raises(PartialFailure) as exc_info:
        api.tag(chain_workspace, ["comp2"])

    failure = exc_info.value.failures["acme/comp2"]
    assert failure == "unable to tag acme/comp2, the following dependencies are not tagged: acme/comp1"
    assert chain_workspace.latest_version(chain_workspace.get_id("comp2")) is None


def test_partial_failure_keeps_successes(make_workspace):
    workspace = make_workspace(components={
        "good": {"index.js": "module.exports = 1;\n"},
        "broken": {"readme.md": "no main file\n"},
    })

    with pytest.raises(PartialFailure) as exc_info:
        api.tag(workspace)

    assert exc_info.value.failed_ids == ["acme/broken"]
    assert exc_info.value.result.tagged == {"acme/good": "0.0.1"}
    assert workspace.lifecycle.stage_of(workspace.get_id("good")) == Stage.STAGED


def test_tag_scope_is_atomic(make_workspace):
    workspace = make_workspace(components={
        "good": {"index.js": "module.exports = 1;\n"},
        "broken": {"readme.md": "no main file\n"},
    })

    with pytest.raises(PartialFailure) as exc_info:
        api.tag_scope(workspace, "1.0.0")

    assert exc_info.value.result.tagged == {}
    assert workspace.local_scope.component_keys() == []


def test_tag_scope_tags_everything(chain_workspace):
    api.tag(chain_workspace, ["comp1"])
    result = api.tag_scope(chain_workspace, "1.0.0")

    assert result.atomic
    assert set(result.tagged.values()) == {"1.0.0"}
    assert len(result.tagged) == 3


def test_tag_scope_requires_version(simple_workspace):
    with pytest.raises(VersionError):
        VersionTagger(simple_workspace).tag_scope("")


def test_post_tag_hook(simple_workspace):
    recorder = RecordingPlugin(HookPoint.POST_TAG)
    simple_workspace.plugin_manager.register(recorder)

    api.tag(simple_workspace)

    assert len(recorder.contexts) == 1
    assert recorder.contexts[0].data["versions"] == {"acme/comp1": "0.0.1"}


def test_tag_timestamps_are_utc(simple_workspace):
    result = api.tag(simple_workspace)

    tag = simple_workspace.local_scope.latest_tag(simple_workspace.get_id("comp1"))
    assert tag.created_at.endswith("+00:00")
    assert result.start_time.tzinfo is not None
