"""Tests for the component lifecycle"""

import pytest

from component_release import api
from component_release.api.exceptions import NotExportedError
from component_release.constants import Stage
from component_release.core.lifecycle import Transition, can_transition


@pytest.mark.parametrize("stage,transition,kwargs,expected", [
    (Stage.NEW, Transition.TAG, {}, True),
    (Stage.MODIFIED, Transition.TAG, {}, True),
    (Stage.STAGED, Transition.TAG, {}, False),
    (Stage.EXPORTED, Transition.TAG, {"force": True}, True),
    (Stage.STAGED, Transition.EXPORT, {}, True),
    (Stage.NEW, Transition.EXPORT, {}, False),
    (Stage.EXPORTED, Transition.PUBLISH, {}, True),
    (Stage.STAGED, Transition.PUBLISH, {}, False),
    (Stage.STAGED, Transition.PUBLISH, {"allow_staged": True}, True),
    (Stage.MODIFIED, Transition.PUBLISH, {"allow_staged": True}, False),
])
def test_can_transition(stage, transition, kwargs, expected):
    assert can_transition(stage, transition, **kwargs) is expected


def test_stage_progression(simple_workspace):
    lifecycle = simple_workspace.lifecycle
    comp1 = simple_workspace.get_id("comp1")
    assert lifecycle.stage_of(comp1) == Stage.NEW

    api.tag(simple_workspace)
    assert lifecycle.stage_of(comp1) == Stage.STAGED

    api.export(simple_workspace)
    assert lifecycle.stage_of(comp1) == Stage.EXPORTED

    source = simple_workspace.component_dir(comp1) / "index.js"
    source.write_text("module.exports = () => 'changed';\n")
    assert lifecycle.stage_of(comp1) == Stage.MODIFIED

    api.tag(simple_workspace)
    assert lifecycle.stage_of(comp1) == Stage.STAGED
    assert simple_workspace.latest_version(comp1) == "0.0.2"


def test_ignored_files_do_not_modify(simple_workspace):
    api.tag(simple_workspace)
    comp1 = simple_workspace.get_id("comp1")
    (simple_workspace.component_dir(comp1) / "debug.log").write_text("noise")
    assert simple_workspace.lifecycle.stage_of(comp1) == Stage.STAGED


def test_check_publish_names_offenders(chain_workspace):
    api.tag(chain_workspace)
    api.export(chain_workspace, ["comp1"])

    with pytest.raises(NotExportedError) as exc_info:
        chain_workspace.lifecycle.check_publish(chain_workspace.component_ids())

    assert exc_info.value.component_ids == ["comp2", "comp3"]
    assert str(exc_info.value) == (
        "unable to publish the following component(s), "
        "please make sure they are exported: comp2, comp3"
    )


def test_check_publish_dry_run_needs_tag(simple_workspace):
    comp1 = simple_workspace.get_id("comp1")
    with pytest.raises(NotExportedError):
        simple_workspace.lifecycle.check_publish([comp1], dry_run=True)

    api.tag(simple_workspace)
    eligible = simple_workspace.lifecycle.check_publish([comp1], dry_run=True)
    assert eligible[comp1].version == "0.0.1"


def test_summary(chain_workspace):
    api.tag(chain_workspace, ["comp1"])
    rows = chain_workspace.lifecycle.summary()
    assert rows == [
        ("acme/comp1", "staged", "0.0.1"),
        ("acme/comp2", "new", None),
        ("acme/comp3", "new", None),
    ]
