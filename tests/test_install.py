"""End-to-end tests: tag, export, publish, then install in another workspace"""

import json
import secrets

import pytest

from component_release import api
from component_release.api.exceptions import PackageNotFoundError

FIXTURES = {
    "comp1": {
        "index.js": "const util = require('./util');\nmodule.exports = () => console.log(util.greet('comp1'));\n",
        "util.js": "exports.greet = (name) => `hello ${name}`;\n",
    },
    "comp2": {
        "index.js": "const c1 = require('@ci/acme.comp1');\nmodule.exports = () => { c1(); console.log('comp2'); };\n",
    },
    "comp3": {
        "index.js": "import c2 from '@ci/acme.comp2';\nexport default () => { c2(); console.log('comp3'); };\n",
    },
}


def test_exported_components_install_byte_identical(make_workspace, tmp_path):
    workspace = make_workspace(owner="@ci", auto_publish=True, components=FIXTURES)
    api.tag(workspace)
    result = api.export(workspace)
    assert len(result.published) == 3

    consumer = tmp_path / "consumer"
    target = api.install(workspace, "@ci/acme.comp1", "0.0.1", dest=consumer)

    assert target == consumer / "node_modules" / "@ci" / "acme.comp1"
    for relative, content in FIXTURES["comp1"].items():
        assert (target / "dist" / relative).read_text() == content

    manifest = json.loads((target / "package.json").read_text())
    assert manifest["main"] == "dist/index.js"
    assert manifest["componentId"]["name"] == "comp1"


def test_template_package_resolves_as_dependency(make_workspace):
    suffix = secrets.token_hex(4)
    template = f"react.{suffix}.{{name}}"
    package_name = f"react.{suffix}.ui.button"

    producer = make_workspace(
        name="producer",
        scope=None,
        template=template,
        components={"ui/button": {"index.js": "module.exports = () => console.log('hello button');\n"}},
    )
    api.tag(producer)
    api.export(producer)
    published = api.publish(producer)
    assert published.output == f"+ {package_name}@0.0.1"

    consumer = make_workspace(
        name="consumer",
        scope=None,
        components={"app": {"index.js": f"const button = require('{package_name}');\nbutton();\n"}},
    )
    target = api.install(consumer, package_name, "0.0.1")
    assert (target / "dist" / "index.js").read_text() == "module.exports = () => console.log('hello button');\n"

    data = api.show(consumer, "app")
    assert data["dependencies"] == ["ui/button@0.0.1"]


def test_staged_package_dependency_has_no_scope(make_workspace):
    package_name = f"react.{secrets.token_hex(4)}.ui.button"

    producer = make_workspace(
        name="producer",
        scope="producer",
        template=package_name.replace("ui.button", "{name}"),
        components={"ui/button": {"index.js": "module.exports = () => console.log('hello button');\n"}},
    )
    api.tag(producer)
    api.publish(producer, allow_staged=True)

    consumer = make_workspace(
        name="consumer",
        components={"bar": {"index.js": f"require('{package_name}')();\n"}},
    )
    api.install(consumer, package_name, "0.0.1")

    assert api.show(consumer, "bar")["dependencies"] == ["ui/button@0.0.1"]


def test_reinstall_replaces_previous_files(simple_workspace, tmp_path):
    api.tag(simple_workspace)
    api.export(simple_workspace)
    api.publish(simple_workspace)

    target = api.install(simple_workspace, "@ci/acme.comp1", "0.0.1", dest=tmp_path / "c")
    (target / "stale.txt").write_text("old")
    api.install(simple_workspace, "@ci/acme.comp1", "0.0.1", dest=tmp_path / "c")
    assert not (target / "stale.txt").exists()


def test_install_missing_package(simple_workspace, tmp_path):
    with pytest.raises(PackageNotFoundError):
        api.install(simple_workspace, "@ci/acme.comp1", "9.9.9", dest=tmp_path)
