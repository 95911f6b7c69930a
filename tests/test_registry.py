"""Tests for registry backends and package tarballs"""

import pytest

from component_release.api.exceptions import PackageNotFoundError, RegistryRejectionError
from component_release.core.builder import pack_tarball, read_tarball
from component_release.models import PackageArtifact, PackageManifest
from component_release.models.config import RegistryTarget
from component_release.registry import (
    FilesystemRegistry,
    MemoryRegistry,
    RegistryFactory,
    is_valid_registry_name,
)
from component_release.utils.async_utils import run_async
from component_release.utils.hash_utils import hash_bytes


def make_artifact(name="@ci/acme.comp1", version="0.0.1", content=b"module.exports = 1;\n"):
    manifest = PackageManifest(name=name, version=version, main="dist/index.js",
                               files=["dist/index.js"])
    payload = pack_tarball(manifest, {"index.js": content})
    return PackageArtifact(package_name=name, version=version, manifest=manifest,
                           payload=payload, checksum=hash_bytes(payload))


@pytest.mark.parametrize("name,valid", [
    ("comp1", True),
    ("@ci/acme.comp1", True),
    ("react.x7k2.ui.button", True),
    ("invalid/name/comp1", False),
    ("Upper", False),
    ("_private", False),
    ("@ci/.hidden", False),
    ("node_modules", False),
    ("a" * 215, False),
])
def test_registry_name_rules(name, valid):
    assert is_valid_registry_name(name) is valid


@pytest.fixture(params=["memory", "filesystem"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryRegistry({"name": "test"})
    return FilesystemRegistry({"name": "test", "path": str(tmp_path / "registry")})


def test_push_and_fetch(backend):
    artifact = make_artifact()
    assert run_async(backend.push(artifact)) == "@ci/acme.comp1@0.0.1"

    fetched = run_async(backend.fetch("@ci/acme.comp1", "0.0.1"))
    assert fetched.payload == artifact.payload
    assert fetched.checksum == artifact.checksum
    assert fetched.manifest.to_dict() == artifact.manifest.to_dict()


def test_duplicate_push(backend):
    run_async(backend.push(make_artifact()))

    with pytest.raises(RegistryRejectionError) as exc_info:
        run_async(backend.push(make_artifact(content=b"changed")))
    assert exc_info.value.registry_message == (
        "You cannot publish over the previously published versions: 0.0.1."
    )


def test_invalid_name(backend):
    with pytest.raises(RegistryRejectionError) as exc_info:
        run_async(backend.push(make_artifact(name="invalid/name/comp1")))
    assert str(exc_info.value) == 'registry error: Invalid name: "invalid/name/comp1"'


def test_checksum_mismatch(backend):
    artifact = make_artifact()
    artifact.checksum = "0" * 64
    with pytest.raises(RegistryRejectionError, match="Checksum mismatch"):
        run_async(backend.push(artifact))


def test_missing_package(backend):
    with pytest.raises(PackageNotFoundError, match="Package not found: comp1@1.0.0"):
        run_async(backend.fetch("comp1", "1.0.0"))


def test_versions_sorted(backend):
    for version in ["0.10.0", "0.2.0", "1.0.0-rc.1", "1.0.0"]:
        run_async(backend.push(make_artifact(version=version)))
    assert run_async(backend.versions("@ci/acme.comp1")) == ["0.2.0", "0.10.0", "1.0.0-rc.1", "1.0.0"]


def test_filesystem_layout(tmp_path):
    registry = FilesystemRegistry({"path": str(tmp_path)})
    run_async(registry.push(make_artifact()))

    version_dir = tmp_path / "@ci" / "acme.comp1" / "0.0.1"
    assert (version_dir / "package.tgz").is_file()
    assert (version_dir / "manifest.json").is_file()


def test_factory(tmp_path):
    memory = RegistryFactory.create_from_config(RegistryTarget(type="memory", name="shared"))
    assert memory is MemoryRegistry.shared("shared")

    filesystem = RegistryFactory.create_from_config(RegistryTarget(type="filesystem", path=str(tmp_path)))
    assert isinstance(filesystem, FilesystemRegistry)
    assert filesystem.base_path == tmp_path


def test_tarball_is_deterministic():
    manifest = PackageManifest(name="comp1", version="0.0.1", main="dist/index.js")
    files = {"index.js": b"a", "lib/util.js": b"b"}

    first = pack_tarball(manifest, files)
    assert pack_tarball(manifest, dict(reversed(list(files.items())))) == first

    content = read_tarball(first)
    assert content["dist/lib/util.js"] == b"b"
    assert set(content) == {"package.json", "dist/index.js", "dist/lib/util.js"}
