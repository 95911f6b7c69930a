"""Package installation from a registry"""

import logging
import shutil
from pathlib import Path

from ..api.exceptions import RegistryRejectionError
from ..constants import NODE_MODULES_DIR
from ..core.builder import extract_tarball
from ..registry.base import RegistryBackend
from ..utils.hash_utils import verify_checksum

logger = logging.getLogger(__name__)


async def install_package(registry: RegistryBackend,
                          package_name: str,
                          version: str,
                          dest: Path) -> Path:
    """
    Install a published package under ``dest/node_modules/<name>``

    Any previous install of the package is replaced.

    Args:
        registry: Registry to fetch from
        package_name: Package name
        version: Package version
        dest: Directory receiving ``node_modules``

    Returns:
        Installed package directory

    Raises:
        PackageNotFoundError: If the version is not published
        RegistryRejectionError: If the payload does not match its checksum
    """
    artifact = await registry.fetch(package_name, version)

    if not verify_checksum(artifact.payload, artifact.checksum):
        raise RegistryRejectionError(f"Checksum mismatch for {artifact.spec}", package_name)

    target = Path(dest) / NODE_MODULES_DIR / package_name
    if target.exists():
        shutil.rmtree(target)
    target.mkdir(parents=True)

    extract_tarball(artifact.payload, target)
    logger.info(f"Installed {artifact.spec} into {target}")
    return target
