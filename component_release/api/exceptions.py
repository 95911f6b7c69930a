"""Exception definitions for component-release API"""

from typing import Dict, Iterable, List, Optional

from ..constants import ErrorCode, MSG_NOT_EXPORTED


class ComponentReleaseError(Exception):
    """Base exception for component-release"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigError(ComponentReleaseError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class WorkspaceNotFoundError(ComponentReleaseError):
    """Workspace root not found error"""

    def __init__(self, message: str = None):
        if message is None:
            message = (
                "No workspace found. Please ensure:\n"
                "1. You are in a workspace directory\n"
                "2. The workspace root contains .component-release.yaml\n"
                "3. Or use --workspace to specify the workspace location"
            )
        super().__init__(message, ErrorCode.WORKSPACE_NOT_FOUND)


class ComponentNotFoundError(ComponentReleaseError):
    """Component not found error"""

    def __init__(self, component_id: str):
        super().__init__(f"Component not found: {component_id}", ErrorCode.COMPONENT_NOT_FOUND)
        self.component_id = component_id


class NotExportedError(ComponentReleaseError):
    """Publish attempted on components that are not exported"""

    def __init__(self, component_ids: Iterable[str]):
        self.component_ids = list(component_ids)
        message = MSG_NOT_EXPORTED.format(ids=", ".join(self.component_ids))
        super().__init__(message, ErrorCode.NOT_EXPORTED)


class UnresolvedDependencyError(ComponentReleaseError):
    """Tag or export attempted while a dependency lags behind"""

    def __init__(self, component_id: str, dependencies: Iterable[str],
                 operation: str = "tag", state: str = "tagged"):
        self.component_id = component_id
        self.dependencies = list(dependencies)
        message = (
            f"unable to {operation} {component_id}, the following dependencies are not {state}: "
            f"{', '.join(self.dependencies)}"
        )
        super().__init__(message, ErrorCode.UNRESOLVED_DEPENDENCY)


class CyclicDependencyError(ComponentReleaseError):
    """Dependency graph contains a cycle"""

    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(
            f"cyclic dependency detected: {' -> '.join(self.cycle)}",
            ErrorCode.CYCLIC_DEPENDENCY
        )


class NamingError(ComponentReleaseError):
    """Package name or naming template is malformed"""

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message, ErrorCode.NAMING_ERROR)
        self.name = name


class VersionError(ComponentReleaseError):
    """Invalid or non-increasing version"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VERSION_ERROR)


class ImmutableVersionError(ComponentReleaseError):
    """An exported version would change"""

    def __init__(self, component_id: str, version: str):
        super().__init__(
            f"{component_id}@{version} is already exported with different content",
            ErrorCode.IMMUTABLE_VERSION
        )
        self.component_id = component_id
        self.version = version


class RegistryRejectionError(ComponentReleaseError):
    """Registry refused a push

    ``registry_message`` holds the registry text verbatim.
    """

    def __init__(self, registry_message: str, package_name: Optional[str] = None):
        super().__init__(f"registry error: {registry_message}", ErrorCode.REGISTRY_REJECTION)
        self.registry_message = registry_message
        self.package_name = package_name


class PackageNotFoundError(ComponentReleaseError):
    """Requested package version is not in the registry"""

    def __init__(self, package_name: str, version: str):
        super().__init__(f"Package not found: {package_name}@{version}", ErrorCode.PACKAGE_NOT_FOUND)
        self.package_name = package_name
        self.version = version


class PartialFailure(ComponentReleaseError):
    """Part of a batch operation failed"""

    def __init__(self, operation: str, failures: Dict[str, str], total: int, result=None):
        self.operation = operation
        self.failures = dict(failures)
        self.total = total
        self.result = result
        lines = [f"failed to {operation} {len(self.failures)} of {total} component(s):"]
        for component_id, reason in self.failures.items():
            lines.append(f"  {component_id}: {reason}")
        super().__init__("\n".join(lines), ErrorCode.PARTIAL_FAILURE)

    @property
    def failed_ids(self) -> List[str]:
        """Ids of the failed components"""
        return list(self.failures)
