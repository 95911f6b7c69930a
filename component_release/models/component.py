"""Component data models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..constants import Stage


@dataclass(frozen=True)
class ComponentId:
    """Identity of a component: optional scope plus a slash separated name"""

    name: str
    scope: Optional[str] = None

    def __str__(self) -> str:
        if self.scope:
            return f"{self.scope}/{self.name}"
        return self.name

    @property
    def dotted_name(self) -> str:
        """Name with ``/`` replaced by ``.`` (``ui/button`` -> ``ui.button``)"""
        return self.name.replace("/", ".")

    def with_version(self, version: Optional[str]) -> str:
        """Render as ``id@version`` (bare id when version is unknown)"""
        if version:
            return f"{self}@{version}"
        return str(self)

    def matches(self, value: str) -> bool:
        """Check whether a user supplied id refers to this component"""
        return value in (str(self), self.name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"scope": self.scope, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComponentId':
        """Create from dictionary"""
        return cls(name=data["name"], scope=data.get("scope"))


@dataclass(frozen=True)
class ComponentRef:
    """Dependency edge target: a component at a resolved version"""

    id: ComponentId
    version: Optional[str] = None
    package_name: Optional[str] = None

    def __str__(self) -> str:
        return self.id.with_version(self.version)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {"id": self.id.to_dict(), "version": self.version}
        if self.package_name:
            data["package_name"] = self.package_name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComponentRef':
        """Create from dictionary"""
        return cls(
            id=ComponentId.from_dict(data["id"]),
            version=data.get("version"),
            package_name=data.get("package_name")
        )


@dataclass(frozen=True)
class Tag:
    """Immutable version assignment of a component

    ``files`` maps each snapshot path to the hash of its content blob.
    """

    component_id: ComponentId
    version: str
    snapshot_hash: str
    main: str
    files: Dict[str, str] = field(default_factory=dict)
    dependencies: List[ComponentRef] = field(default_factory=list)
    created_at: str = ""

    @property
    def key(self) -> str:
        """Unique ``id@version`` key"""
        return self.component_id.with_version(self.version)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "component_id": self.component_id.to_dict(),
            "version": self.version,
            "snapshot_hash": self.snapshot_hash,
            "main": self.main,
            "files": dict(self.files),
            "dependencies": [d.to_dict() for d in self.dependencies],
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tag':
        """Create from dictionary"""
        return cls(
            component_id=ComponentId.from_dict(data["component_id"]),
            version=data["version"],
            snapshot_hash=data["snapshot_hash"],
            main=data["main"],
            files=dict(data.get("files", {})),
            dependencies=[ComponentRef.from_dict(d) for d in data.get("dependencies", [])],
            created_at=data.get("created_at", "")
        )

    @classmethod
    def create(cls, component_id: ComponentId, version: str, snapshot_hash: str,
               main: str, files: Dict[str, str],
               dependencies: List[ComponentRef]) -> 'Tag':
        """Create a tag stamped with the current time"""
        return cls(
            component_id=component_id,
            version=version,
            snapshot_hash=snapshot_hash,
            main=main,
            files=dict(files),
            dependencies=list(dependencies),
            created_at=datetime.now(timezone.utc).isoformat()
        )


@dataclass
class Component:
    """A versionable unit of source within a workspace"""

    id: ComponentId
    path: Path
    main: str
    stage: Stage = Stage.NEW
    version: Optional[str] = None
    dependencies: List[ComponentRef] = field(default_factory=list)
    package_name_override: Optional[str] = None

    def __post_init__(self):
        """Post-initialization processing"""
        if isinstance(self.path, str):
            self.path = Path(self.path)

    @property
    def is_tagged(self) -> bool:
        """Check if component has at least one tag"""
        return self.version is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": str(self.id),
            "path": str(self.path),
            "main": self.main,
            "stage": self.stage.value,
            "version": self.version,
            "dependencies": [str(d) for d in self.dependencies],
            "package_name_override": self.package_name_override,
        }


@dataclass
class PublishRequest:
    """One publish invocation for one component, never persisted"""

    component_id: ComponentId
    version: str
    registry_target: str
    dry_run: bool = False
    allow_staged: bool = False
