"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any
from enum import Enum

from .component import ComponentId
from .manifest import PackageManifest


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"
    SKIPPED = "skipped"


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus = OperationStatus.SUCCESS
    failures: Dict[str, str] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_failure(self, component_id: str, message: str) -> None:
        """Record a per-component failure"""
        self.failures[component_id] = message

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, succeeded: int) -> None:
        """Mark operation as complete, deriving the status"""
        self.end_time = datetime.now(timezone.utc)
        if not self.failures:
            self.status = OperationStatus.SUCCESS
        elif succeeded:
            self.status = OperationStatus.PARTIAL
        else:
            self.status = OperationStatus.FAILED


@dataclass
class TagResult(Result):
    """Result of tag and tag-scope operations"""

    tagged: Dict[str, str] = field(default_factory=dict)  # id -> version
    skipped: Dict[str, str] = field(default_factory=dict)  # id -> reason
    atomic: bool = False

    def complete(self, succeeded: Optional[int] = None) -> None:
        super().complete(len(self.tagged) if succeeded is None else succeeded)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "tagged": dict(self.tagged),
            "skipped": dict(self.skipped),
            "failures": dict(self.failures),
            "atomic": self.atomic,
            "duration": self.duration,
        }


@dataclass
class ExportResult(Result):
    """Result of an export operation"""

    exported: Dict[str, List[str]] = field(default_factory=dict)  # id -> versions
    skipped: Dict[str, str] = field(default_factory=dict)  # id -> reason
    published: List[str] = field(default_factory=list)  # package@version lines

    @property
    def exported_ids(self) -> List[str]:
        """Ids of exported components"""
        return list(self.exported)

    def complete(self, succeeded: Optional[int] = None) -> None:
        super().complete(len(self.exported) if succeeded is None else succeeded)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "exported": dict(self.exported),
            "skipped": dict(self.skipped),
            "published": list(self.published),
            "failures": dict(self.failures),
            "warnings": list(self.warnings),
        }


@dataclass
class ComponentPublishResult:
    """Publish result of a single component"""

    component_id: ComponentId
    version: str
    package_name: str
    success: bool
    dry_run: bool = False
    manifest: Optional[PackageManifest] = None
    registry: Optional[str] = None
    checksum: Optional[str] = None
    error: Optional[str] = None

    @property
    def spec(self) -> str:
        """``name@version``"""
        return f"{self.package_name}@{self.version}"

    @property
    def line(self) -> str:
        """Output line reported for this package"""
        return f"+ {self.spec}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            "component_id": str(self.component_id),
            "version": self.version,
            "package_name": self.package_name,
            "success": self.success,
            "dry_run": self.dry_run,
        }
        if self.manifest:
            data["manifest"] = self.manifest.to_dict()
        if self.registry:
            data["registry"] = self.registry
        if self.checksum:
            data["checksum"] = self.checksum
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class PublishResult(Result):
    """Result of a batch publish operation"""

    components: List[ComponentPublishResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded(self) -> List[ComponentPublishResult]:
        """Successfully published (or previewed) components"""
        return [c for c in self.components if c.success]

    @property
    def output(self) -> str:
        """Rendered ``+ name@version`` lines of the successful packages"""
        return "\n".join(c.line for c in self.succeeded)

    def add_component(self, result: ComponentPublishResult) -> None:
        """Record a component result"""
        self.components.append(result)
        if not result.success:
            self.add_failure(str(result.component_id), result.error or "unknown error")

    def complete(self, succeeded: Optional[int] = None) -> None:
        super().complete(len(self.succeeded) if succeeded is None else succeeded)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "status": self.status.value,
            "dry_run": self.dry_run,
            "components": [c.to_dict() for c in self.components],
            "failures": dict(self.failures),
            "duration": self.duration,
        }
