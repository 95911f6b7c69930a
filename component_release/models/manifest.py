# component_release/models/manifest.py
"""Package manifest models"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass
class PackageManifest:
    """The ``package.json`` of a published component"""
    name: str
    version: str
    main: str
    dependencies: Dict[str, str] = field(default_factory=dict)
    component_id: Dict[str, Optional[str]] = field(default_factory=dict)
    files: List[str] = field(default_factory=list)
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'name': self.name,
            'version': self.version,
            'main': self.main,
            'dependencies': dict(sorted(self.dependencies.items())),
            'componentId': self.component_id,
            'files': list(self.files),
        }

        if self.description:
            data['description'] = self.description

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PackageManifest':
        """Create from dictionary"""
        return cls(
            name=data['name'],
            version=data['version'],
            main=data.get('main', ''),
            dependencies=dict(data.get('dependencies', {})),
            component_id=dict(data.get('componentId', {})),
            files=list(data.get('files', [])),
            description=data.get('description')
        )

    @property
    def spec(self) -> str:
        """``name@version`` key used by the registry"""
        return f"{self.name}@{self.version}"


@dataclass
class PackageArtifact:
    """Externally visible unit pushed to the registry"""
    package_name: str
    version: str
    manifest: PackageManifest
    payload: bytes
    checksum: str

    @property
    def spec(self) -> str:
        """``name@version`` key used by the registry"""
        return f"{self.package_name}@{self.version}"

    @property
    def size(self) -> int:
        """Payload size in bytes"""
        return len(self.payload)
