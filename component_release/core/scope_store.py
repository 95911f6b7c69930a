"""Scope store: tag histories and content-addressed snapshots"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Any

from ..api.exceptions import ConfigError, VersionError
from ..constants import OBJECTS_DIR, STATE_FILE, STATE_VERSION
from ..models.component import ComponentId, Tag
from ..utils.file_utils import atomic_write_bytes, atomic_write_json, read_json
from ..utils.hash_utils import hash_bytes
from ..utils.version_utils import is_greater

logger = logging.getLogger(__name__)


class ScopeStore:
    """A named collection of component tag histories

    The same layout serves the local scope (``<workspace>/.component-release``)
    and a remote scope (any directory). Tags are appended only, in strictly
    increasing version order per component. State is written atomically so a
    failed commit leaves the previous state intact.
    """

    def __init__(self, root: Path, name: Optional[str] = None):
        """
        Initialize scope store

        Args:
            root: Scope directory
            name: Scope name
        """
        self.root = Path(root)
        self.name = name
        self._state_path = self.root / STATE_FILE
        self._objects_dir = self.root / OBJECTS_DIR
        self._tags: Optional[Dict[str, List[Tag]]] = None
        self._published: Dict[str, Dict[str, str]] = {}

    @property
    def state(self) -> Dict[str, List[Tag]]:
        """Tag histories keyed by component id (lazy loading)"""
        if self._tags is None:
            self._load()
        return self._tags

    def _load(self) -> None:
        """Load scope state from disk"""
        try:
            data = read_json(self._state_path) or {}
        except ValueError as e:
            raise ConfigError(f"Corrupted scope state {self._state_path}: {e}")

        if self.name is None:
            self.name = data.get("name")

        self._tags = {
            key: [Tag.from_dict(t) for t in tags]
            for key, tags in data.get("tags", {}).items()
        }
        self._published = {
            key: dict(records)
            for key, records in data.get("published", {}).items()
        }

    def _save(self, tags: Dict[str, List[Tag]], published: Dict[str, Dict[str, str]]) -> None:
        """Persist the given state atomically"""
        atomic_write_json(self._state_path, {
            "version": STATE_VERSION,
            "name": self.name,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "tags": {
                key: [t.to_dict() for t in history]
                for key, history in sorted(tags.items())
            },
            "published": published,
        })

    # Tag history

    def tags(self, component_id: ComponentId) -> List[Tag]:
        """All tags of a component, oldest first"""
        return list(self.state.get(str(component_id), []))

    def versions(self, component_id: ComponentId) -> List[str]:
        """All tagged versions of a component, oldest first"""
        return [t.version for t in self.tags(component_id)]

    def latest_tag(self, component_id: ComponentId) -> Optional[Tag]:
        """Most recent tag of a component"""
        history = self.state.get(str(component_id))
        return history[-1] if history else None

    def get_tag(self, component_id: ComponentId, version: str) -> Optional[Tag]:
        """Find a specific tag"""
        for tag in self.state.get(str(component_id), []):
            if tag.version == version:
                return tag
        return None

    def has_version(self, component_id: ComponentId, version: str) -> bool:
        """Check if a version exists in this scope"""
        return self.get_tag(component_id, version) is not None

    def component_keys(self) -> List[str]:
        """Ids of all components with history in this scope"""
        return sorted(self.state)

    def commit(self, new_tags: Iterable[Tag]) -> None:
        """
        Append tags and persist them in a single write

        Every tag is validated against the history before anything is written;
        on any error the scope is left unchanged.

        Args:
            new_tags: Tags to append, in order

        Raises:
            VersionError: If a tag does not increase its component's version
        """
        staged = {key: list(history) for key, history in self.state.items()}

        for tag in new_tags:
            key = str(tag.component_id)
            history = staged.setdefault(key, [])
            latest = history[-1].version if history else None
            if not is_greater(tag.version, latest):
                raise VersionError(
                    f"{tag.key} must be greater than the latest version {latest}"
                )
            history.append(tag)

        self._save(staged, self._published)
        self._tags = staged
        logger.debug(f"Committed tags to scope {self.name or self.root}")

    # Publish records

    def published(self, tag_key: str) -> Dict[str, str]:
        """Registries a tag was published to: registry name -> ``package@version``"""
        _ = self.state
        return dict(self._published.get(tag_key, {}))

    def record_published(self, tag_key: str, registry: str, spec: str) -> None:
        """Record a successful publish of a tag"""
        _ = self.state
        published = {key: dict(records) for key, records in self._published.items()}
        published.setdefault(tag_key, {})[registry] = spec
        self._save(self.state, published)
        self._published = published

    # Object store

    def _blob_path(self, digest: str) -> Path:
        return self._objects_dir / digest[:2] / digest

    def write_blob(self, data: bytes) -> str:
        """Store content and return its hash"""
        digest = hash_bytes(data)
        path = self._blob_path(digest)
        if not path.exists():
            atomic_write_bytes(path, data)
        return digest

    def read_blob(self, digest: str) -> bytes:
        """Read stored content by hash"""
        path = self._blob_path(digest)
        if not path.exists():
            raise ConfigError(f"Missing object {digest} in scope {self.name or self.root}")
        return path.read_bytes()

    def has_blob(self, digest: str) -> bool:
        """Check if content is stored"""
        return self._blob_path(digest).exists()

    def read_files(self, tag: Tag) -> Dict[str, bytes]:
        """Materialize the file snapshot of a tag"""
        return {path: self.read_blob(digest) for path, digest in sorted(tag.files.items())}

    def copy_blobs(self, tag: Tag, source: 'ScopeStore') -> None:
        """Copy the blobs referenced by ``tag`` from another scope"""
        for digest in tag.files.values():
            if not self.has_blob(digest):
                self.write_blob(source.read_blob(digest))

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the scope"""
        return {
            "name": self.name,
            "root": str(self.root),
            "components": {key: [t.version for t in tags] for key, tags in self.state.items()},
        }
