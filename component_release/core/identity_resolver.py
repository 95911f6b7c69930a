"""Mapping from component identity to package identity"""

from typing import Dict, Iterable, List, Optional, Tuple

from ..api.exceptions import NamingError
from ..constants import (
    LOCAL_PACKAGE_NAME_PATTERN,
    MAX_PACKAGE_NAME_LENGTH,
    TEMPLATE_TOKEN_PATTERN,
)
from ..models.component import ComponentId

NAME_TOKEN = "name"
SCOPE_TOKEN = "scope"
SUPPORTED_TOKENS = {NAME_TOKEN, SCOPE_TOKEN}


def normalize_owner(owner: Optional[str]) -> Optional[str]:
    """Owner with a leading ``@`` (``ci`` -> ``@ci``)"""
    if not owner:
        return None
    owner = owner.strip().rstrip("/")
    return owner if owner.startswith("@") else f"@{owner}"


def validate_template(template: str) -> None:
    """
    Check a naming template offline

    Raises:
        NamingError: Unless the template holds exactly one ``{name}`` and
            nothing but ``{name}``/``{scope}`` tokens
    """
    tokens = TEMPLATE_TOKEN_PATTERN.findall(template)
    unknown = sorted(set(t for t in tokens if t not in SUPPORTED_TOKENS))
    if unknown:
        raise NamingError(
            f"naming template '{template}' has unknown placeholder(s): "
            f"{', '.join('{' + t + '}' for t in unknown)}"
        )

    count = tokens.count(NAME_TOKEN)
    if count != 1:
        raise NamingError(
            f"naming template '{template}' must contain exactly one {{name}} placeholder, found {count}"
        )

    if tokens.count(SCOPE_TOKEN) > 1:
        raise NamingError(f"naming template '{template}' may contain {{scope}} at most once")


def validate_package_name(name: str) -> None:
    """
    Apply the package name rules that can be enforced offline

    Names that pass here can still be refused by the registry.

    Raises:
        NamingError: If the name is malformed
    """
    if not name:
        raise NamingError("package name cannot be empty", name)

    if len(name) > MAX_PACKAGE_NAME_LENGTH:
        raise NamingError(
            f'package name "{name}" is longer than {MAX_PACKAGE_NAME_LENGTH} characters', name
        )

    if name != name.lower():
        raise NamingError(f'package name "{name}" must be lowercase', name)

    if not LOCAL_PACKAGE_NAME_PATTERN.match(name):
        raise NamingError(f'package name "{name}" contains illegal characters', name)

    if name.startswith(".") or name.startswith("_"):
        raise NamingError(f'package name "{name}" cannot start with "." or "_"', name)

    for segment in name.split("/"):
        if segment in ("", ".", ".."):
            raise NamingError(f'package name "{name}" contains an illegal path segment', name)


def render_template(template: str, component_id: ComponentId) -> str:
    """Substitute ``{name}`` and ``{scope}`` in a validated template"""
    if SCOPE_TOKEN in TEMPLATE_TOKEN_PATTERN.findall(template) and not component_id.scope:
        raise NamingError(
            f"naming template '{template}' uses {{scope}} but {component_id} has no scope"
        )

    def substitute(match):
        token = match.group(1)
        if token == NAME_TOKEN:
            return component_id.dotted_name
        return component_id.scope

    return TEMPLATE_TOKEN_PATTERN.sub(substitute, template)


def resolve_package_name(component_id: ComponentId,
                         owner: Optional[str] = None,
                         template: Optional[str] = None) -> str:
    """
    Compute the package name of a component

    Without a template the name is ``[@owner/]scope.dotted-name``; with a
    template, ``{name}`` becomes the dotted component name and ``{scope}`` the
    scope name. Pure and deterministic.

    Args:
        component_id: Component identity
        owner: Package owner prefix, e.g. ``@ci``
        template: Naming template, e.g. ``react.{name}``

    Returns:
        Package name

    Raises:
        NamingError: If the template or the rendered name is malformed
    """
    if template:
        validate_template(template)
        name = render_template(template, component_id)
    else:
        base = component_id.dotted_name
        if component_id.scope:
            base = f"{component_id.scope}.{base}"
        owner = normalize_owner(owner)
        name = f"{owner}/{base}" if owner else base

    validate_package_name(name)
    return name


class IdentityResolver:
    """Package name resolution bound to a workspace's naming settings"""

    def __init__(self, owner: Optional[str] = None, template: Optional[str] = None):
        self.owner = owner
        self.template = template

    def resolve(self, component_id: ComponentId, override: Optional[str] = None) -> str:
        """Package name of a component; an explicit override wins"""
        if override:
            validate_package_name(override)
            return override
        return resolve_package_name(component_id, self.owner, self.template)


class PackageIndex:
    """Reverse mapping from package name to component identity"""

    def __init__(self):
        self._by_name: Dict[str, Tuple[ComponentId, Optional[str]]] = {}

    def register(self, package_name: str, component_id: ComponentId,
                 version: Optional[str] = None) -> None:
        """
        Map a package name to a component

        Args:
            package_name: Resolved package name
            component_id: Component the package was built from
            version: Version known for this package (installed packages)
        """
        self._by_name[package_name] = (component_id, version)

    def lookup(self, package_name: str) -> Optional[ComponentId]:
        """Component behind a package name"""
        entry = self._by_name.get(package_name)
        return entry[0] if entry else None

    def lookup_version(self, package_name: str) -> Optional[str]:
        """Version recorded for a package name"""
        entry = self._by_name.get(package_name)
        return entry[1] if entry else None

    def __contains__(self, package_name: str) -> bool:
        return package_name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def names(self) -> List[str]:
        """All indexed package names"""
        return sorted(self._by_name)

    def match_specifier(self, specifier: str) -> Optional[str]:
        """
        Longest indexed package name that ``specifier`` refers to

        ``@ci/scope.comp1/dist/index`` matches ``@ci/scope.comp1``.
        """
        parts = specifier.split("/")
        for end in range(len(parts), 0, -1):
            candidate = "/".join(parts[:end])
            if candidate in self._by_name:
                return candidate
        return None

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[str, ComponentId, Optional[str]]]) -> 'PackageIndex':
        """Build an index from ``(package_name, component_id, version)`` entries"""
        index = cls()
        for package_name, component_id, version in entries:
            index.register(package_name, component_id, version)
        return index
