"""Dependency discovery and graph ordering"""

import json
import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Set

from ..api.exceptions import ComponentReleaseError, CyclicDependencyError
from ..constants import PACKAGE_MANIFEST_FILE, SCANNED_EXTENSIONS
from ..models.component import ComponentId, ComponentRef
from .identity_resolver import PackageIndex

if TYPE_CHECKING:
    from .workspace import Workspace

logger = logging.getLogger(__name__)

SPECIFIER_PATTERNS = [
    re.compile(r"""\brequire\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""\bimport\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""\b(?:import|export)\s[^'";]*?\bfrom\s*['"]([^'"]+)['"]"""),
    re.compile(r"""\bimport\s*['"]([^'"]+)['"]"""),
]

Graph = Dict[ComponentId, List[ComponentRef]]


def extract_specifiers(source: str) -> List[str]:
    """
    Module specifiers required or imported by a source file

    Relative specifiers are dropped; the result is de-duplicated and keeps
    first-seen order.
    """
    seen: List[str] = []
    for pattern in SPECIFIER_PATTERNS:
        for match in pattern.finditer(source):
            specifier = match.group(1).strip()
            if not specifier or specifier.startswith((".", "/")):
                continue
            if specifier not in seen:
                seen.append(specifier)
    return seen


def read_installed_packages(node_modules: Path) -> List[Dict]:
    """
    Manifests of installed packages that were built from components

    Only ``package.json`` files carrying a ``componentId`` are returned.
    """
    manifests = []
    if not node_modules.is_dir():
        return manifests

    candidates = list(node_modules.glob(f"*/{PACKAGE_MANIFEST_FILE}"))
    candidates += list(node_modules.glob(f"@*/*/{PACKAGE_MANIFEST_FILE}"))

    for manifest_path in sorted(candidates):
        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.debug(f"Skipping unreadable manifest {manifest_path}: {e}")
            continue

        component = data.get("componentId")
        if isinstance(component, dict) and component.get("name") and data.get("name"):
            manifests.append(data)

    return manifests


class DependencyGrapher:
    """Discover inter-component dependencies of a workspace"""

    def __init__(self, workspace: 'Workspace'):
        self.workspace = workspace

    def build_index(self) -> PackageIndex:
        """
        Package name -> component mapping for the workspace

        Installed packages are indexed first so that workspace components
        win when both claim the same name.
        """
        index = PackageIndex()

        for manifest in read_installed_packages(self.workspace.paths.get_node_modules_dir()):
            component_id = ComponentId.from_dict(manifest["componentId"])
            index.register(manifest["name"], component_id, manifest.get("version"))

        for component_id in self.workspace.component_ids():
            try:
                package_name = self.workspace.package_name(component_id)
            except ComponentReleaseError as e:
                logger.debug(f"No package name for {component_id}: {e}")
                continue
            index.register(package_name, component_id)

        return index

    def compute_dependencies(self,
                             component_id: ComponentId,
                             files: Optional[Dict[str, bytes]] = None,
                             versions: Optional[Dict[ComponentId, str]] = None,
                             index: Optional[PackageIndex] = None) -> List[ComponentRef]:
        """
        Direct dependencies of a component

        Args:
            component_id: Component to scan
            files: Snapshot to scan (defaults to the current sources)
            versions: Versions to use instead of the latest tags, for
                components being tagged in the same batch
            index: Prebuilt package index

        Returns:
            Sorted dependency refs with the versions resolved now
        """
        if files is None:
            files = self.workspace.current_files(component_id)
        versions = versions or {}
        index = index or self.build_index()

        refs: Dict[ComponentId, ComponentRef] = {}
        for path, content in sorted(files.items()):
            if Path(path).suffix not in SCANNED_EXTENSIONS:
                continue
            source = content.decode("utf-8", errors="replace")
            for specifier in extract_specifiers(source):
                package_name = index.match_specifier(specifier)
                if package_name is None:
                    continue
                dep_id = index.lookup(package_name)
                if dep_id is None or dep_id == component_id or dep_id in refs:
                    continue

                if self.workspace.has_component(dep_id):
                    version = versions.get(dep_id) or self.workspace.latest_version(dep_id)
                else:
                    version = index.lookup_version(package_name)

                refs[dep_id] = ComponentRef(id=dep_id, version=version, package_name=package_name)

        return [refs[key] for key in sorted(refs, key=str)]

    def build_graph(self, component_ids: Optional[Iterable[ComponentId]] = None) -> Graph:
        """Dependency graph of the given (default: all) workspace components"""
        index = self.build_index()
        ids = list(component_ids) if component_ids is not None else self.workspace.component_ids()
        return {
            component_id: self.compute_dependencies(component_id, index=index)
            for component_id in ids
        }

    @staticmethod
    def find_cycle(graph: Graph) -> Optional[List[str]]:
        """
        First cycle in ``graph`` as a closed path of ids, or None

        Iterative DFS with white/grey/black colouring.
        """
        WHITE, GREY, BLACK = 0, 1, 2
        colour = {node: WHITE for node in graph}

        for root in sorted(graph, key=str):
            if colour[root] != WHITE:
                continue
            path = [root]
            stack = [iter([ref.id for ref in graph.get(root, [])])]
            colour[root] = GREY

            while stack:
                advanced = False
                for child in stack[-1]:
                    if child not in graph:
                        continue
                    if colour[child] == GREY:
                        start = path.index(child)
                        return [str(node) for node in path[start:]] + [str(child)]
                    if colour[child] == WHITE:
                        colour[child] = GREY
                        path.append(child)
                        stack.append(iter([ref.id for ref in graph.get(child, [])]))
                        advanced = True
                        break
                if not advanced:
                    colour[path.pop()] = BLACK
                    stack.pop()

        return None

    def topological_order(self, component_ids: Iterable[ComponentId],
                          graph: Optional[Graph] = None) -> List[ComponentId]:
        """
        Order components dependencies first

        Args:
            component_ids: Components to order
            graph: Prebuilt workspace graph

        Returns:
            The requested ids, each after its in-set dependencies

        Raises:
            CyclicDependencyError: If the workspace graph has a cycle
        """
        graph = graph if graph is not None else self.build_graph()
        cycle = self.find_cycle(graph)
        if cycle:
            raise CyclicDependencyError(cycle)

        wanted = set(component_ids)
        ordered: List[ComponentId] = []
        visited: Set[ComponentId] = set()

        def visit(node: ComponentId) -> None:
            if node in visited:
                return
            visited.add(node)
            for ref in graph.get(node, []):
                if ref.id in graph:
                    visit(ref.id)
            if node in wanted:
                ordered.append(node)

        for node in sorted(wanted, key=str):
            visit(node)

        return ordered

    def transitive_dependencies(self, component_id: ComponentId,
                                graph: Optional[Graph] = None) -> List[ComponentRef]:
        """
        All dependencies reachable from a component

        Raises:
            CyclicDependencyError: If a cycle is reachable
        """
        graph = graph if graph is not None else self.build_graph()
        cycle = self.find_cycle(graph)
        if cycle:
            raise CyclicDependencyError(cycle)

        found: Dict[ComponentId, ComponentRef] = {}
        pending = list(graph.get(component_id, []))
        while pending:
            ref = pending.pop()
            if ref.id in found:
                continue
            found[ref.id] = ref
            pending.extend(graph.get(ref.id, []))

        return [found[key] for key in sorted(found, key=str)]
