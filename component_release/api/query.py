"""Query API for component information"""

from typing import Any, Dict, List, Optional, Union

from ..core.workspace import Workspace
from ..models import ComponentId


def show(workspace: Workspace, component: Union[str, ComponentId]) -> Dict[str, Any]:
    """
    Describe a component

    Args:
        workspace: Workspace holding the component
        component: Component id

    Returns:
        Id, stage, version, package name, direct dependencies rendered as
        ``id@version``, tag history and publish records

    Raises:
        ComponentNotFoundError: If the component is not tracked
    """
    comp = workspace.get_component(component)
    data = comp.to_dict()
    data["package_name"] = workspace.package_name(comp.id)
    data["versions"] = workspace.local_scope.versions(comp.id)

    remote = workspace.remote_scope
    data["exported_versions"] = remote.versions(comp.id) if remote else []

    data["published"] = {}
    for version in data["versions"]:
        records = workspace.local_scope.published(comp.id.with_version(version))
        if records:
            data["published"][version] = records

    return data


def status(workspace: Workspace) -> List[Dict[str, Optional[str]]]:
    """
    Stage and latest version of every component

    Returns:
        One row per component, sorted by id
    """
    return [
        {"id": component_id, "stage": stage, "version": version}
        for component_id, stage, version in workspace.lifecycle.summary()
    ]


def dependencies(workspace: Workspace, component: Union[str, ComponentId],
                 transitive: bool = False) -> List[str]:
    """
    Dependencies of a component as ``id@version``

    Raises:
        CyclicDependencyError: If ``transitive`` and the graph has a cycle
    """
    comp = workspace.get_component(component)
    if not transitive:
        return [str(ref) for ref in comp.dependencies]
    return [str(ref) for ref in workspace.grapher.transitive_dependencies(comp.id)]
