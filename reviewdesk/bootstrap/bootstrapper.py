from reviewdesk.dependencies.components import get_components
from reviewdesk.dependencies.services import get_workspace_service
from reviewdesk.services.WorkspaceService.workspace_service_interface import (
    WorkspaceServiceInterface,
)


def bootstrap_workspace(env: str = "development") -> WorkspaceServiceInterface:
    components = get_components(env=env)
    return get_workspace_service(components)
