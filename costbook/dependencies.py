from fastapi import Request

from .storage import LocalStore
from .workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    """The app's single Workspace, loaded from the store on first use."""
    workspace = getattr(request.app.state, "workspace", None)
    if workspace is None:
        workspace = Workspace.load(LocalStore())
        request.app.state.workspace = workspace
    return workspace
