from fastapi import APIRouter, Depends, HTTPException

from .. import schemas, views
from ..dependencies import get_workspace
from ..errors import InputError
from ..workspace import Workspace

router = APIRouter(prefix="/recipe", tags=["recipe"])


@router.get("/")
def get_recipe(workspace: Workspace = Depends(get_workspace)):
    return views.recipe_view(workspace.state)


@router.post("/lines")
def add_line(line: schemas.RecipeLineCreate, workspace: Workspace = Depends(get_workspace)):
    """Add a material line. A material deleted since the list was drawn adds nothing."""
    try:
        added = workspace.add_recipe_line(line.material_id, line.qty)
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    return {
        "added": added is not None,
        "recipe": views.recipe_view(workspace.state),
    }


@router.delete("/")
def reset_recipe(workspace: Workspace = Depends(get_workspace)):
    workspace.reset_recipe()
    return views.recipe_view(workspace.state)
