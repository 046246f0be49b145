from fastapi import APIRouter, Depends, HTTPException

from .. import schemas, views
from ..dependencies import get_workspace
from ..errors import ConfirmationRequired, InputError
from ..workspace import Workspace

router = APIRouter(prefix="/materials", tags=["materials"])


@router.get("/")
def list_materials(workspace: Workspace = Depends(get_workspace)):
    return views.material_rows(workspace.state)


@router.get("/options")
def material_options(workspace: Workspace = Depends(get_workspace)):
    """Selection list for the recipe builder."""
    return views.material_options(workspace.state)


@router.post("/", response_model=schemas.Material, response_model_by_alias=False)
def add_material(material: schemas.MaterialCreate, workspace: Workspace = Depends(get_workspace)):
    try:
        return workspace.add_material(material.name, material.price, material.qty)
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())


@router.delete("/{material_id}")
def delete_material(material_id: int, confirm: bool = False, workspace: Workspace = Depends(get_workspace)):
    try:
        removed = workspace.delete_material(material_id, confirmed=confirm)
    except ConfirmationRequired as e:
        raise HTTPException(status_code=409, detail=e.to_detail())
    return {"ok": True, "removed": removed}


@router.post("/{material_id}/edit", response_model=schemas.MaterialDraft)
def edit_material(material_id: int, confirm: bool = False, workspace: Workspace = Depends(get_workspace)):
    """
    Return the material's name/price/qty for the form and delete it.

    Without confirm=true the draft is returned and the material is kept.
    """
    draft = workspace.edit_material(material_id, confirmed=confirm)
    if draft is None:
        raise HTTPException(status_code=404, detail="Material not found")
    return draft
