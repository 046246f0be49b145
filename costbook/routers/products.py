from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from .. import ledger, schemas, views
from ..dependencies import get_workspace
from ..errors import ConfirmationRequired, InputError
from ..workspace import Workspace

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/")
def list_products(workspace: Workspace = Depends(get_workspace)):
    return views.product_rows(workspace.state)


@router.get("/labor-preview")
def labor_preview(minutes: Optional[str] = None, rate: Optional[str] = None):
    """Live labor cost while the minutes/rate fields are being typed."""
    return views.labor_preview(ledger.labor_cost(minutes, rate))


@router.post("/")
def save_product(product: schemas.ProductCreate, workspace: Workspace = Depends(get_workspace)):
    try:
        saved = workspace.save_product(
            product.name, product.selling_price, product.labor_minutes, product.labor_rate,
        )
    except InputError as e:
        raise HTTPException(status_code=400, detail=e.to_detail())
    position = len(workspace.state.products) - 1
    return {
        "product": views.product_row(saved, position),
        "recipe": views.recipe_view(workspace.state),
        "wallet": views.wallet_view(workspace.recompute_wallet()),
    }


@router.delete("/{product_id}")
def delete_product(product_id: int, confirm: bool = False, workspace: Workspace = Depends(get_workspace)):
    try:
        removed = workspace.delete_product(product_id, confirmed=confirm)
    except ConfirmationRequired as e:
        raise HTTPException(status_code=409, detail=e.to_detail())
    return {
        "ok": True,
        "removed": removed,
        "wallet": views.wallet_view(workspace.recompute_wallet()),
    }
