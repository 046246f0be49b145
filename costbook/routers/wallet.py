from fastapi import APIRouter, Depends

from .. import schemas, views
from ..dependencies import get_workspace
from ..workspace import Workspace

router = APIRouter(tags=["wallet"])


@router.get("/wallet/")
def get_wallet(workspace: Workspace = Depends(get_workspace)):
    return views.wallet_view(workspace.recompute_wallet())


@router.put("/wallet/")
def update_expenses(update: schemas.ExpensesUpdate, workspace: Workspace = Depends(get_workspace)):
    # A blank or non-numeric field counts as zero expenses
    expenses = update.extra_expenses if update.extra_expenses is not None else ""
    return views.wallet_view(workspace.recompute_wallet(expenses))


@router.get("/dashboard")
def dashboard(workspace: Workspace = Depends(get_workspace)):
    """Everything the page needs on load, including the saved extra expenses."""
    summary = workspace.recompute_wallet()
    return views.dashboard(workspace.state, summary)
