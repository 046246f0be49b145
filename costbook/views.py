"""
Rendering boundary: turns AppState into the rows the page displays.

Row positions exist only here. Actions on rendered rows carry the stable id,
never the position.
"""

from typing import List, Tuple

from .config import settings
from .ledger import bar_width
from .parsing import format_number
from .recipe import current_total
from .schemas import Product, WalletSummary
from .state import AppState

MARGIN_COLORS = {
    "margin-high": "#10b981",
    "margin-med": "#f97316",
    "margin-low": "#ef4444",
}


def money(value: float, digits: int = 2) -> str:
    return f"{settings.CURRENCY_SYMBOL}{value:.{digits}f}"


def margin_band(margin: float) -> Tuple[str, str]:
    """(badge class, bar color) for a margin percentage."""
    if margin >= settings.MARGIN_HIGH_PCT:
        band = "margin-high"
    elif margin >= settings.MARGIN_MEDIUM_PCT:
        band = "margin-med"
    else:
        band = "margin-low"
    return band, MARGIN_COLORS[band]


def material_rows(state: AppState) -> List[dict]:
    return [
        {
            "id": m.id,
            "name": m.name,
            "cost_per_unit": m.cost_per_unit,
            "cost_per_unit_display": money(m.cost_per_unit),
        }
        for m in state.materials
    ]


def material_options(state: AppState) -> List[dict]:
    """Entries for the recipe material selector."""
    return [
        {"value": str(m.id), "label": f"{m.name} ({money(m.cost_per_unit)})"}
        for m in state.materials
    ]


def recipe_view(state: AppState) -> dict:
    total = current_total(state.recipe)
    return {
        "lines": [
            {
                "name": line.name,
                "qty": line.qty,
                "cost_total": line.cost_total,
                "label": f"{format_number(line.qty)}x {line.name}",
                "cost_total_display": money(line.cost_total),
            }
            for line in state.recipe
        ],
        "total": total,
        "total_display": f"{total:.2f}",
    }


def product_row(product: Product, position: int) -> dict:
    labor = product.effective_labor_cost
    total = product.effective_total_cost
    badge, color = margin_band(product.margin)
    return {
        "position": position,
        "id": product.id,
        "name": product.name,
        "material_cost": product.material_cost,
        "labor_cost": labor,
        "total_cost": total,
        "selling_price": product.selling_price,
        "profit": product.profit,
        "margin": product.margin,
        "breakdown": f"Mat: {money(product.material_cost, 0)} | Lab: {money(labor, 0)}",
        "total_cost_display": money(total),
        "selling_price_display": money(product.selling_price),
        "profit_display": money(product.profit),
        "margin_display": f"{product.margin:.1f}%",
        "margin_class": badge,
        "bar_width": bar_width(product.margin),
        "bar_color": color,
    }


def product_rows(state: AppState) -> List[dict]:
    return [product_row(p, position) for position, p in enumerate(state.products)]


def wallet_view(summary: WalletSummary) -> dict:
    view = summary.model_dump()
    view.update({
        "total_revenue_display": f"{summary.total_revenue:.2f}",
        "total_cost_display": f"{summary.total_cost:.2f}",
        "net_profit_display": f"{summary.net_profit:.2f}",
    })
    return view


def labor_preview(cost: float) -> dict:
    return {"labor_cost": cost, "labor_cost_display": f"{cost:.2f}"}


def dashboard(state: AppState, summary: WalletSummary) -> dict:
    """Everything the page draws on load."""
    return {
        "materials": material_rows(state),
        "material_options": material_options(state),
        "recipe": recipe_view(state),
        "products": product_rows(state),
        "wallet": wallet_view(summary),
        "extra_expenses": state.extra_expenses,
    }
