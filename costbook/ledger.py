"""
Product Ledger: finalized products with snapshotted costs.

Formula at save time:
    labor_cost    = (labor_minutes / 60) * labor_rate
    material_cost = sum of working recipe line totals
    total_cost    = material_cost + labor_cost
    profit        = selling_price - total_cost
    margin        = 100 * profit / selling_price   (over price, not cost)

Stored products are never recomputed from current material prices.
"""

import logging
from typing import Optional, Tuple

from .errors import InputError
from .parsing import is_blank, next_id, number_or_zero, to_positive
from .recipe import current_total, reset
from .schemas import Product
from .state import AppState

logger = logging.getLogger(__name__)


def labor_cost(minutes, rate) -> float:
    """Labor cost for minutes at an hourly rate. Non-numeric inputs count as 0."""
    return (number_or_zero(minutes) / 60.0) * number_or_zero(rate)


def save_product(
    state: AppState,
    name,
    selling_price,
    labor_minutes,
    labor_rate,
    now_ms: int,
) -> Tuple[AppState, Product]:
    """
    Snapshot the working recipe plus labor into a new product.

    Requires a name, a positive selling price, and at least one of a
    non-empty recipe or non-zero labor. Clears the recipe on success.
    """
    price_value = to_positive(selling_price)
    labor = labor_cost(labor_minutes, labor_rate)

    missing = []
    if is_blank(name):
        missing.append("name")
    if price_value is None:
        missing.append("selling_price")
    if not state.recipe and labor == 0:
        missing.append("materials_or_labor")
    if missing:
        raise InputError("Please fill in Name, Price, and at least Materials OR Labor.", missing)

    material_cost = current_total(state.recipe)
    total_cost = material_cost + labor
    profit = price_value - total_cost

    product = Product(
        id=next_id((p.id for p in state.products), now_ms),
        name=str(name).strip(),
        material_cost=material_cost,
        labor_cost=labor,
        total_cost=total_cost,
        selling_price=price_value,
        profit=profit,
        margin=(profit / price_value) * 100,
    )
    new_state = reset(state.evolve(products=state.products + (product,)))
    return new_state, product


def delete_product(state: AppState, product_id) -> Tuple[AppState, bool]:
    """Remove a product by id. Unknown ids are a no-op."""
    remaining = tuple(p for p in state.products if str(p.id) != str(product_id).strip())
    if len(remaining) == len(state.products):
        logger.debug("delete_product: no product with id %s", product_id)
        return state, False
    return state.evolve(products=remaining), True


def product_id_at(state: AppState, position: int) -> Optional[int]:
    """Id of the product currently rendered at this row position."""
    if 0 <= position < len(state.products):
        return state.products[position].id
    return None


def bar_width(margin: float) -> float:
    """Margin clamped to [0, 100] for the proportional bar. Stored margin is not clamped."""
    return max(0.0, min(100.0, margin))
