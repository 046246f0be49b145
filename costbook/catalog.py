"""
Material Catalog: CRUD over raw materials.

Cost per unit is derived once when a material is added:
    cost_per_unit = price / qty

There is no in-place update. Editing hands the stored price/qty back to the
form and removes the entry, so the next add replaces it under a new id.
"""

import logging
from typing import List, Optional, Tuple

from .errors import InputError
from .parsing import is_blank, next_id, to_positive
from .schemas import Material, MaterialDraft
from .state import AppState

logger = logging.getLogger(__name__)

LEGACY_MATERIAL_WARNING = "Old item detected. Please re-enter Price and Qty."


def add_material(state: AppState, name, price, qty, now_ms: int) -> Tuple[AppState, Material]:
    """Validate and append a material. Raises InputError without changing state."""
    price_value = to_positive(price)
    qty_value = to_positive(qty)

    missing = []
    if is_blank(name):
        missing.append("name")
    if price_value is None:
        missing.append("price")
    if qty_value is None:
        missing.append("qty")
    if missing:
        raise InputError("Please fill all fields", missing)

    material = Material(
        id=next_id((m.id for m in state.materials), now_ms),
        name=str(name).strip(),
        cost_per_unit=price_value / qty_value,
        original_price=price_value,
        original_qty=qty_value,
    )
    return state.evolve(materials=state.materials + (material,)), material


def _coerce_id(material_id) -> Optional[int]:
    # Selection lists hand ids back as strings
    try:
        return int(str(material_id).strip())
    except (TypeError, ValueError):
        return None


def find_material(state: AppState, material_id) -> Optional[Material]:
    wanted = _coerce_id(material_id)
    if wanted is None:
        return None
    for material in state.materials:
        if material.id == wanted:
            return material
    return None


def delete_material(state: AppState, material_id) -> Tuple[AppState, bool]:
    """Remove the material with this id. Unknown ids are a no-op."""
    target = find_material(state, material_id)
    if target is None:
        logger.debug("delete_material: no material with id %s", material_id)
        return state, False
    remaining = tuple(m for m in state.materials if m.id != target.id)
    return state.evolve(materials=remaining), True


def edit_material(state: AppState, material_id) -> Optional[MaterialDraft]:
    """Form values for re-entering a material, or None if the id is unknown."""
    material = find_material(state, material_id)
    if material is None:
        return None

    if material.is_legacy:
        logger.warning("Material %s has no stored price/qty, substituting defaults", material.id)
        return MaterialDraft(name=material.name, price=0.0, qty=1.0, warning=LEGACY_MATERIAL_WARNING)

    return MaterialDraft(
        name=material.name,
        price=material.original_price,
        qty=material.original_qty,
    )


def list_materials(state: AppState) -> List[Tuple[int, str, float]]:
    """(id, name, cost_per_unit) in insertion order."""
    return [(m.id, m.name, m.cost_per_unit) for m in state.materials]
