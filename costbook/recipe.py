"""
Recipe Builder: the working list of material lines for a product in progress.

Lines copy the material name and price at the moment they are added. The
recipe lives only in memory and is cleared when a product is saved.
"""

import logging
from typing import Iterable, Optional, Tuple

from .catalog import find_material
from .errors import InputError
from .parsing import is_blank, to_positive
from .schemas import RecipeLine
from .state import AppState

logger = logging.getLogger(__name__)


def add_line(state: AppState, material_id, qty) -> Tuple[AppState, Optional[RecipeLine]]:
    qty_value = to_positive(qty)

    missing = []
    if is_blank(material_id):
        missing.append("material_id")
    if qty_value is None:
        missing.append("qty")
    if missing:
        raise InputError("Select a material and quantity", missing)

    material = find_material(state, material_id)
    if material is None:
        # Material was deleted after the selection list was rendered
        logger.debug("add_line: material %s no longer exists", material_id)
        return state, None

    line = RecipeLine(
        name=material.name,
        cost_total=material.cost_per_unit * qty_value,
        qty=qty_value,
    )
    return state.evolve(recipe=state.recipe + (line,)), line


def current_total(lines: Iterable[RecipeLine]) -> float:
    return sum((line.cost_total for line in lines), 0.0)


def reset(state: AppState) -> AppState:
    return state.evolve(recipe=())
