"""
Workspace: the single costing session.

Holds the current AppState, applies the pure catalog/recipe/ledger/wallet
operations to it, and persists after every mutation. State is read from the
store once, when the workspace is loaded.

Destructive operations (deleting a material or product, and the delete half
of a material edit) only run when called with confirmed=True; otherwise they
raise ConfirmationRequired before touching anything.
"""

import logging
import threading
import time
from typing import Callable, Optional

from . import catalog, ledger, recipe, wallet
from .errors import ConfirmationRequired
from .schemas import Material, MaterialDraft, Product, RecipeLine, WalletSummary
from .state import AppState
from .storage import LocalStore

logger = logging.getLogger(__name__)

DELETE_MATERIAL_PROMPT = "Are you sure you want to delete this material?"
DELETE_PRODUCT_PROMPT = "Delete this audit?"


def _clock_ms() -> int:
    return int(time.time() * 1000)


class Workspace:

    def __init__(self, store: LocalStore, state: Optional[AppState] = None,
                 clock: Callable[[], int] = _clock_ms):
        self.store = store
        self.state = state or AppState()
        self.clock = clock
        # Sync endpoints run on a thread pool; operations still apply one at a time
        self._lock = threading.RLock()

    @classmethod
    def load(cls, store: LocalStore, clock: Callable[[], int] = _clock_ms) -> "Workspace":
        state = AppState(
            materials=tuple(store.load_materials()),
            products=tuple(store.load_products()),
            extra_expenses=store.load_extra_expenses(),
        )
        logger.info(
            "Loaded %d materials, %d products (extra expenses %.2f)",
            len(state.materials), len(state.products), state.extra_expenses,
        )
        return cls(store, state=state, clock=clock)

    def _persist(self, state: AppState) -> None:
        self.store.save_collections(state.materials, state.products)
        self.state = state

    # --- Material Catalog ---

    def add_material(self, name, price, qty) -> Material:
        with self._lock:
            state, material = catalog.add_material(self.state, name, price, qty, self.clock())
            self._persist(state)
            logger.info("Added material %s (%s) at %.4f/unit", material.id, material.name, material.cost_per_unit)
            return material

    def delete_material(self, material_id, confirmed: bool = False) -> bool:
        with self._lock:
            if not confirmed:
                raise ConfirmationRequired(DELETE_MATERIAL_PROMPT)
            state, removed = catalog.delete_material(self.state, material_id)
            self._persist(state)
            return removed

    def edit_material(self, material_id, confirmed: bool = False) -> Optional[MaterialDraft]:
        """
        Hand the material's fields back for re-entry and delete it.

        Declining confirmation still returns the draft but keeps the material,
        the same as answering "no" to the delete prompt.
        """
        with self._lock:
            draft = catalog.edit_material(self.state, material_id)
            if draft is None:
                return None
            if confirmed:
                removed = self.delete_material(material_id, confirmed=True)
                draft = draft.model_copy(update={"removed": removed})
            return draft

    # --- Recipe Builder ---

    def add_recipe_line(self, material_id, qty) -> Optional[RecipeLine]:
        with self._lock:
            self.state, line = recipe.add_line(self.state, material_id, qty)
            return line

    def reset_recipe(self) -> None:
        with self._lock:
            self.state = recipe.reset(self.state)

    def recipe_total(self) -> float:
        return recipe.current_total(self.state.recipe)

    # --- Product Ledger ---

    def save_product(self, name, selling_price, labor_minutes, labor_rate) -> Product:
        with self._lock:
            state, product = ledger.save_product(
                self.state, name, selling_price, labor_minutes, labor_rate, self.clock(),
            )
            self._persist(state)
            logger.info(
                "Saved product %s (%s): cost %.2f, price %.2f, margin %.1f%%",
                product.id, product.name, product.total_cost, product.selling_price, product.margin,
            )
            self.recompute_wallet()
            return product

    def delete_product(self, product_id, confirmed: bool = False) -> bool:
        with self._lock:
            if not confirmed:
                raise ConfirmationRequired(DELETE_PRODUCT_PROMPT)
            state, removed = ledger.delete_product(self.state, product_id)
            self._persist(state)
            if removed:
                self.recompute_wallet()
            return removed

    # --- Wallet ---

    def recompute_wallet(self, extra_expenses=None) -> WalletSummary:
        """Recompute totals; None keeps the current extra expenses. Always persists them."""
        with self._lock:
            if extra_expenses is None:
                expenses = self.state.extra_expenses
            else:
                expenses = wallet.parse_expenses(extra_expenses)
            summary = wallet.recompute(self.state.products, expenses)
            self.store.save_extra_expenses(summary.extra_expenses)
            self.state = self.state.evolve(extra_expenses=summary.extra_expenses)
            return summary
