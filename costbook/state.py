"""
Application state.

AppState is immutable; every operation in catalog/recipe/ledger/wallet takes a
state and returns a new one. The Workspace owns the current instance.
"""

from dataclasses import dataclass, replace
from typing import Tuple

from .schemas import Material, Product, RecipeLine


@dataclass(frozen=True)
class AppState:
    materials: Tuple[Material, ...] = ()
    products: Tuple[Product, ...] = ()
    recipe: Tuple[RecipeLine, ...] = ()  # working recipe, never persisted
    extra_expenses: float = 0.0

    def evolve(self, **changes) -> "AppState":
        return replace(self, **changes)
