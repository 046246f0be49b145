"""
Persistence adapter over the local key-value table.

Three keys, all stored as text:
    materials      JSON array of Material records
    products       JSON array of Product records
    extraExpenses  numeric string

Reads never fail: a missing or unparseable key yields an empty collection or
zero, and malformed entries inside a collection are skipped with a warning.
Writes replace whole collections; there are no partial updates.
"""

import json
import logging
from typing import Callable, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from . import models
from .database import SessionLocal
from .parsing import format_number, to_number
from .schemas import Material, Product

logger = logging.getLogger(__name__)

MATERIALS_KEY = "materials"
PRODUCTS_KEY = "products"
EXTRA_EXPENSES_KEY = "extraExpenses"

RecordT = TypeVar("RecordT", bound=BaseModel)


class LocalStore:
    """get/set over named text values, plus typed helpers for the three keys."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    # --- Raw key-value access ---

    def get_item(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            row = db.query(models.StoredValue).filter(models.StoredValue.key == key).first()
            return row.value if row else None
        finally:
            db.close()

    def set_items(self, items: dict) -> None:
        """Write several keys in one transaction."""
        db = self.session_factory()
        try:
            for key, value in items.items():
                row = db.query(models.StoredValue).filter(models.StoredValue.key == key).first()
                if row:
                    row.value = value
                else:
                    db.add(models.StoredValue(key=key, value=value))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def set_item(self, key: str, value: str) -> None:
        self.set_items({key: value})

    # --- Collections ---

    def _load_collection(self, key: str, record_type: Type[RecordT]) -> List[RecordT]:
        raw = self.get_item(key)
        if raw is None:
            return []
        try:
            entries = json.loads(raw)
        except ValueError:
            logger.warning("Stored %s is not valid JSON, starting empty", key)
            return []
        if not isinstance(entries, list):
            logger.warning("Stored %s is not a list, starting empty", key)
            return []

        records = []
        for entry in entries:
            try:
                records.append(record_type.model_validate(entry))
            except ValidationError as e:
                logger.warning("Skipping malformed %s entry %r: %s", key, entry, e.errors())
        return records

    @staticmethod
    def _dump_collection(records: Iterable[BaseModel]) -> str:
        return json.dumps([r.to_storage() for r in records], ensure_ascii=False)

    def load_materials(self) -> List[Material]:
        return self._load_collection(MATERIALS_KEY, Material)

    def load_products(self) -> List[Product]:
        return self._load_collection(PRODUCTS_KEY, Product)

    def save_materials(self, materials: Iterable[Material]) -> None:
        self.set_item(MATERIALS_KEY, self._dump_collection(materials))

    def save_products(self, products: Iterable[Product]) -> None:
        self.set_item(PRODUCTS_KEY, self._dump_collection(products))

    def save_collections(self, materials: Iterable[Material], products: Iterable[Product]) -> None:
        """Persist both collections together, as every mutation does."""
        self.set_items({
            MATERIALS_KEY: self._dump_collection(materials),
            PRODUCTS_KEY: self._dump_collection(products),
        })

    # --- Scalar ---

    def load_extra_expenses(self) -> float:
        value = to_number(self.get_item(EXTRA_EXPENSES_KEY))
        return 0.0 if value is None else value

    def save_extra_expenses(self, value: float) -> None:
        self.set_item(EXTRA_EXPENSES_KEY, format_number(value))
