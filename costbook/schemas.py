from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel
from typing import Optional, Union


# --- Stored records (camelCase on disk, snake_case in Python) ---

class StoredRecord(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    def to_storage(self) -> dict:
        # Absent legacy fields stay absent so reads never rewrite old records
        return self.model_dump(by_alias=True, exclude_none=True)


class Material(StoredRecord):
    id: int
    name: str
    cost_per_unit: float
    original_price: Optional[float] = None  # missing on legacy entries
    original_qty: Optional[float] = None

    @property
    def is_legacy(self) -> bool:
        return not self.original_price or not self.original_qty


class RecipeLine(StoredRecord):
    name: str
    cost_total: float
    qty: float


class Product(StoredRecord):
    id: int
    name: str
    material_cost: float = 0.0
    labor_cost: Optional[float] = None  # missing on legacy entries
    total_cost: Optional[float] = None
    selling_price: float
    profit: float
    margin: float

    @property
    def effective_labor_cost(self) -> float:
        return self.labor_cost or 0.0

    @property
    def effective_total_cost(self) -> float:
        if self.total_cost is None:
            return self.material_cost + self.effective_labor_cost
        return self.total_cost


class MaterialDraft(BaseModel):
    """Field values handed back to the material form by an edit."""
    name: str
    price: float
    qty: float
    warning: Optional[str] = None
    removed: bool = False


class WalletSummary(BaseModel):
    total_revenue: float
    total_cost: float
    extra_expenses: float
    net_profit: float


# --- Request bodies ---
# Form fields arrive as numbers or raw strings; the core does the validation.

# Strict types keep JSON booleans as booleans so the core rejects them
FieldValue = Union[StrictFloat, StrictInt, StrictBool, str, None]


class MaterialCreate(BaseModel):
    name: Optional[str] = None
    price: FieldValue = None
    qty: FieldValue = None


class RecipeLineCreate(BaseModel):
    material_id: Union[StrictInt, str, None] = None
    qty: FieldValue = None


class ProductCreate(BaseModel):
    name: Optional[str] = None
    selling_price: FieldValue = None
    labor_minutes: FieldValue = None
    labor_rate: FieldValue = None


class ExpensesUpdate(BaseModel):
    extra_expenses: FieldValue = None
