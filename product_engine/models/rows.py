"""Row records owned by the product form components.

Every list the form edits is a list of one of these pydantic models. They
carry no behavior beyond field defaults; the owning component enforces the
collection-level invariants (renumbered levels, default-unit exclusivity,
positional photo primacy).
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ScopeMode(str, Enum):
    """Which threshold list a scoped store reads and writes."""

    GLOBAL = "global"
    PER_SCOPE = "per_scope"


class RangeDomain(str, Enum):
    """Unit of the from/to range on a threshold row."""

    QUANTITY = "quantity"
    DAYS = "days"
    PRICE = "price"


class ProductType(str, Enum):
    INVENTORY = "inventory"
    SERVICE = "service"
    COMPO = "compo"


class TrackInventoryType(str, Enum):
    QUANTITY = "quantity"
    LOT = "lot"
    SERIAL = "serial"


# ---------------------------------------------------------------------------
# Attributes & variants
# ---------------------------------------------------------------------------

class AttributeRow(BaseModel):
    """One attribute with the set of values chosen for it.

    ``values`` behaves as an insertion-ordered set; AttributeSet keeps it
    free of duplicates.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int
    attribute_key: str = ""
    values: list[str] = Field(default_factory=list)
    apply: bool = True


class Variant(BaseModel):
    """One element of the cartesian product of the chosen attribute values."""

    id: int
    assignment: list[tuple[str, str]] = Field(default_factory=list)
    display_name: str
    apply: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        """Content-addressed identity, stable across regenerations."""
        data = json.dumps(self.assignment, separators=(",", ":"))
        return hashlib.sha256(data.encode()).hexdigest()[:16]


# ---------------------------------------------------------------------------
# Thresholds
# ---------------------------------------------------------------------------

class ThresholdRow(BaseModel):
    """A numbered from/to range with a notify flag.

    Range bounds are kept as the text the user typed. No ordering between
    ``range_from`` and ``range_to`` is enforced.
    """

    model_config = ConfigDict(validate_assignment=True)

    level: int = Field(ge=1)
    range_from: str = ""
    range_to: str = ""
    notify: bool = False


# ---------------------------------------------------------------------------
# Units & bill of materials
# ---------------------------------------------------------------------------

class PriceCell(BaseModel):
    tier_id: str
    amount: Decimal = Decimal("0")


class UnitRow(BaseModel):
    id: int
    packing_label: str = ""
    parts_count: Optional[Decimal] = None
    is_default_sales: bool = False
    is_default_purchase: bool = False
    last_cost: Optional[Decimal] = None
    avg_cost: Optional[Decimal] = None
    price_vector: list[PriceCell] = Field(default_factory=list)


class CompoItem(BaseModel):
    """Bill-of-materials component. Quantity and cost stay as typed."""

    id: int
    product: str = ""
    unit: str = ""
    quantity: str = ""
    cost: str = ""


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

class PhotoEntry(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    image_ref: Any = None
    caption: str = ""


class Attachment(BaseModel):
    id: int
    filename: str
    size_bytes: int = Field(0, ge=0)
    handle: Any = None
