from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bitebox.domain.common.ids import AccountId, MenuItemId
from bitebox.domain.common.money import Money


class DietType(str, Enum):
    VEG = "Veg"
    NON_VEG = "Non-Veg"


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    vendor_id: AccountId
    name: str
    description: str | None
    price: Money
    category: str
    is_available: bool = True
    diet_type: DietType = DietType.VEG

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.category.strip():
            raise ValueError("category must be non-empty")

    def is_owned_by(self, vendor_id: AccountId) -> bool:
        return str(self.vendor_id) == str(vendor_id)
