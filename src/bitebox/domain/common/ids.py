from __future__ import annotations

from typing import NewType

AccountId = NewType("AccountId", str)
MenuItemId = NewType("MenuItemId", str)
OrderId = NewType("OrderId", str)
ReviewId = NewType("ReviewId", str)
