from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from bitebox.application.ports.repositories import MenuRepository
from bitebox.domain.common.ids import AccountId, MenuItemId
from bitebox.domain.common.money import Money
from bitebox.domain.menu.entities import DietType, MenuItem
from bitebox.infrastructure.db.models.menu import MenuItemModel
from bitebox.infrastructure.db.session import get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get_item(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._engine) as session:
            model = session.get(MenuItemModel, str(item_id))
        if model is None:
            return None
        return self._to_domain(model)

    def list_for_vendor(self, vendor_id: AccountId) -> list[MenuItem]:
        statement = (
            select(MenuItemModel)
            .where(MenuItemModel.vendor_id == str(vendor_id))
            .order_by(MenuItemModel.category, MenuItemModel.name)
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
        return [self._to_domain(model) for model in models]

    def add(self, item: MenuItem) -> None:
        with Session(self._engine) as session:
            session.merge(
                MenuItemModel(
                    id=str(item.item_id),
                    vendor_id=str(item.vendor_id),
                    name=item.name,
                    description=item.description,
                    price_cents=item.price.amount_cents,
                    category=item.category,
                    diet_type=item.diet_type.value,
                    is_available=item.is_available,
                )
            )
            session.commit()

    def _to_domain(self, model: MenuItemModel) -> MenuItem:
        return MenuItem(
            item_id=MenuItemId(model.id),
            vendor_id=AccountId(model.vendor_id),
            name=model.name,
            description=model.description,
            price=Money(amount_cents=model.price_cents),
            category=model.category,
            is_available=model.is_available,
            diet_type=DietType(model.diet_type),
        )
