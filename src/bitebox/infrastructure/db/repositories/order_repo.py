from __future__ import annotations

from datetime import datetime, timezone
from typing import Collection

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session, selectinload

from bitebox.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from bitebox.domain.common.ids import AccountId, MenuItemId, OrderId
from bitebox.domain.common.money import Money
from bitebox.domain.order.entities import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from bitebox.infrastructure.db.models.order import OrderLineModel, OrderModel
from bitebox.infrastructure.db.session import get_engine


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: Order) -> None:
        order_model = self._to_model(order)
        with Session(self._engine) as session:
            session.add(order_model)
            session.commit()

    def get(self, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.lines))
            .where(OrderModel.id == str(order_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return self._to_domain(model)

    def list_for_user(
        self,
        user_id: AccountId,
        statuses: Collection[OrderStatus],
    ) -> list[Order]:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.lines))
            .where(
                OrderModel.user_id == str(user_id),
                OrderModel.status.in_([status.value for status in statuses]),
            )
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            return [self._to_domain(model) for model in models]

    def list_for_vendor(
        self,
        vendor_id: AccountId,
        status: OrderStatus | None,
        limit: int,
    ) -> list[Order]:
        statement = (
            select(OrderModel)
            .options(selectinload(OrderModel.lines))
            .where(OrderModel.vendor_id == str(vendor_id))
        )
        if status is not None:
            statement = statement.where(OrderModel.status == status.value)
        statement = statement.order_by(OrderModel.created_at.desc(), OrderModel.id.desc()).limit(
            limit
        )
        with Session(self._engine) as session:
            models = list(session.execute(statement).scalars().all())
            return [self._to_domain(model) for model in models]

    def update_status_with_version(
        self,
        order_id: OrderId,
        new_status: OrderStatus,
        expected_version: int,
        updated_at: datetime,
    ) -> Order:
        statement = (
            update(OrderModel)
            .where(
                OrderModel.id == str(order_id),
                OrderModel.version == expected_version,
            )
            .values(
                status=new_status.value,
                updated_at=updated_at,
                version=OrderModel.version + 1,
            )
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                raise OptimisticConcurrencyError(f"order {order_id} version conflict")
            session.commit()

        updated = self.get(order_id)
        if updated is None:
            raise RuntimeError(f"order {order_id} not found after status update")
        return updated

    def _to_model(self, order: Order) -> OrderModel:
        order_model = OrderModel(
            id=str(order.order_id),
            user_id=str(order.user_id),
            vendor_id=str(order.vendor_id),
            user_phone_number=order.user_phone_number,
            status=order.status.value,
            payment_method=order.payment_method.value,
            payment_status=order.payment_status.value,
            total_cents=order.total.amount_cents,
            version=order.version,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        order_model.lines = [
            OrderLineModel(
                order_id=str(order.order_id),
                position=position,
                menu_item_id=str(line.menu_item_id),
                name=line.name,
                quantity=line.quantity,
                unit_price_cents=line.unit_price.amount_cents,
            )
            for position, line in enumerate(order.lines)
        ]
        return order_model

    def _to_domain(self, model: OrderModel) -> Order:
        lines = [
            OrderLine(
                menu_item_id=MenuItemId(line.menu_item_id),
                name=line.name,
                quantity=line.quantity,
                unit_price=Money(amount_cents=line.unit_price_cents),
            )
            for line in model.lines
        ]
        return Order(
            order_id=OrderId(model.id),
            user_id=AccountId(model.user_id),
            vendor_id=AccountId(model.vendor_id),
            user_phone_number=model.user_phone_number,
            lines=lines,
            total=Money(amount_cents=model.total_cents),
            payment_method=PaymentMethod(model.payment_method),
            payment_status=PaymentStatus(model.payment_status),
            status=OrderStatus(model.status),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
            version=model.version,
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
