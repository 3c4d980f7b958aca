from __future__ import annotations

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session

from bitebox.application.ports.repositories import AccountRepository
from bitebox.domain.account.entities import Account, AccountRole, VendorDetails
from bitebox.domain.common.ids import AccountId
from bitebox.domain.common.money import Money
from bitebox.infrastructure.db.models.account import AccountModel
from bitebox.infrastructure.db.session import get_engine


class SqlAlchemyAccountRepository(AccountRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, account_id: AccountId) -> Account | None:
        with Session(self._engine) as session:
            model = session.get(AccountModel, str(account_id))
        if model is None:
            return None
        return self._to_domain(model)

    def get_by_email(self, email: str) -> Account | None:
        statement = select(AccountModel).where(AccountModel.email == email.lower()).limit(1)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
        if model is None:
            return None
        return self._to_domain(model)

    def save(self, account: Account) -> None:
        with Session(self._engine) as session:
            session.merge(self._to_model(account))
            session.commit()

    def debit_wallet(self, account_id: AccountId, amount: Money) -> bool:
        statement = (
            update(AccountModel)
            .where(
                AccountModel.id == str(account_id),
                AccountModel.wallet_balance_cents >= amount.amount_cents,
            )
            .values(wallet_balance_cents=AccountModel.wallet_balance_cents - amount.amount_cents)
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            if result.rowcount != 1:
                session.rollback()
                return False
            session.commit()
        return True

    def credit_wallet(self, account_id: AccountId, amount: Money) -> None:
        statement = (
            update(AccountModel)
            .where(AccountModel.id == str(account_id))
            .values(wallet_balance_cents=AccountModel.wallet_balance_cents + amount.amount_cents)
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def update_rating(self, vendor_id: AccountId, rating: float, num_reviews: int) -> None:
        statement = (
            update(AccountModel)
            .where(
                AccountModel.id == str(vendor_id),
                AccountModel.role == AccountRole.VENDOR.value,
            )
            .values(rating=rating, num_reviews=num_reviews)
        )
        with Session(self._engine) as session:
            session.execute(statement)
            session.commit()

    def _to_model(self, account: Account) -> AccountModel:
        details = account.vendor_details
        return AccountModel(
            id=str(account.account_id),
            role=account.role.value,
            username=account.username,
            email=account.email.lower(),
            phone_number=account.phone_number,
            wallet_balance_cents=account.wallet_balance.amount_cents,
            restaurant_name=details.restaurant_name if details else None,
            restaurant_address=details.restaurant_address if details else None,
            cuisine=details.cuisine if details else None,
            rating=details.rating if details else 0.0,
            num_reviews=details.num_reviews if details else 0,
        )

    def _to_domain(self, model: AccountModel) -> Account:
        role = AccountRole(model.role)
        details: VendorDetails | None = None
        if role == AccountRole.VENDOR:
            details = VendorDetails(
                restaurant_name=model.restaurant_name or model.username,
                restaurant_address=model.restaurant_address,
                cuisine=model.cuisine,
                rating=model.rating,
                num_reviews=model.num_reviews,
            )
        return Account(
            account_id=AccountId(model.id),
            role=role,
            username=model.username,
            email=model.email,
            phone_number=model.phone_number,
            wallet_balance=Money(amount_cents=model.wallet_balance_cents),
            vendor_details=details,
        )
