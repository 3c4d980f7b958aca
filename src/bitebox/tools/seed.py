from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Engine, inspect

from bitebox.domain.account.entities import Account, AccountRole, VendorDetails
from bitebox.domain.common.ids import AccountId, MenuItemId
from bitebox.domain.common.money import Money
from bitebox.domain.menu.entities import DietType, MenuItem
from bitebox.infrastructure.db.repositories.account_repo import SqlAlchemyAccountRepository
from bitebox.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from bitebox.infrastructure.db.session import get_engine

REQUIRED_TABLES = {"accounts", "menu_items", "orders", "order_lines", "reviews"}

DEMO_USER_ID = AccountId("usr_001")
DEMO_VENDOR_ID = AccountId("vnd_001")
OTHER_VENDOR_ID = AccountId("vnd_002")


def demo_accounts() -> list[Account]:
    return [
        Account(
            account_id=DEMO_USER_ID,
            role=AccountRole.USER,
            username="asha",
            email="asha@example.com",
            phone_number="+15550100001",
            wallet_balance=Money.from_decimal(Decimal("500.00")),
        ),
        Account(
            account_id=DEMO_VENDOR_ID,
            role=AccountRole.VENDOR,
            username="slice_house",
            email="owner@slicehouse.example.com",
            phone_number="+15550100002",
            wallet_balance=Money.zero(),
            vendor_details=VendorDetails(
                restaurant_name="Slice House",
                restaurant_address="12 Market Street",
                cuisine="Italian",
            ),
        ),
        Account(
            account_id=OTHER_VENDOR_ID,
            role=AccountRole.VENDOR,
            username="green_bowl",
            email="hello@greenbowl.example.com",
            phone_number=None,
            wallet_balance=Money.zero(),
            vendor_details=VendorDetails(
                restaurant_name="Green Bowl",
                restaurant_address="4 Orchard Lane",
                cuisine="Salads",
            ),
        ),
    ]


def demo_menu_items() -> list[MenuItem]:
    return [
        MenuItem(
            item_id=MenuItemId("itm_001"),
            vendor_id=DEMO_VENDOR_ID,
            name="Pizza",
            description="Tomato, mozzarella, basil",
            price=Money.from_decimal(Decimal("300.00")),
            category="Mains",
        ),
        MenuItem(
            item_id=MenuItemId("itm_002"),
            vendor_id=DEMO_VENDOR_ID,
            name="Chicken Alfredo",
            description="Fettuccine, creamy parmesan sauce",
            price=Money.from_decimal(Decimal("250.00")),
            category="Mains",
            diet_type=DietType.NON_VEG,
        ),
        MenuItem(
            item_id=MenuItemId("itm_003"),
            vendor_id=DEMO_VENDOR_ID,
            name="Tiramisu",
            description="Espresso-soaked ladyfingers",
            price=Money.from_decimal(Decimal("120.00")),
            category="Desserts",
            is_available=False,
        ),
        MenuItem(
            item_id=MenuItemId("itm_101"),
            vendor_id=OTHER_VENDOR_ID,
            name="Quinoa Bowl",
            description="Quinoa, chickpeas, greens",
            price=Money.from_decimal(Decimal("180.00")),
            category="Bowls",
        ),
    ]


def seed_demo_data(engine: Engine | None = None) -> None:
    engine = engine or get_engine(timeout_seconds=2.0)
    accounts = SqlAlchemyAccountRepository(engine)
    menu = SqlAlchemyMenuRepository(engine)
    for account in demo_accounts():
        accounts.save(account)
    for item in demo_menu_items():
        menu.add(item)


def main() -> None:
    engine = get_engine(timeout_seconds=2.0)
    if not REQUIRED_TABLES.issubset(set(inspect(engine).get_table_names())):
        print("no schema yet")
        return

    seed_demo_data(engine)
    print("seed complete")


if __name__ == "__main__":
    main()
