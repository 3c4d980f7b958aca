from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fakes import (
    FakeAccountRepository,
    FakeMenuRepository,
    FakeOrderRepository,
    FakeReviewRepository,
    RecordingTransport,
    make_item,
    make_user,
    make_vendor,
)

from bitebox.application.use_cases.notification_dispatcher import NotificationDispatcher


@pytest.fixture
def accounts() -> FakeAccountRepository:
    return FakeAccountRepository(
        [make_user(), make_vendor(), make_vendor("vnd_002", name="Green Bowl")]
    )


@pytest.fixture
def menu() -> FakeMenuRepository:
    return FakeMenuRepository(
        [
            make_item(),
            make_item("itm_002", name="Garlic Bread", price="80.00", category="Sides"),
            make_item("itm_003", name="Tiramisu", price="120.00", is_available=False),
            make_item("itm_101", vendor_id="vnd_002", name="Quinoa Bowl", price="180.00"),
        ]
    )


@pytest.fixture
def orders() -> FakeOrderRepository:
    return FakeOrderRepository()


@pytest.fixture
def reviews() -> FakeReviewRepository:
    return FakeReviewRepository()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport(connected={"usr_001", "vnd_001"})


@pytest.fixture
def dispatcher(transport: RecordingTransport) -> NotificationDispatcher:
    return NotificationDispatcher(transport)
