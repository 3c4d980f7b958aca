from __future__ import annotations

from dataclasses import dataclass

from bitebox.domain.account.entities import AccountRole
from bitebox.domain.common.ids import AccountId


@dataclass(frozen=True)
class TraceContext:
    trace_id: str | None
    request_id: str | None


@dataclass(frozen=True)
class CallerIdentity:
    account_id: AccountId
    role: AccountRole

    @property
    def is_vendor(self) -> bool:
        return self.role == AccountRole.VENDOR
