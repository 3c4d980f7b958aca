from __future__ import annotations

from bitebox.application.dto.responses import AccountResponse
from bitebox.application.errors import UserNotFoundError
from bitebox.application.mappers.account_mapper import to_account_response
from bitebox.application.ports.repositories import AccountRepository
from bitebox.domain.common.ids import AccountId


class GetAccount:
    def __init__(self, account_repository: AccountRepository) -> None:
        self._account_repository = account_repository

    def execute(self, account_id: AccountId) -> AccountResponse:
        account = self._account_repository.get(account_id)
        if account is None:
            raise UserNotFoundError(f"account {account_id} not found")
        return to_account_response(account)
