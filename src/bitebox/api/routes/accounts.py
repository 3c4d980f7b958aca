from __future__ import annotations

from fastapi import APIRouter, Depends

from bitebox.api.deps import get_caller_identity
from bitebox.application.dto.responses import AccountResponse
from bitebox.application.use_cases.context import CallerIdentity
from bitebox.application.use_cases.get_account import GetAccount
from bitebox.infrastructure.db.repositories.account_repo import SqlAlchemyAccountRepository

router = APIRouter()


@router.get("/v1/accounts/me", response_model=AccountResponse)
def get_my_account(caller: CallerIdentity = Depends(get_caller_identity)) -> AccountResponse:
    return GetAccount(account_repository=SqlAlchemyAccountRepository()).execute(
        account_id=caller.account_id
    )
