from __future__ import annotations

from bitebox.application.dto.responses import AccountResponse
from bitebox.domain.account.entities import Account


def to_account_response(account: Account) -> AccountResponse:
    details = account.vendor_details
    return AccountResponse(
        id=str(account.account_id),
        username=account.username,
        email=account.email,
        phoneNumber=account.phone_number,
        role=account.role.value,
        walletBalance=account.wallet_balance.to_decimal(),
        restaurantName=details.restaurant_name if details else None,
        rating=details.rating if details else None,
        numReviews=details.num_reviews if details else None,
    )
