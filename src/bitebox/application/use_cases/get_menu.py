from __future__ import annotations

from bitebox.application.dto.responses import VendorMenuResponse
from bitebox.application.errors import VendorNotFoundError
from bitebox.application.mappers.menu_mapper import to_vendor_menu_response
from bitebox.application.ports.repositories import AccountRepository, MenuRepository
from bitebox.domain.common.ids import AccountId


class GetVendorMenu:
    def __init__(
        self,
        account_repository: AccountRepository,
        menu_repository: MenuRepository,
    ) -> None:
        self._account_repository = account_repository
        self._menu_repository = menu_repository

    def execute(self, vendor_id: AccountId) -> VendorMenuResponse:
        vendor = self._account_repository.get(vendor_id)
        if vendor is None or not vendor.is_vendor:
            raise VendorNotFoundError(f"vendor {vendor_id} not found")
        items = self._menu_repository.list_for_vendor(vendor_id)
        return to_vendor_menu_response(vendor, items)
