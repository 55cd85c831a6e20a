# ==============================================================================
# REPOSITORIO DE DIRECCIONES GUARDADAS
# ==============================================================================
# Encapsula el acceso a papalote-addresses.json
# ==============================================================================

from typing import Any, Dict, List

from .base import ListRepository

ADDRESSES_KEY = 'papalote-addresses'


class AddressRepository(ListRepository):
    """Libreta de direcciones del comprador."""

    def __init__(self, base_path: str):
        super().__init__(base_path, ADDRESSES_KEY)

    def get_addresses(self) -> List[Dict[str, Any]]:
        return self.get_all()

    def save_addresses(self, addresses: List[Dict[str, Any]]) -> None:
        self.save_all(addresses)

    def delete_address(self, address_id: str) -> bool:
        return self.remove_where('id', address_id) > 0
