# ==============================================================================
# REPOSITORIO DE PEDIDOS VISTOS POR VENDEDOR
# ==============================================================================
# Encapsula el acceso a papalote-seen-orders.json
# Formato: {"taller mendoza": ["ORD-...", ...]}
# La clave es el nombre del vendedor en minúsculas.
# ==============================================================================

from typing import List

from .base import DictRepository

SEEN_ORDERS_KEY = 'papalote-seen-orders'


class SeenOrdersRepository(DictRepository):
    """IDs de pedidos que cada vendedor ya revisó."""

    def __init__(self, base_path: str):
        super().__init__(base_path, SEEN_ORDERS_KEY)

    @staticmethod
    def _seller_key(seller_name: str) -> str:
        return (seller_name or '').strip().lower()

    def get_seen(self, seller_name: str) -> List[str]:
        seen = self.get_by_id(self._seller_key(seller_name))
        return list(seen) if isinstance(seen, list) else []

    def set_seen(self, seller_name: str, order_ids: List[str]) -> None:
        self.update(self._seller_key(seller_name), list(order_ids))
