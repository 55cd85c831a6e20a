# ==============================================================================
# REPOSITORIO DE PEDIDOS
# ==============================================================================
# Encapsula el acceso a papalote-orders.json (lista, más reciente primero).
# ==============================================================================

from typing import Any, Dict, List, Optional

from .base import ListRepository

ORDERS_KEY = 'papalote-orders'


class OrderRepository(ListRepository):
    """
    Repositorio de pedidos.

    Las transiciones de estado sobrescriben campos del registro sin control
    de concurrencia: la última escritura gana.
    """

    def __init__(self, base_path: str):
        super().__init__(base_path, ORDERS_KEY)

    def get_orders(self) -> List[Dict[str, Any]]:
        return self.get_all()

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by('id', order_id)

    def get_by_number(self, order_number: str) -> Optional[Dict[str, Any]]:
        return self.find_by('order_number', order_number)

    def add_order(self, order: Dict[str, Any]) -> None:
        """Guarda un pedido nuevo al inicio de la lista."""
        self.prepend(order)

    def update_order(self, order_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Actualiza campos de un pedido.

        Returns:
            Pedido actualizado o None si no existe
        """
        return self.update_where('id', order_id, updates)
