# ==============================================================================
# SERVICIO DE PEDIDOS
# ==============================================================================
# Consulta y cambios de estado de pedidos, libreta de direcciones del
# comprador y notificaciones de pedidos nuevos para vendedores.
# ==============================================================================

import logging
import secrets
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from papalote.errors import ERROR_MESSAGES, StorageError, log_error
from papalote.models.entities import OrderStatus, SavedAddress, ShippingAddress
from papalote.repositories.interfaces import (
    IAddressRepository,
    IOrderRepository,
    ISeenOrdersRepository,
)
from papalote.validators import validate_shipping_address

logger = logging.getLogger(__name__)

# Transiciones permitidas desde cada estado
STATUS_TRANSITIONS: Dict[str, tuple] = {
    OrderStatus.PENDING.value: (OrderStatus.CONFIRMED.value, OrderStatus.CANCELLED.value),
    OrderStatus.CONFIRMED.value: (OrderStatus.PROCESSING.value, OrderStatus.CANCELLED.value),
    OrderStatus.PROCESSING.value: (OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value),
    OrderStatus.SHIPPED.value: (OrderStatus.DELIVERED.value,),
    OrderStatus.DELIVERED.value: (),
    OrderStatus.CANCELLED.value: (),
}

STATUS_LABELS = {
    'pending': 'Pendiente',
    'confirmed': 'Confirmado',
    'processing': 'En preparación',
    'shipped': 'Enviado',
    'delivered': 'Entregado',
    'cancelled': 'Cancelado',
}

BASE36 = '0123456789abcdefghijklmnopqrstuvwxyz'


def to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36[remainder])
    return ''.join(reversed(digits))


def random_base36(length: int) -> str:
    return ''.join(secrets.choice(BASE36) for _ in range(length))


def generate_address_id() -> str:
    """addr-<milisegundos en base36>-<4 aleatorios>"""
    return f"addr-{to_base36(int(time.time() * 1000))}-{random_base36(4)}"


def can_transition(current: str, new_status: str) -> bool:
    return new_status in STATUS_TRANSITIONS.get(current, ())


def _same_seller(item: Dict[str, Any], seller_name: str) -> bool:
    return (item.get('maker') or '').lower() == seller_name.lower()


def get_seller_items(order: Dict[str, Any], seller_name: str) -> List[Dict[str, Any]]:
    """Productos del pedido que pertenecen al vendedor (por nombre de artesano)."""
    return [i for i in order.get('items', []) if _same_seller(i, seller_name)]


def calculate_seller_total(order: Dict[str, Any], seller_name: str) -> float:
    return round(sum(i['price'] * i['quantity'] for i in get_seller_items(order, seller_name)), 2)


class OrderService:
    """
    Servicio de pedidos.

    Responsabilidades:
    - Consultar pedidos (más reciente primero)
    - Cambiar el estado respetando el flujo de envío
    - Direcciones guardadas del comprador
    - Pedidos nuevos por vendedor (vistos / no vistos)
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        address_repo: IAddressRepository,
        seen_repo: ISeenOrdersRepository,
    ):
        self.order_repo = order_repo
        self.address_repo = address_repo
        self.seen_repo = seen_repo

    # =========================================================================
    # Pedidos
    # =========================================================================

    def get_orders(self, buyer_id: Optional[str] = None) -> List[Dict[str, Any]]:
        orders = self.order_repo.get_orders()
        if buyer_id:
            orders = [o for o in orders if o.get('buyer_id') == buyer_id]
        return orders

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        return self.order_repo.get_order(order_id)

    def get_order_by_number(self, order_number: str) -> Optional[Dict[str, Any]]:
        return self.order_repo.get_by_number(order_number)

    def update_status(
        self,
        order_id: str,
        new_status: str,
        tracking_number: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Cambia el estado de un pedido.

        Args:
            order_id: ID del pedido
            new_status: Estado destino
            tracking_number: Guía de envío (obligatoria al pasar a 'shipped';
                si no se envía se conserva la anterior)

        Returns:
            Dict con ok y el pedido actualizado, o error
        """
        valid = {s.value for s in OrderStatus}
        if new_status not in valid:
            return {'ok': False, 'error': f'Estado inválido: {new_status}'}

        order = self.order_repo.get_order(order_id)
        if not order:
            return {'ok': False, 'error': 'Pedido no encontrado', 'not_found': True}

        current = order.get('status', OrderStatus.PENDING.value)
        if not can_transition(current, new_status):
            return {
                'ok': False,
                'error': (
                    f"No se puede cambiar de '{STATUS_LABELS.get(current, current)}' "
                    f"a '{STATUS_LABELS.get(new_status, new_status)}'"
                ),
            }

        tracking = (tracking_number or '').strip() or order.get('tracking_number')
        if new_status == OrderStatus.SHIPPED.value and not tracking:
            return {'ok': False, 'error': 'El número de guía es requerido para marcar como enviado'}

        updates = {
            'status': new_status,
            'tracking_number': tracking,
            'updated_at': datetime.now(timezone.utc).isoformat(),
        }
        try:
            updated = self.order_repo.update_order(order_id, updates)
        except StorageError as e:
            log_error('orders', e, op='update_status', order_id=order_id)
            return {'ok': False, 'error': ERROR_MESSAGES['SAVE_FAILED']}

        logger.info("[orders] %s: %s → %s", order_id, current, new_status)
        return {'ok': True, 'order': updated}

    # =========================================================================
    # Direcciones guardadas
    # =========================================================================

    def get_addresses(self) -> List[Dict[str, Any]]:
        return self.address_repo.get_addresses()

    def get_default_address(self) -> Optional[Dict[str, Any]]:
        """La marcada como predeterminada, o la primera."""
        addresses = self.get_addresses()
        for address in addresses:
            if address.get('is_default'):
                return address
        return addresses[0] if addresses else None

    def save_address(
        self,
        address: ShippingAddress,
        label: str = 'Casa',
        is_default: bool = False,
        address_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Guarda o actualiza una dirección.

        Si se marca como predeterminada, las demás dejan de serlo.

        Returns:
            Dict con ok y la dirección guardada
        """
        addresses = self.get_addresses()
        existing = next((a for a in addresses if address_id and a.get('id') == address_id), None)

        saved = SavedAddress(
            id=address_id or generate_address_id(),
            address=address,
            label=label or 'Casa',
            is_default=bool(is_default),
            created_at=(existing or {}).get('created_at') or datetime.now(timezone.utc).isoformat(),
        ).to_dict()

        if saved['is_default']:
            for a in addresses:
                a['is_default'] = False

        if existing:
            addresses = [saved if a.get('id') == saved['id'] else a for a in addresses]
        else:
            addresses.append(saved)

        try:
            self.address_repo.save_addresses(addresses)
        except StorageError as e:
            log_error('orders', e, op='save_address')
            return {'ok': False, 'error': 'No se pudo guardar la dirección'}
        return {'ok': True, 'address': saved}

    def save_address_from_form(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Valida los datos recibidos por la API y guarda la dirección."""
        data = data or {}
        validation = validate_shipping_address(data.get('address', data))
        if not validation['ok']:
            return {'ok': False, 'error': 'Revisa los campos marcados', 'errors': validation['errors']}
        return self.save_address(
            validation['data'].to_entity(),
            label=data.get('label', 'Casa'),
            is_default=bool(data.get('is_default', False)),
            address_id=data.get('id'),
        )

    def delete_address(self, address_id: str) -> Dict[str, Any]:
        try:
            removed = self.address_repo.delete_address(address_id)
        except StorageError as e:
            log_error('orders', e, op='delete_address')
            return {'ok': False, 'error': 'No se pudo eliminar la dirección'}
        if not removed:
            return {'ok': False, 'error': 'Dirección no encontrada', 'not_found': True}
        return {'ok': True, 'message': 'Dirección eliminada'}

    # =========================================================================
    # Notificaciones para vendedores
    # =========================================================================

    def get_orders_for_seller(self, seller_name: str) -> List[Dict[str, Any]]:
        """Pedidos que contienen al menos un producto del vendedor."""
        return [
            o for o in self.order_repo.get_orders()
            if any(_same_seller(i, seller_name) for i in o.get('items', []))
        ]

    def get_seen_order_ids(self, seller_name: str) -> List[str]:
        return self.seen_repo.get_seen(seller_name)

    def get_new_orders_for_seller(self, seller_name: str) -> List[Dict[str, Any]]:
        seen = set(self.get_seen_order_ids(seller_name))
        return [o for o in self.get_orders_for_seller(seller_name) if o['id'] not in seen]

    def mark_orders_seen(self, seller_name: str, order_ids: List[str]) -> None:
        """Agrega los IDs a los ya vistos (sin duplicados, conserva el orden)."""
        merged = list(dict.fromkeys(self.get_seen_order_ids(seller_name) + list(order_ids)))
        try:
            self.seen_repo.set_seen(seller_name, merged)
        except StorageError as e:
            log_error('orders', e, op='mark_orders_seen', seller=seller_name)

    def mark_all_seen(self, seller_name: str) -> None:
        self.mark_orders_seen(seller_name, [o['id'] for o in self.get_orders_for_seller(seller_name)])

    def get_seller_dashboard(self, seller_name: str) -> Dict[str, Any]:
        """
        Pedidos del vendedor con solo sus productos y su subtotal.

        Returns:
            Dict con orders, nuevos (cantidad no vista) y total vendido
        """
        seen = set(self.get_seen_order_ids(seller_name))
        orders = []
        for order in self.get_orders_for_seller(seller_name):
            orders.append({
                'id': order['id'],
                'order_number': order.get('order_number'),
                'status': order.get('status'),
                'created_at': order.get('created_at'),
                'items': get_seller_items(order, seller_name),
                'seller_total': calculate_seller_total(order, seller_name),
                'is_new': order['id'] not in seen,
            })
        return {
            'orders': orders,
            'nuevos': sum(1 for o in orders if o['is_new']),
            'total': round(sum(o['seller_total'] for o in orders), 2),
        }
