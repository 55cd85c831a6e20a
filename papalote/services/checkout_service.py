# ==============================================================================
# SERVICIO DE CHECKOUT
# ==============================================================================
# Costos de envío, resumen del pedido y creación del pedido a partir del
# carrito de la sesión. No hay cobro real: el pago queda 'pending'.
# ==============================================================================

import logging
import secrets
import time
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from papalote.constants.catalog import REMOTE_STATES
from papalote.constants.coupons import (
    FREE_SHIPPING_THRESHOLD,
    GIFT_WRAP_COST,
    REMOTE_SHIPPING_COST,
    STANDARD_SHIPPING_COST,
)
from papalote.errors import ERROR_MESSAGES, StorageError, log_error
from papalote.models.entities import (
    CartItem,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    UserType,
)
from papalote.performance_logger import profile_function
from papalote.repositories.interfaces import IOrderRepository
from papalote.services import coupon_service
from papalote.services.order_service import random_base36, to_base36
from papalote.validators import validate_checkout_form

logger = logging.getLogger(__name__)

STANDARD_DELIVERY_DAYS = 5
REMOTE_DELIVERY_DAYS = 7
DELIVERY_WINDOW_DAYS = 3

WEEKDAYS_ES = ('lunes', 'martes', 'miércoles', 'jueves', 'viernes', 'sábado', 'domingo')
MONTHS_ES = ('enero', 'febrero', 'marzo', 'abril', 'mayo', 'junio', 'julio',
             'agosto', 'septiembre', 'octubre', 'noviembre', 'diciembre')


# ==============================================================================
# CÁLCULOS
# ==============================================================================

def calculate_shipping_cost(subtotal: float, state: Optional[str] = None) -> float:
    """
    Envío gratis desde $1,000; si no, tarifa estándar o foránea.
    """
    if subtotal >= FREE_SHIPPING_THRESHOLD:
        return 0
    if state and state in REMOTE_STATES:
        return REMOTE_SHIPPING_COST
    return STANDARD_SHIPPING_COST


def format_date_es(value: date) -> str:
    """'lunes, 5 de enero'"""
    return f"{WEEKDAYS_ES[value.weekday()]}, {value.day} de {MONTHS_ES[value.month - 1]}"


def calculate_estimated_delivery(state: str, today: Optional[date] = None) -> str:
    """
    Rango de entrega: 5 a 8 días (7 a 10 en estados foráneos).

    Returns:
        'jueves, 9 de enero - domingo, 12 de enero'
    """
    today = today or date.today()
    base_days = REMOTE_DELIVERY_DAYS if state in REMOTE_STATES else STANDARD_DELIVERY_DAYS
    start = today + timedelta(days=base_days)
    end = today + timedelta(days=base_days + DELIVERY_WINDOW_DAYS)
    return f"{format_date_es(start)} - {format_date_es(end)}"


def calculate_order_summary(
    items: List[CartItem],
    state: Optional[str] = None,
    discount: float = 0,
    gift_wrap: bool = False,
    shipping_cost: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Totales del pedido.

    Args:
        items: Líneas del carrito
        state: Estado de destino (afecta el envío)
        discount: Descuento ya calculado
        gift_wrap: Si se agrega envoltura de regalo
        shipping_cost: Envío precalculado (por defecto se calcula)

    Returns:
        Dict con subtotal, shipping_cost, discount, gift_wrap_fee, total,
        item_count, free_shipping_threshold y amount_to_free_shipping
    """
    subtotal = round(sum(i.price * i.quantity for i in items), 2)
    if shipping_cost is None:
        shipping_cost = calculate_shipping_cost(subtotal, state)
    gift_wrap_fee = GIFT_WRAP_COST if gift_wrap else 0
    total = max(0, subtotal + shipping_cost - discount + gift_wrap_fee)
    return {
        'subtotal': subtotal,
        'shipping_cost': shipping_cost,
        'discount': discount,
        'gift_wrap_fee': gift_wrap_fee,
        'total': round(total, 2),
        'item_count': sum(i.quantity for i in items),
        'free_shipping_threshold': FREE_SHIPPING_THRESHOLD,
        'amount_to_free_shipping': max(0, FREE_SHIPPING_THRESHOLD - subtotal),
    }


def generate_order_id() -> str:
    """ORD-<milisegundos base36>-<6 aleatorios>, en mayúsculas."""
    return f"ORD-{to_base36(int(time.time() * 1000))}-{random_base36(6)}".upper()


def generate_order_number(now: Optional[datetime] = None) -> str:
    """PM<aa><mm>-<4 dígitos>"""
    now = now or datetime.now()
    return f"PM{now.strftime('%y%m')}-{secrets.randbelow(10000):04d}"


# ==============================================================================
# SERVICIO
# ==============================================================================

class CheckoutService:
    """
    Servicio de checkout.

    Responsabilidades:
    - Calcular el resumen del pedido con cupón y envoltura
    - Validar el formulario de checkout
    - Crear y guardar el pedido, vaciar el carrito
    - Actualizar los logros de compra del comprador
    """

    def __init__(
        self,
        cart_service,
        order_repo: IOrderRepository,
        settings_service,
        order_service=None,
        achievement_service=None,
    ):
        self.cart_service = cart_service
        self.order_repo = order_repo
        self.settings_service = settings_service
        self.order_service = order_service
        self.achievement_service = achievement_service

    def get_summary(
        self,
        state: Optional[str] = None,
        coupon_code: Optional[str] = None,
        gift_wrap: bool = False,
    ) -> Dict[str, Any]:
        """
        Resumen del carrito actual con cupón opcional.

        Un cupón inválido no impide el resumen: se devuelve coupon_error.
        """
        items = self.cart_service.get_cart_items()
        base = calculate_order_summary(items, state, gift_wrap=gift_wrap)
        result: Dict[str, Any] = {'ok': True, 'summary': base, 'coupon': None}

        if coupon_code:
            applied = coupon_service.apply_coupon(coupon_code, base['subtotal'], base['shipping_cost'])
            if applied['ok']:
                result['coupon'] = applied['coupon']
                result['summary'] = calculate_order_summary(
                    items, state,
                    discount=applied['coupon']['discount_amount'],
                    gift_wrap=gift_wrap,
                )
            else:
                result['coupon_error'] = applied['error']
        return result

    @profile_function(name="Crear pedido")
    def place_order(self, form_data: Dict[str, Any], buyer_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Crea un pedido con el contenido del carrito.

        Args:
            form_data: Datos del formulario de checkout
            buyer_id: Comprador (para historial y logros)

        Returns:
            Dict con ok y el pedido, o error/errors por campo
        """
        validation = validate_checkout_form(form_data)
        if not validation['ok']:
            return {'ok': False, 'error': 'Revisa los campos marcados', 'errors': validation['errors']}
        form = validation['data']

        items = self.cart_service.get_cart_items()
        if not items:
            return {'ok': False, 'error': 'El carrito está vacío'}

        address = form.shipping_address.to_entity()
        summary = calculate_order_summary(items, address.state, gift_wrap=form.gift_wrap)

        min_amount = self.settings_service.get_min_order_amount()
        if summary['subtotal'] < min_amount:
            return {'ok': False, 'error': f'El pedido mínimo es de ${min_amount:g} MXN'}

        coupon = None
        if form.coupon_code:
            applied = coupon_service.apply_coupon(form.coupon_code, summary['subtotal'], summary['shipping_cost'])
            if not applied['ok']:
                return {'ok': False, 'error': applied['error'], 'errors': {'coupon_code': applied['error']}}
            coupon = {
                'code': applied['coupon']['code'],
                'type': applied['coupon']['type'],
                'value': applied['coupon']['value'],
                'discount_amount': applied['coupon']['discount_amount'],
            }
            summary = calculate_order_summary(
                items, address.state, discount=coupon['discount_amount'], gift_wrap=form.gift_wrap,
            )

        now = datetime.now(timezone.utc).isoformat()
        order = Order(
            id=generate_order_id(),
            order_number=generate_order_number(),
            items=[OrderItem.from_cart_item(i) for i in items],
            shipping_address=address,
            payment_method=PaymentMethod(form.payment_method),
            subtotal=summary['subtotal'],
            shipping_cost=summary['shipping_cost'],
            discount=summary['discount'],
            gift_wrap_fee=summary['gift_wrap_fee'],
            total=summary['total'],
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            coupon=coupon,
            is_gift=form.gift_wrap,
            gift_message=form.gift_message,
            notes=form.notes,
            buyer_id=buyer_id,
            estimated_delivery=calculate_estimated_delivery(address.state),
            created_at=now,
            updated_at=now,
        ).to_dict()

        try:
            self.order_repo.add_order(order)
        except StorageError as e:
            log_error('checkout', e, op='place_order')
            return {'ok': False, 'error': ERROR_MESSAGES['ORDER_CREATE_FAILED']}

        logger.info("[checkout] Pedido %s (%s) por $%.2f", order['id'], order['order_number'], order['total'])

        if form.save_address and self.order_service is not None:
            saved = self.order_service.save_address(address)
            if not saved['ok']:
                logger.warning("[checkout] No se guardó la dirección del pedido %s", order['id'])

        self.cart_service.clear_cart()

        return {'ok': True, 'order': order, 'achievements': self._track_purchase(buyer_id)}

    def _track_purchase(self, buyer_id: Optional[str]) -> List[Dict[str, Any]]:
        """Actualiza orders_count y total_spent del comprador."""
        if not buyer_id or self.achievement_service is None:
            return []
        orders = [o for o in self.order_repo.get_orders() if o.get('buyer_id') == buyer_id]
        events = self.achievement_service.track_metric(
            buyer_id, UserType.BUYER.value, 'orders_count', len(orders)
        )
        biggest = max((o.get('total', 0) for o in orders), default=0)
        events += self.achievement_service.track_metric(
            buyer_id, UserType.BUYER.value, 'total_spent', biggest
        )
        return events
