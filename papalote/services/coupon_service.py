# ==============================================================================
# SERVICIO DE CUPONES
# ==============================================================================
# Validación de códigos y cálculo de descuentos (porcentaje, monto fijo
# o envío gratis).
# ==============================================================================

from datetime import date
from typing import Any, Dict, Optional

from papalote.constants.coupons import AVAILABLE_COUPONS
from papalote.models.entities import Coupon, CouponType


def normalize_code(code: Optional[str]) -> str:
    return (code or '').strip().upper()


def _is_expired(coupon: Coupon, today: Optional[date] = None) -> bool:
    if not coupon.expires_at:
        return False
    today = today or date.today()
    return date.fromisoformat(coupon.expires_at[:10]) < today


def _format_amount(amount: float) -> str:
    return f"{amount:g}"


def validate_coupon(code: Optional[str], subtotal: float, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Valida un código de cupón contra el subtotal del pedido.

    Args:
        code: Código capturado (se ignoran espacios y mayúsculas)
        subtotal: Subtotal del carrito en MXN
        today: Fecha de referencia (por defecto hoy)

    Returns:
        {'valid': True, 'coupon': Coupon} o {'valid': False, 'error': str}
    """
    normalized = normalize_code(code)
    if not normalized:
        return {'valid': False, 'error': 'Ingresa un código de cupón'}

    coupon = AVAILABLE_COUPONS.get(normalized)
    if coupon is None:
        return {'valid': False, 'error': 'Cupón no válido o expirado'}

    if _is_expired(coupon, today):
        return {'valid': False, 'error': 'Este cupón ha expirado'}

    if coupon.min_purchase and subtotal < coupon.min_purchase:
        return {
            'valid': False,
            'error': f"Este cupón requiere una compra mínima de ${_format_amount(coupon.min_purchase)} MXN",
        }

    return {'valid': True, 'coupon': coupon}


def calculate_discount(coupon: Coupon, subtotal: float, shipping_cost: float) -> float:
    """
    Monto a descontar según el tipo de cupón.

    - percentage: subtotal * valor / 100, con tope max_discount, a centavos
    - free_shipping: el costo de envío
    - fixed: el valor, sin exceder el subtotal
    """
    if coupon.type == CouponType.PERCENTAGE:
        discount = subtotal * coupon.value / 100
        if coupon.max_discount:
            discount = min(discount, coupon.max_discount)
        return round(discount, 2)
    if coupon.type == CouponType.FREE_SHIPPING:
        return shipping_cost
    if coupon.type == CouponType.FIXED:
        return min(coupon.value, subtotal)
    return 0


def apply_coupon(code: Optional[str], subtotal: float, shipping_cost: float) -> Dict[str, Any]:
    """
    Valida y calcula el descuento en un solo paso.

    Returns:
        {'ok': True, 'coupon': {..., 'discount_amount'}} o {'ok': False, 'error'}
    """
    validation = validate_coupon(code, subtotal)
    if not validation['valid']:
        return {'ok': False, 'error': validation['error']}

    coupon = validation['coupon']
    applied = coupon.to_dict()
    applied['discount_amount'] = calculate_discount(coupon, subtotal, shipping_cost)
    applied['display_text'] = get_display_text(coupon)
    return {'ok': True, 'coupon': applied}


def get_display_text(coupon: Coupon) -> str:
    if coupon.type == CouponType.PERCENTAGE:
        return f"{_format_amount(coupon.value)}% de descuento"
    if coupon.type == CouponType.FREE_SHIPPING:
        return 'Envío gratis'
    if coupon.type == CouponType.FIXED:
        return f"${_format_amount(coupon.value)} MXN de descuento"
    return coupon.description
