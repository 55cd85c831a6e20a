# ==============================================================================
# CUPONES DISPONIBLES
# ==============================================================================
# Catálogo fijo de cupones. Las claves ya están normalizadas (mayúsculas).
# ==============================================================================

from typing import Dict

from papalote.models.entities import Coupon, CouponType

AVAILABLE_COUPONS: Dict[str, Coupon] = {
    'PRIMERA10': Coupon(
        code='PRIMERA10',
        type=CouponType.PERCENTAGE,
        value=10,
        description='10% de descuento en tu primera compra',
        min_purchase=500,
        max_discount=500,
    ),
    'ENVIOGRATIS': Coupon(
        code='ENVIOGRATIS',
        type=CouponType.FREE_SHIPPING,
        value=0,
        description='Envío gratis en tu pedido',
        min_purchase=300,
    ),
    'ARTESANO20': Coupon(
        code='ARTESANO20',
        type=CouponType.PERCENTAGE,
        value=20,
        description='20% de descuento',
        min_purchase=1000,
        max_discount=1000,
    ),
    'DESCUENTO50': Coupon(
        code='DESCUENTO50',
        type=CouponType.FIXED,
        value=50,
        description='$50 MXN de descuento',
        min_purchase=400,
    ),
    'EXPIRED2023': Coupon(
        code='EXPIRED2023',
        type=CouponType.PERCENTAGE,
        value=15,
        description='Cupón expirado',
        expires_at='2023-01-01',
    ),
}

# Envío
FREE_SHIPPING_THRESHOLD = 1000
STANDARD_SHIPPING_COST = 150
REMOTE_SHIPPING_COST = 200

# Envoltura de regalo
GIFT_WRAP_COST = 50
