# ==============================================================================
# VALIDADORES DE FORMULARIOS (pydantic)
# ==============================================================================
# Modelos de entrada con mensajes de error en español. Los servicios usan
# format_errors() para convertir un ValidationError en {campo: mensaje}.
# ==============================================================================

from .common import format_errors
from .checkout import (
    ShippingAddressForm,
    CheckoutForm,
    GiftOptionsForm,
    validate_shipping_address,
    validate_checkout_form,
)
from .product import ProductForm, ProductReviewForm, validate_product, validate_review
from .community import (
    ArtisanStoryForm,
    VerificationRequestForm,
    validate_artisan_story,
    validate_verification_request,
)

__all__ = [
    'format_errors',
    'ShippingAddressForm',
    'CheckoutForm',
    'GiftOptionsForm',
    'validate_shipping_address',
    'validate_checkout_form',
    'ProductForm',
    'ProductReviewForm',
    'validate_product',
    'validate_review',
    'ArtisanStoryForm',
    'VerificationRequestForm',
    'validate_artisan_story',
    'validate_verification_request',
]
