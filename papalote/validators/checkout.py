# ==============================================================================
# VALIDADORES DE CHECKOUT
# ==============================================================================
# Dirección de envío (formato mexicano), método de pago, términos y
# opciones de regalo.
# ==============================================================================

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, StrictBool, ValidationInfo, field_validator

from papalote.constants.catalog import MEXICAN_STATES
from papalote.models.entities import PaymentMethod, ShippingAddress

from .common import strip_or_none, validate_model

PHONE_RE = re.compile(r'^(\+52)?[\s.-]?(\d{2,3})[\s.-]?(\d{3,4})[\s.-]?(\d{4})$')
POSTAL_CODE_RE = re.compile(r'^\d{5}$')
NAME_RE = re.compile(r'^[a-zA-ZáéíóúüñÁÉÍÓÚÜÑ\s]+$')
EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def _length(value: str, min_len: int, max_len: int, too_short: str, too_long: str) -> str:
    value = (value or '').strip()
    if len(value) < min_len:
        raise ValueError(too_short)
    if len(value) > max_len:
        raise ValueError(too_long)
    return value


class ShippingAddressForm(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    street: str
    street_number: str
    apartment: Optional[str] = None
    neighborhood: str
    city: str
    state: str
    postal_code: str
    references: Optional[str] = None

    @field_validator('first_name')
    @classmethod
    def check_first_name(cls, v: str) -> str:
        v = _length(v, 2, 50, 'El nombre debe tener al menos 2 caracteres',
                    'El nombre no puede exceder 50 caracteres')
        if not NAME_RE.match(v):
            raise ValueError('El nombre solo puede contener letras')
        return v

    @field_validator('last_name')
    @classmethod
    def check_last_name(cls, v: str) -> str:
        v = _length(v, 2, 100, 'Los apellidos deben tener al menos 2 caracteres',
                    'Los apellidos no pueden exceder 100 caracteres')
        if not NAME_RE.match(v):
            raise ValueError('Los apellidos solo pueden contener letras')
        return v

    @field_validator('email')
    @classmethod
    def check_email(cls, v: str) -> str:
        v = (v or '').strip()
        if not EMAIL_RE.match(v):
            raise ValueError('Ingresa un correo electrónico válido')
        if len(v) > 100:
            raise ValueError('El correo no puede exceder 100 caracteres')
        return v

    @field_validator('phone')
    @classmethod
    def check_phone(cls, v: str) -> str:
        v = _length(v, 10, 15, 'El teléfono debe tener al menos 10 dígitos',
                    'El teléfono no puede exceder 15 caracteres')
        if not PHONE_RE.match(v):
            raise ValueError('Ingresa un número de teléfono válido')
        return v

    @field_validator('street')
    @classmethod
    def check_street(cls, v: str) -> str:
        return _length(v, 3, 200, 'La calle debe tener al menos 3 caracteres',
                       'La calle no puede exceder 200 caracteres')

    @field_validator('street_number')
    @classmethod
    def check_street_number(cls, v: str) -> str:
        return _length(v, 1, 20, 'El número es requerido',
                       'El número no puede exceder 20 caracteres')

    @field_validator('neighborhood')
    @classmethod
    def check_neighborhood(cls, v: str) -> str:
        return _length(v, 2, 100, 'La colonia debe tener al menos 2 caracteres',
                       'La colonia no puede exceder 100 caracteres')

    @field_validator('city')
    @classmethod
    def check_city(cls, v: str) -> str:
        return _length(v, 2, 100, 'La ciudad debe tener al menos 2 caracteres',
                       'La ciudad no puede exceder 100 caracteres')

    @field_validator('state')
    @classmethod
    def check_state(cls, v: str) -> str:
        if v not in MEXICAN_STATES:
            raise ValueError('Selecciona un estado válido')
        return v

    @field_validator('postal_code')
    @classmethod
    def check_postal_code(cls, v: str) -> str:
        v = (v or '').strip()
        if len(v) != 5:
            raise ValueError('El código postal debe tener 5 dígitos')
        if not POSTAL_CODE_RE.match(v):
            raise ValueError('El código postal debe contener solo números')
        return v

    @field_validator('apartment')
    @classmethod
    def check_apartment(cls, v: Optional[str]) -> Optional[str]:
        v = strip_or_none(v)
        if v and len(v) > 50:
            raise ValueError('El número interior no puede exceder 50 caracteres')
        return v

    @field_validator('references')
    @classmethod
    def check_references(cls, v: Optional[str]) -> Optional[str]:
        v = strip_or_none(v)
        if v and len(v) > 500:
            raise ValueError('Las referencias no pueden exceder 500 caracteres')
        return v

    def to_entity(self) -> ShippingAddress:
        return ShippingAddress.from_dict(self.model_dump())


def _max_500(v: Optional[str], message: str) -> Optional[str]:
    v = strip_or_none(v)
    if v and len(v) > 500:
        raise ValueError(message)
    return v


class GiftOptionsForm(BaseModel):
    """Envoltura de regalo: si se pide, el mensaje es obligatorio."""
    gift_wrap: bool = False
    gift_message: Optional[str] = Field(default=None, validate_default=True)

    @field_validator('gift_message')
    @classmethod
    def check_gift_message(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        v = _max_500(v, 'El mensaje no puede exceder 500 caracteres')
        if info.data.get('gift_wrap') and not v:
            raise ValueError('Incluye un mensaje para tu regalo')
        return v


class CheckoutForm(GiftOptionsForm):
    """Formulario completo del checkout (incluye las opciones de regalo)."""
    shipping_address: ShippingAddressForm
    payment_method: str
    save_address: bool = False
    accept_terms: StrictBool = Field(default=False, validate_default=True)
    notes: Optional[str] = None
    coupon_code: Optional[str] = None

    @field_validator('payment_method')
    @classmethod
    def check_payment_method(cls, v: str) -> str:
        if v not in {m.value for m in PaymentMethod}:
            raise ValueError('Selecciona un método de pago válido')
        return v

    @field_validator('accept_terms', mode='before')
    @classmethod
    def check_terms(cls, v: Any) -> Any:
        # Solo el literal true; "true" o 1 no cuentan como aceptación
        if v is not True:
            raise ValueError('Debes aceptar los términos y condiciones')
        return v

    @field_validator('notes')
    @classmethod
    def check_notes(cls, v: Optional[str]) -> Optional[str]:
        return _max_500(v, 'Las notas no pueden exceder 500 caracteres')


def validate_shipping_address(data: Any) -> Dict[str, Any]:
    return validate_model(ShippingAddressForm, data)


def validate_checkout_form(data: Any) -> Dict[str, Any]:
    return validate_model(CheckoutForm, data)
