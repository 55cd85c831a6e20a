# ==============================================================================
# VALIDADORES DE COMUNIDAD
# ==============================================================================
# Historias de artesanos y solicitudes de verificación de vendedores.
# ==============================================================================

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from papalote.constants.catalog import MEXICAN_STATES
from papalote.models.entities import SellerType, VerificationLevel

from .checkout import EMAIL_RE
from .common import strip_or_none, validate_model


def _required(value: Optional[str], message: str) -> str:
    value = (value or '').strip()
    if not value:
        raise ValueError(message)
    return value


class ArtisanStoryForm(BaseModel):
    """Historia de artesano: especialidad, ubicación y relato son obligatorios."""
    artisan_name: str
    specialty: str
    city: str
    state: str
    personal_story: str
    title: Optional[str] = None
    summary: Optional[str] = None
    heritage_story: Optional[str] = None
    years_of_experience: int = Field(default=0, ge=0)
    generations_of_craft: int = Field(default=1, ge=1)
    traditional_techniques: List[str] = Field(default_factory=list)
    workshop_photos: List[str] = Field(default_factory=list)
    social_media: Dict[str, str] = Field(default_factory=dict)
    product_ids: List[str] = Field(default_factory=list)

    @field_validator('artisan_name')
    @classmethod
    def check_artisan_name(cls, v: str) -> str:
        return _required(v, 'El nombre del artesano es requerido')

    @field_validator('specialty')
    @classmethod
    def check_specialty(cls, v: str) -> str:
        return _required(v, 'La especialidad es requerida')

    @field_validator('city')
    @classmethod
    def check_city(cls, v: str) -> str:
        return _required(v, 'La ciudad es requerida')

    @field_validator('state')
    @classmethod
    def check_state(cls, v: str) -> str:
        v = _required(v, 'El estado es requerido')
        if v not in MEXICAN_STATES:
            raise ValueError('Selecciona un estado válido')
        return v

    @field_validator('personal_story')
    @classmethod
    def check_personal_story(cls, v: str) -> str:
        v = _required(v, 'Por favor escribe tu historia')
        if len(v) > 5000:
            raise ValueError('La historia no puede exceder 5000 caracteres')
        return v

    @field_validator('title', 'summary', 'heritage_story')
    @classmethod
    def check_optional_text(cls, v: Optional[str]) -> Optional[str]:
        return strip_or_none(v)


class VerificationRequestForm(BaseModel):
    seller_id: str
    seller_name: str
    seller_email: str
    seller_type: SellerType
    requested_level: VerificationLevel
    questionnaire: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('seller_id')
    @classmethod
    def check_seller_id(cls, v: str) -> str:
        return _required(v, 'seller_id es requerido')

    @field_validator('seller_name')
    @classmethod
    def check_seller_name(cls, v: str) -> str:
        return _required(v, 'El nombre del vendedor es requerido')

    @field_validator('seller_email')
    @classmethod
    def check_seller_email(cls, v: str) -> str:
        v = (v or '').strip().lower()
        if not EMAIL_RE.match(v):
            raise ValueError('Ingresa un correo electrónico válido')
        return v


def validate_artisan_story(data: Any) -> Dict[str, Any]:
    return validate_model(ArtisanStoryForm, data)


def validate_verification_request(data: Any) -> Dict[str, Any]:
    return validate_model(VerificationRequestForm, data)
