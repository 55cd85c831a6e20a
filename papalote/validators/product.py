# ==============================================================================
# VALIDADORES DE PRODUCTO
# ==============================================================================

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import validate_model


def _required(value: str, message: str) -> str:
    value = (value or '').strip()
    if not value:
        raise ValueError(message)
    return value


class ProductForm(BaseModel):
    """Producto listo para publicarse en el catálogo."""
    name: str
    description: str
    price: float
    category: str
    subcategory: Optional[str] = None
    state: str
    maker: str
    images: List[str] = Field(default_factory=list, validate_default=True)
    in_stock: bool = True
    stock: Optional[int] = None
    featured: Optional[bool] = None
    verified: Optional[bool] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None
    materials: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def check_name(cls, v: str) -> str:
        v = (v or '').strip()
        if len(v) < 3:
            raise ValueError('El nombre debe tener al menos 3 caracteres')
        return v

    @field_validator('description')
    @classmethod
    def check_description(cls, v: str) -> str:
        v = (v or '').strip()
        if len(v) < 10:
            raise ValueError('La descripción debe tener al menos 10 caracteres')
        return v

    @field_validator('price')
    @classmethod
    def check_price(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('El precio debe ser mayor a 0')
        return round(float(v), 2)

    @field_validator('category')
    @classmethod
    def check_category(cls, v: str) -> str:
        return _required(v, 'La categoría es requerida')

    @field_validator('state')
    @classmethod
    def check_state(cls, v: str) -> str:
        return _required(v, 'El estado es requerido')

    @field_validator('maker')
    @classmethod
    def check_maker(cls, v: str) -> str:
        return _required(v, 'El artesano es requerido')

    @field_validator('images')
    @classmethod
    def check_images(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError('Al menos una imagen es requerida')
        for url in v:
            if not (url.startswith('http://') or url.startswith('https://') or url.startswith('/')):
                raise ValueError('URL de imagen inválida')
        return v

    @field_validator('stock', 'review_count')
    @classmethod
    def check_non_negative(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError('No puede ser negativo')
        return v

    @field_validator('rating')
    @classmethod
    def check_rating(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0 <= v <= 5:
            raise ValueError('La calificación debe estar entre 0 y 5')
        return v


class ProductReviewForm(BaseModel):
    rating: float
    title: Optional[str] = None
    comment: str

    @field_validator('rating')
    @classmethod
    def check_rating(cls, v: float) -> float:
        if v < 1:
            raise ValueError('Calificación mínima es 1')
        if v > 5:
            raise ValueError('Calificación máxima es 5')
        return v

    @field_validator('title')
    @classmethod
    def check_title(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) > 100:
            raise ValueError('El título no puede exceder 100 caracteres')
        return v

    @field_validator('comment')
    @classmethod
    def check_comment(cls, v: str) -> str:
        v = (v or '').strip()
        if len(v) < 10:
            raise ValueError('El comentario debe tener al menos 10 caracteres')
        if len(v) > 1000:
            raise ValueError('El comentario no puede exceder 1000 caracteres')
        return v


def validate_product(data: Any) -> Dict[str, Any]:
    return validate_model(ProductForm, data)


def validate_review(data: Any) -> Dict[str, Any]:
    return validate_model(ProductReviewForm, data)
