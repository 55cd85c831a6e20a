# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del marketplace.
# Diseñadas para ser independientes del mecanismo de persistencia:
# se guardan como dicts (to_dict) y se reconstruyen con from_dict.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any, Union
from enum import Enum


# ==============================================================================
# ENUMERACIONES - Estados y tipos válidos
# ==============================================================================

class OrderStatus(str, Enum):
    """Estados posibles de un pedido."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Métodos de pago aceptados en checkout."""
    CARD = "card"
    MERCADOPAGO = "mercadopago"
    OXXO = "oxxo"
    SPEI = "spei"
    PAYPAL = "paypal"


class PaymentStatus(str, Enum):
    """Estado del cobro de un pedido."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class CouponType(str, Enum):
    """Tipos de cupón de descuento."""
    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_SHIPPING = "free_shipping"


class SortOption(str, Enum):
    """Criterios de ordenamiento del catálogo."""
    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING_DESC = "rating-desc"
    NEWEST = "newest"
    POPULAR = "popular"
    NAME_ASC = "name-asc"


class ProductStatus(str, Enum):
    """Estado de publicación de un producto de vendedor."""
    DRAFT = "draft"
    PUBLISHED = "published"


class UserType(str, Enum):
    """Tipo de usuario para logros."""
    BUYER = "buyer"
    SELLER = "seller"


class AchievementStatus(str, Enum):
    """Estado de desbloqueo de un logro."""
    LOCKED = "locked"
    IN_PROGRESS = "in_progress"
    UNLOCKED = "unlocked"


class AchievementTier(str, Enum):
    """Niveles de dificultad de logros."""
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class SellerType(str, Enum):
    """Tipo de vendedor en una solicitud de verificación."""
    INDIVIDUAL = "individual"
    HOBBY = "hobby"
    COMPANY = "company"


class VerificationLevel(str, Enum):
    """Nivel de verificación solicitado por un vendedor."""
    BASIC_SELLER = "basic_seller"
    VERIFIED_ARTISAN = "verified_artisan"
    MASTER_ARTISAN = "master_artisan"
    CERTIFIED_WORKSHOP = "certified_workshop"


class VerificationStatus(str, Enum):
    """Estados de una solicitud de verificación."""
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    INFO_REQUESTED = "info_requested"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


TIER_TO_RARITY: Dict[str, str] = {
    'bronze': 'common',
    'silver': 'uncommon',
    'gold': 'rare',
    'platinum': 'epic',
}

TIER_LABELS: Dict[str, str] = {
    'bronze': 'Bronce',
    'silver': 'Plata',
    'gold': 'Oro',
    'platinum': 'Platino',
}


def _enum_value(value: Any) -> Any:
    """Devuelve .value si es Enum, o el valor tal cual."""
    return value.value if isinstance(value, Enum) else value


# ==============================================================================
# ENTIDADES DE CATÁLOGO
# ==============================================================================

@dataclass
class Product:
    """
    Producto artesanal del catálogo.

    Attributes:
        id: Identificador (numérico en el catálogo estático, PROD-... en
            productos de vendedor)
        name: Nombre del producto
        price: Precio en MXN
        category: Categoría principal
        state: Estado de la República donde se elabora
        maker: Nombre del artesano o taller
        stock: Existencias conocidas (None = sin control de stock)
        rating: Calificación promedio 0-5 (None = sin reseñas)
    """
    id: str
    name: str
    price: float
    category: str
    state: str
    maker: str = ''
    description: str = ''
    subcategory: Optional[str] = None
    images: List[str] = field(default_factory=list)
    in_stock: bool = True
    stock: Optional[int] = None
    rating: Optional[float] = None
    review_count: int = 0
    verified: bool = False
    featured: bool = False
    materials: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    seller_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia y respuestas JSON."""
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'category': self.category,
            'subcategory': self.subcategory,
            'state': self.state,
            'maker': self.maker,
            'description': self.description,
            'images': list(self.images),
            'in_stock': self.in_stock,
            'stock': self.stock,
            'rating': self.rating,
            'review_count': self.review_count,
            'verified': self.verified,
            'featured': self.featured,
            'materials': list(self.materials),
            'tags': list(self.tags),
            'seller_id': self.seller_id,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        """Crea instancia desde diccionario (tolerante a campos faltantes)."""
        stock = data.get('stock')
        in_stock = data.get('in_stock')
        if in_stock is None:
            in_stock = stock is None or stock > 0
        return cls(
            id=str(data.get('id', '')),
            name=data.get('name', ''),
            price=float(data.get('price', 0) or 0),
            category=data.get('category', ''),
            subcategory=data.get('subcategory') or None,
            state=data.get('state', ''),
            maker=data.get('maker', ''),
            description=data.get('description', ''),
            images=list(data.get('images') or []),
            in_stock=bool(in_stock),
            stock=stock,
            rating=data.get('rating'),
            review_count=int(data.get('review_count', 0) or 0),
            verified=bool(data.get('verified', False)),
            featured=bool(data.get('featured', False)),
            materials=list(data.get('materials') or []),
            tags=list(data.get('tags') or []),
            seller_id=data.get('seller_id'),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )


@dataclass
class SellerProduct:
    """
    Producto creado por un vendedor (borrador o publicado).

    Extiende los datos de Product con el dueño y el estado de publicación.
    """
    id: str
    seller_id: str
    seller_name: str
    status: ProductStatus = ProductStatus.DRAFT
    product: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    published_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Aplana el producto y los metadatos del vendedor en un solo dict."""
        d = dict(self.product)
        d.update({
            'id': self.id,
            'seller_id': self.seller_id,
            'seller_name': self.seller_name,
            'status': _enum_value(self.status),
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        })
        if self.published_at:
            d['published_at'] = self.published_at
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SellerProduct':
        meta = ('id', 'seller_id', 'seller_name', 'status', 'created_at',
                'updated_at', 'published_at')
        try:
            status = ProductStatus(data.get('status', 'draft'))
        except ValueError:
            status = ProductStatus.DRAFT
        return cls(
            id=data.get('id', ''),
            seller_id=data.get('seller_id', ''),
            seller_name=data.get('seller_name', 'Vendedor'),
            status=status,
            product={k: v for k, v in data.items() if k not in meta},
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
            published_at=data.get('published_at'),
        )


# ==============================================================================
# ENTIDADES DE CARRITO Y PEDIDOS
# ==============================================================================

@dataclass
class CartItem:
    """Línea del carrito guardada en la sesión."""
    product_id: str
    name: str
    price: float
    quantity: int = 1
    image: str = ''
    maker: str = ''
    state: str = ''
    category: str = ''

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'product_id': self.product_id,
            'name': self.name,
            'price': self.price,
            'quantity': self.quantity,
            'image': self.image,
            'maker': self.maker,
            'state': self.state,
            'category': self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartItem':
        return cls(
            product_id=str(data.get('product_id', '')),
            name=data.get('name', ''),
            price=float(data.get('price', 0) or 0),
            quantity=int(data.get('quantity', 1) or 1),
            image=data.get('image', ''),
            maker=data.get('maker', ''),
            state=data.get('state', ''),
            category=data.get('category', ''),
        )


@dataclass
class ShippingAddress:
    """Dirección de envío capturada en checkout."""
    first_name: str
    last_name: str
    email: str
    phone: str
    street: str
    street_number: str
    neighborhood: str
    city: str
    state: str
    postal_code: str
    apartment: Optional[str] = None
    references: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'street': self.street,
            'street_number': self.street_number,
            'apartment': self.apartment,
            'neighborhood': self.neighborhood,
            'city': self.city,
            'state': self.state,
            'postal_code': self.postal_code,
            'references': self.references,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShippingAddress':
        return cls(
            first_name=data.get('first_name', ''),
            last_name=data.get('last_name', ''),
            email=data.get('email', ''),
            phone=data.get('phone', ''),
            street=data.get('street', ''),
            street_number=data.get('street_number', ''),
            apartment=data.get('apartment'),
            neighborhood=data.get('neighborhood', ''),
            city=data.get('city', ''),
            state=data.get('state', ''),
            postal_code=data.get('postal_code', ''),
            references=data.get('references'),
        )


@dataclass
class SavedAddress:
    """Dirección guardada en la libreta del comprador."""
    id: str
    address: ShippingAddress
    label: str = 'Casa'
    is_default: bool = False
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d = self.address.to_dict()
        d.update({
            'id': self.id,
            'label': self.label,
            'is_default': self.is_default,
            'created_at': self.created_at,
        })
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SavedAddress':
        return cls(
            id=data.get('id', ''),
            address=ShippingAddress.from_dict(data),
            label=data.get('label', 'Casa'),
            is_default=bool(data.get('is_default', False)),
            created_at=data.get('created_at'),
        )


@dataclass
class OrderItem:
    """Producto dentro de un pedido (precio congelado al comprar)."""
    product_id: str
    name: str
    price: float
    quantity: int
    image: str = ''
    maker: str = ''
    state: str = ''
    category: str = ''

    @property
    def subtotal(self) -> float:
        return round(self.price * self.quantity, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'product_id': self.product_id,
            'name': self.name,
            'price': self.price,
            'quantity': self.quantity,
            'image': self.image,
            'maker': self.maker,
            'state': self.state,
            'category': self.category,
        }

    @classmethod
    def from_cart_item(cls, item: CartItem) -> 'OrderItem':
        return cls(
            product_id=item.product_id,
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            image=item.image,
            maker=item.maker,
            state=item.state,
            category=item.category,
        )


@dataclass
class Order:
    """
    Pedido confirmado por un comprador.

    Attributes:
        id: ORD-<base36>-<aleatorio>
        order_number: Número legible PM<aa><mm>-<4 dígitos>
        status: Estado del flujo de envío
        coupon: {'code', 'discount'} si se aplicó cupón
    """
    id: str
    order_number: str
    items: List[OrderItem]
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    subtotal: float
    shipping_cost: float
    total: float
    discount: float = 0.0
    gift_wrap_fee: float = 0.0
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    coupon: Optional[Dict[str, Any]] = None
    is_gift: bool = False
    gift_message: Optional[str] = None
    notes: Optional[str] = None
    buyer_id: Optional[str] = None
    tracking_number: Optional[str] = None
    estimated_delivery: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'id': self.id,
            'order_number': self.order_number,
            'items': [i.to_dict() for i in self.items],
            'shipping_address': self.shipping_address.to_dict(),
            'payment_method': _enum_value(self.payment_method),
            'payment_status': _enum_value(self.payment_status),
            'status': _enum_value(self.status),
            'subtotal': self.subtotal,
            'shipping_cost': self.shipping_cost,
            'discount': self.discount,
            'gift_wrap_fee': self.gift_wrap_fee,
            'total': self.total,
            'coupon': self.coupon,
            'is_gift': self.is_gift,
            'gift_message': self.gift_message,
            'notes': self.notes,
            'buyer_id': self.buyer_id,
            'tracking_number': self.tracking_number,
            'estimated_delivery': self.estimated_delivery,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }


@dataclass
class Coupon:
    """
    Cupón de descuento.

    Attributes:
        value: Porcentaje (percentage), monto en MXN (fixed) o 0 (free_shipping)
        min_purchase: Subtotal mínimo para aplicar
        max_discount: Tope del descuento porcentual
        expires_at: Fecha ISO (YYYY-MM-DD) a partir de la cual ya no aplica
    """
    code: str
    type: CouponType
    value: float
    description: str
    min_purchase: Optional[float] = None
    max_discount: Optional[float] = None
    expires_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.code,
            'type': _enum_value(self.type),
            'value': self.value,
            'description': self.description,
            'min_purchase': self.min_purchase,
            'max_discount': self.max_discount,
            'expires_at': self.expires_at,
        }


# ==============================================================================
# ENTIDADES DE LOGROS
# ==============================================================================

@dataclass
class AchievementCriteria:
    """Criterio de desbloqueo: métrica a medir y valor objetivo."""
    type: str
    metric: str
    target_value: Union[int, float, str, bool]
    period: Optional[str] = None
    # Requisitos adicionales, ej. {"min_sales": 50}
    conditions: Optional[Dict[str, Any]] = None

    @property
    def is_numeric(self) -> bool:
        """True si el objetivo se mide por porcentaje de avance."""
        return (
            isinstance(self.target_value, (int, float))
            and not isinstance(self.target_value, bool)
        )

    def to_dict(self) -> Dict[str, Any]:
        d = {'type': self.type, 'metric': self.metric, 'target_value': self.target_value}
        if self.period:
            d['period'] = self.period
        if self.conditions:
            d['conditions'] = dict(self.conditions)
        return d


@dataclass
class AchievementReward:
    """Recompensa otorgada al desbloquear un logro."""
    type: str
    value: Union[int, float, str]
    description: str
    expires_in_days: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'value': self.value,
            'description': self.description,
            'expires_in_days': self.expires_in_days,
        }


@dataclass
class AchievementDefinition:
    """Definición estática de un logro (sin datos del usuario)."""
    id: str
    name: str
    description: str
    icon: str
    tier: AchievementTier
    category: str
    criteria: AchievementCriteria
    user_type: UserType
    order: int = 0
    hidden: bool = False
    hint: Optional[str] = None
    reward: Optional[AchievementReward] = None

    @property
    def rarity(self) -> str:
        return TIER_TO_RARITY[_enum_value(self.tier)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'icon': self.icon,
            'tier': _enum_value(self.tier),
            'rarity': self.rarity,
            'category': self.category,
            'criteria': self.criteria.to_dict(),
            'user_type': _enum_value(self.user_type),
            'order': self.order,
            'hidden': self.hidden,
            'hint': self.hint,
            'reward': self.reward.to_dict() if self.reward else None,
        }


@dataclass
class UserAchievementData:
    """Progreso de un usuario en un logro específico."""
    id: str
    status: AchievementStatus = AchievementStatus.LOCKED
    current_value: float = 0
    progress: int = 0
    unlocked_at: Optional[str] = None
    seen: bool = False
    shared_at: Optional[str] = None
    share_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'status': _enum_value(self.status),
            'current_value': self.current_value,
            'progress': self.progress,
            'unlocked_at': self.unlocked_at,
            'seen': self.seen,
            'shared_at': self.shared_at,
            'share_count': self.share_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserAchievementData':
        try:
            status = AchievementStatus(data.get('status', 'locked'))
        except ValueError:
            status = AchievementStatus.LOCKED
        return cls(
            id=data.get('id', ''),
            status=status,
            current_value=data.get('current_value', 0) or 0,
            progress=int(data.get('progress', 0) or 0),
            unlocked_at=data.get('unlocked_at'),
            seen=bool(data.get('seen', False)),
            shared_at=data.get('shared_at'),
            share_count=int(data.get('share_count', 0) or 0),
        )


# ==============================================================================
# ENTIDADES DE COMUNIDAD - Reseñas, historias y verificación
# ==============================================================================

@dataclass
class ProductReview:
    """Reseña de un comprador sobre un producto."""
    id: str
    product_id: str
    user_id: str
    rating: float
    comment: str
    title: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'product_id': self.product_id,
            'user_id': self.user_id,
            'rating': self.rating,
            'title': self.title,
            'comment': self.comment,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProductReview':
        return cls(
            id=data.get('id', ''),
            product_id=str(data.get('product_id', '')),
            user_id=data.get('user_id', ''),
            rating=float(data.get('rating', 0) or 0),
            comment=data.get('comment', ''),
            title=data.get('title'),
            created_at=data.get('created_at'),
        )


@dataclass
class ArtisanStory:
    """Historia de un artesano, editable desde el panel de vendedor."""
    id: str
    artisan_id: str
    artisan_name: str
    craft: str
    state: str
    city: str
    story: str
    title: str = ''
    summary: str = ''
    heritage_story: str = ''
    image: str = ''
    years_of_experience: int = 0
    generations_of_craft: int = 1
    traditional_techniques: List[str] = field(default_factory=list)
    workshop_photos: List[str] = field(default_factory=list)
    social_media: Dict[str, str] = field(default_factory=dict)
    product_ids: List[str] = field(default_factory=list)
    is_published: bool = True
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'artisan_id': self.artisan_id,
            'artisan_name': self.artisan_name,
            'craft': self.craft,
            'state': self.state,
            'city': self.city,
            'title': self.title,
            'summary': self.summary,
            'story': self.story,
            'heritage_story': self.heritage_story,
            'image': self.image,
            'years_of_experience': self.years_of_experience,
            'generations_of_craft': self.generations_of_craft,
            'traditional_techniques': list(self.traditional_techniques),
            'workshop_photos': list(self.workshop_photos),
            'social_media': dict(self.social_media),
            'product_ids': list(self.product_ids),
            'is_published': self.is_published,
            'last_updated': self.last_updated,
        }


@dataclass
class VerificationRequest:
    """Solicitud de verificación de un vendedor."""
    id: str
    seller_id: str
    seller_name: str
    seller_email: str
    seller_type: SellerType
    requested_level: VerificationLevel
    status: VerificationStatus = VerificationStatus.SUBMITTED
    questionnaire: Dict[str, Any] = field(default_factory=dict)
    documents: Dict[str, Any] = field(default_factory=dict)
    review_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[str] = None
    submitted_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'seller_id': self.seller_id,
            'seller_name': self.seller_name,
            'seller_email': self.seller_email,
            'seller_type': _enum_value(self.seller_type),
            'requested_level': _enum_value(self.requested_level),
            'status': _enum_value(self.status),
            'questionnaire': dict(self.questionnaire),
            'documents': dict(self.documents),
            'review_notes': self.review_notes,
            'rejection_reason': self.rejection_reason,
            'created_at': self.created_at,
            'submitted_at': self.submitted_at,
            'updated_at': self.updated_at,
        }
