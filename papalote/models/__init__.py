# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del marketplace
# ==============================================================================
# Entidades del dominio como dataclasses, serializables a dict para JSON.
# ==============================================================================

from .entities import (
    # Catálogo
    Product,
    SellerProduct,
    ProductStatus,
    SortOption,

    # Carrito y pedidos
    CartItem,
    ShippingAddress,
    SavedAddress,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,

    # Cupones
    Coupon,
    CouponType,

    # Logros
    AchievementCriteria,
    AchievementDefinition,
    AchievementReward,
    AchievementStatus,
    AchievementTier,
    UserAchievementData,
    UserType,
    TIER_TO_RARITY,
    TIER_LABELS,

    # Comunidad
    ProductReview,
    ArtisanStory,
    VerificationRequest,
    VerificationLevel,
    VerificationStatus,
    SellerType,
)

__all__ = [
    'Product',
    'SellerProduct',
    'ProductStatus',
    'SortOption',
    'CartItem',
    'ShippingAddress',
    'SavedAddress',
    'Order',
    'OrderItem',
    'OrderStatus',
    'PaymentMethod',
    'PaymentStatus',
    'Coupon',
    'CouponType',
    'AchievementCriteria',
    'AchievementDefinition',
    'AchievementReward',
    'AchievementStatus',
    'AchievementTier',
    'UserAchievementData',
    'UserType',
    'TIER_TO_RARITY',
    'TIER_LABELS',
    'ProductReview',
    'ArtisanStory',
    'VerificationRequest',
    'VerificationLevel',
    'VerificationStatus',
    'SellerType',
]
