# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio del marketplace.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas solo llaman a servicios
# 4. Los servicios devuelven dicts {'ok': bool, ...} en lugar de lanzar
#    excepciones hacia las rutas
#
# ESTRUCTURA:
# ├── catalog_service.py         → Filtros, orden y paginación del catálogo
# ├── search_service.py          → Búsqueda difusa, sugerencias, historial
# ├── recommendation_service.py  → Similares, otras categorías, vistos
# ├── cart_service.py            → Carrito en sesión
# ├── coupon_service.py          → Validación de cupones y descuentos
# ├── checkout_service.py        → Envío, resumen y creación de pedidos
# ├── order_service.py           → Estados de pedido, direcciones, vendedores
# ├── settings_service.py        → Configuración de la plataforma y tema
# ├── achievement_service.py     → Progreso y desbloqueo de logros
# ├── seller_product_service.py  → Borradores y publicación de productos
# ├── comparison_service.py      → Comparación de productos en sesión
# ├── review_service.py          → Reseñas de productos
# ├── artisan_story_service.py   → Historias de artesanos
# └── verification_service.py    → Solicitudes de verificación de vendedores
# ==============================================================================

from papalote.services.catalog_service import CatalogService, ProductFilters
from papalote.services.search_service import SearchHistoryService
from papalote.services.recommendation_service import RecommendationService
from papalote.services.cart_service import CartService
from papalote.services import coupon_service
from papalote.services.order_service import OrderService
from papalote.services.settings_service import SettingsService
from papalote.services.achievement_service import AchievementService
from papalote.services.seller_product_service import SellerProductService
from papalote.services.checkout_service import CheckoutService
from papalote.services.comparison_service import ComparisonService
from papalote.services.review_service import ReviewService
from papalote.services.artisan_story_service import ArtisanStoryService
from papalote.services.verification_service import VerificationService

__all__ = [
    'CatalogService',
    'ProductFilters',
    'SearchHistoryService',
    'RecommendationService',
    'CartService',
    'coupon_service',
    'OrderService',
    'SettingsService',
    'AchievementService',
    'SellerProductService',
    'CheckoutService',
    'ComparisonService',
    'ReviewService',
    'ArtisanStoryService',
    'VerificationService',
]
