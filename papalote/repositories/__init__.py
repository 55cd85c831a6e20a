# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Encapsula toda la persistencia (archivos JSON en la carpeta de datos).
#
# ESTRUCTURA:
# ├── interfaces.py                → Protocolos (contratos de cada repositorio)
# ├── base.py                      → DictRepository / ListRepository sobre JSON
# ├── catalog_repository.py        → products.json, artisan_stories.json
# ├── order_repository.py          → papalote-orders.json
# ├── address_repository.py        → papalote-addresses.json
# ├── seen_orders_repository.py    → papalote-seen-orders.json
# ├── settings_repository.py       → papalote_platform_settings.json
# ├── preferences_repository.py    → user_settings.json
# ├── achievement_repository.py    → papalote_achievements.json
# ├── seller_product_repository.py → papalote-draft-products.json,
#                                    papalote-seller-products.json
# ├── review_repository.py         → papalote-reviews.json
# ├── story_repository.py          → papalote-artisan-stories.json
# └── verification_repository.py   → papalote-verification-requests.json
# ==============================================================================

from .interfaces import (
    IRepository,
    ICatalogRepository,
    IOrderRepository,
    IAddressRepository,
    ISeenOrdersRepository,
    ISettingsRepository,
    IPreferencesRepository,
    IAchievementRepository,
    ISellerProductRepository,
    IReviewRepository,
    IStoryRepository,
    ISellerStoryRepository,
    IVerificationRepository,
)

from .base import BaseRepository, DictRepository, ListRepository
from .catalog_repository import CatalogRepository, ArtisanStoryRepository
from .order_repository import OrderRepository
from .address_repository import AddressRepository
from .seen_orders_repository import SeenOrdersRepository
from .settings_repository import SettingsRepository
from .preferences_repository import PreferencesRepository
from .achievement_repository import AchievementRepository
from .seller_product_repository import DraftProductRepository, PublishedProductRepository
from .review_repository import ReviewRepository
from .story_repository import SellerStoryRepository
from .verification_repository import VerificationRepository

__all__ = [
    # Interfaces
    'IRepository',
    'ICatalogRepository',
    'IOrderRepository',
    'IAddressRepository',
    'ISeenOrdersRepository',
    'ISettingsRepository',
    'IPreferencesRepository',
    'IAchievementRepository',
    'ISellerProductRepository',
    'IReviewRepository',
    'IStoryRepository',
    'ISellerStoryRepository',
    'IVerificationRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',

    # Implementaciones JSON
    'CatalogRepository',
    'ArtisanStoryRepository',
    'OrderRepository',
    'AddressRepository',
    'SeenOrdersRepository',
    'SettingsRepository',
    'PreferencesRepository',
    'AchievementRepository',
    'DraftProductRepository',
    'PublishedProductRepository',
    'ReviewRepository',
    'SellerStoryRepository',
    'VerificationRepository',
]
