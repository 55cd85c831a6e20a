# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios y servicios. Facilita:
#   - Inyección de dependencias
#   - Testing (la carpeta de datos se resuelve al construir el contenedor)
#   - Cambiar el almacenamiento sin tocar servicios
#
# ═══════════════════════════════════════════════════════════════════════════════
# CAMBIAR DE ALMACENAMIENTO
# ═══════════════════════════════════════════════════════════════════════════════
#
# Los servicios dependen de los protocolos en repositories/interfaces.py.
# Para usar otra persistencia basta con crear clases que los implementen
# (ej. una OrderRepository sobre SQL) y cambiar las importaciones de abajo.
# El catálogo estático siempre se lee de papalote/data/.
# ==============================================================================

import os
from typing import Optional

from papalote import config

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia (archivos JSON)
# ═══════════════════════════════════════════════════════════════════════════════
from papalote.repositories import (
    AchievementRepository,
    AddressRepository,
    ArtisanStoryRepository,
    CatalogRepository,
    DraftProductRepository,
    OrderRepository,
    PreferencesRepository,
    PublishedProductRepository,
    ReviewRepository,
    SeenOrdersRepository,
    SellerStoryRepository,
    SettingsRepository,
    VerificationRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from papalote.services import (
    AchievementService,
    ArtisanStoryService,
    CartService,
    CatalogService,
    CheckoutService,
    ComparisonService,
    OrderService,
    RecommendationService,
    ReviewService,
    SearchHistoryService,
    SellerProductService,
    SettingsService,
    VerificationService,
)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = get_container()
        productos = container.catalog_service.get_all_products()
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, data_dir: str = None):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, data_dir: str = None):
        """
        Inicializa el contenedor.

        Args:
            data_dir: Carpeta de los JSON persistidos (por defecto
                config.get_data_dir())
        """
        if self._initialized:
            return

        self._data_dir = data_dir or config.get_data_dir()
        os.makedirs(self._data_dir, exist_ok=True)
        self._catalog_dir = config.CATALOG_DIR
        self._clear()
        self._initialized = True

    def _clear(self) -> None:
        # Repositorios (lazy loading)
        self._catalog_repo: Optional[CatalogRepository] = None
        self._story_repo: Optional[ArtisanStoryRepository] = None
        self._order_repo: Optional[OrderRepository] = None
        self._address_repo: Optional[AddressRepository] = None
        self._seen_orders_repo: Optional[SeenOrdersRepository] = None
        self._settings_repo: Optional[SettingsRepository] = None
        self._preferences_repo: Optional[PreferencesRepository] = None
        self._achievement_repo: Optional[AchievementRepository] = None
        self._draft_repo: Optional[DraftProductRepository] = None
        self._published_repo: Optional[PublishedProductRepository] = None
        self._review_repo: Optional[ReviewRepository] = None
        self._seller_story_repo: Optional[SellerStoryRepository] = None
        self._verification_repo: Optional[VerificationRepository] = None

        # Servicios (lazy loading)
        self._catalog_service: Optional[CatalogService] = None
        self._search_history_service: Optional[SearchHistoryService] = None
        self._recommendation_service: Optional[RecommendationService] = None
        self._cart_service: Optional[CartService] = None
        self._settings_service: Optional[SettingsService] = None
        self._order_service: Optional[OrderService] = None
        self._achievement_service: Optional[AchievementService] = None
        self._seller_product_service: Optional[SellerProductService] = None
        self._checkout_service: Optional[CheckoutService] = None
        self._comparison_service: Optional[ComparisonService] = None
        self._review_service: Optional[ReviewService] = None
        self._artisan_story_service: Optional[ArtisanStoryService] = None
        self._verification_service: Optional[VerificationService] = None

    @property
    def data_dir(self) -> str:
        return self._data_dir

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def catalog_repo(self) -> CatalogRepository:
        """Catálogo estático (solo lectura)."""
        if self._catalog_repo is None:
            self._catalog_repo = CatalogRepository(self._catalog_dir)
        return self._catalog_repo

    @property
    def story_repo(self) -> ArtisanStoryRepository:
        if self._story_repo is None:
            self._story_repo = ArtisanStoryRepository(self._catalog_dir)
        return self._story_repo

    @property
    def order_repo(self) -> OrderRepository:
        if self._order_repo is None:
            self._order_repo = OrderRepository(self._data_dir)
        return self._order_repo

    @property
    def address_repo(self) -> AddressRepository:
        if self._address_repo is None:
            self._address_repo = AddressRepository(self._data_dir)
        return self._address_repo

    @property
    def seen_orders_repo(self) -> SeenOrdersRepository:
        if self._seen_orders_repo is None:
            self._seen_orders_repo = SeenOrdersRepository(self._data_dir)
        return self._seen_orders_repo

    @property
    def settings_repo(self) -> SettingsRepository:
        if self._settings_repo is None:
            self._settings_repo = SettingsRepository(self._data_dir)
        return self._settings_repo

    @property
    def preferences_repo(self) -> PreferencesRepository:
        if self._preferences_repo is None:
            self._preferences_repo = PreferencesRepository(self._data_dir)
        return self._preferences_repo

    @property
    def achievement_repo(self) -> AchievementRepository:
        if self._achievement_repo is None:
            self._achievement_repo = AchievementRepository(self._data_dir)
        return self._achievement_repo

    @property
    def draft_repo(self) -> DraftProductRepository:
        if self._draft_repo is None:
            self._draft_repo = DraftProductRepository(self._data_dir)
        return self._draft_repo

    @property
    def published_repo(self) -> PublishedProductRepository:
        if self._published_repo is None:
            self._published_repo = PublishedProductRepository(self._data_dir)
        return self._published_repo

    @property
    def review_repo(self) -> ReviewRepository:
        if self._review_repo is None:
            self._review_repo = ReviewRepository(self._data_dir)
        return self._review_repo

    @property
    def seller_story_repo(self) -> SellerStoryRepository:
        """Historias escritas por vendedores (reemplazan a las de catálogo)."""
        if self._seller_story_repo is None:
            self._seller_story_repo = SellerStoryRepository(self._data_dir)
        return self._seller_story_repo

    @property
    def verification_repo(self) -> VerificationRepository:
        if self._verification_repo is None:
            self._verification_repo = VerificationRepository(self._data_dir)
        return self._verification_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def catalog_service(self) -> CatalogService:
        """Catálogo estático + productos publicados por vendedores."""
        if self._catalog_service is None:
            self._catalog_service = CatalogService(self.catalog_repo, self.published_repo)
        return self._catalog_service

    @property
    def search_history_service(self) -> SearchHistoryService:
        if self._search_history_service is None:
            self._search_history_service = SearchHistoryService()
        return self._search_history_service

    @property
    def recommendation_service(self) -> RecommendationService:
        if self._recommendation_service is None:
            self._recommendation_service = RecommendationService(self.catalog_service)
        return self._recommendation_service

    @property
    def cart_service(self) -> CartService:
        if self._cart_service is None:
            self._cart_service = CartService(self.catalog_service)
        return self._cart_service

    @property
    def settings_service(self) -> SettingsService:
        if self._settings_service is None:
            self._settings_service = SettingsService(self.settings_repo, self.preferences_repo)
        return self._settings_service

    @property
    def order_service(self) -> OrderService:
        if self._order_service is None:
            self._order_service = OrderService(
                self.order_repo,
                self.address_repo,
                self.seen_orders_repo,
            )
        return self._order_service

    @property
    def achievement_service(self) -> AchievementService:
        if self._achievement_service is None:
            self._achievement_service = AchievementService(self.achievement_repo)
        return self._achievement_service

    @property
    def seller_product_service(self) -> SellerProductService:
        if self._seller_product_service is None:
            self._seller_product_service = SellerProductService(
                self.draft_repo,
                self.published_repo,
                self.achievement_service,
            )
        return self._seller_product_service

    @property
    def checkout_service(self) -> CheckoutService:
        if self._checkout_service is None:
            self._checkout_service = CheckoutService(
                self.cart_service,
                self.order_repo,
                self.settings_service,
                self.order_service,
                self.achievement_service,
            )
        return self._checkout_service

    @property
    def comparison_service(self) -> ComparisonService:
        if self._comparison_service is None:
            self._comparison_service = ComparisonService(self.catalog_service)
        return self._comparison_service

    @property
    def review_service(self) -> ReviewService:
        if self._review_service is None:
            self._review_service = ReviewService(
                self.review_repo,
                self.catalog_service,
                self.achievement_service,
            )
        return self._review_service

    @property
    def artisan_story_service(self) -> ArtisanStoryService:
        if self._artisan_story_service is None:
            self._artisan_story_service = ArtisanStoryService(
                self.story_repo,
                self.seller_story_repo,
                self.achievement_service,
            )
        return self._artisan_story_service

    @property
    def verification_service(self) -> VerificationService:
        if self._verification_service is None:
            self._verification_service = VerificationService(
                self.verification_repo,
                self.achievement_service,
            )
        return self._verification_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        Útil para testing o para recargar datos.
        """
        self._clear()

    @classmethod
    def get_instance(cls, data_dir: str = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            data_dir: Carpeta de datos (solo se usa en la primera llamada)
        """
        if cls._instance is None:
            return cls(data_dir)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


def get_container(data_dir: str = None) -> AppContainer:
    """
    Obtiene el contenedor de dependencias global.

    Args:
        data_dir: Carpeta de datos persistidos

    Returns:
        Instancia del contenedor
    """
    return AppContainer.get_instance(data_dir)
