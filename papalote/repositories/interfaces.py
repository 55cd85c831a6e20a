# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
# Los servicios dependen de estos protocolos y no de las clases JSON
# concretas. Cualquier otra implementación (base de datos, memoria para
# tests) solo necesita cumplir el contrato.
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class IRepository(Protocol):
    """Operaciones mínimas de cualquier repositorio."""

    def reload(self) -> None:
        ...


@runtime_checkable
class ICatalogRepository(IRepository, Protocol):
    """Catálogo estático de productos."""

    def get_products(self) -> List[Dict[str, Any]]:
        ...

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        ...


@runtime_checkable
class IOrderRepository(IRepository, Protocol):
    """Pedidos, más reciente primero."""

    def get_orders(self) -> List[Dict[str, Any]]:
        ...

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        ...

    def get_by_number(self, order_number: str) -> Optional[Dict[str, Any]]:
        ...

    def add_order(self, order: Dict[str, Any]) -> None:
        ...

    def update_order(self, order_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ...


@runtime_checkable
class IAddressRepository(IRepository, Protocol):
    """Direcciones guardadas."""

    def get_addresses(self) -> List[Dict[str, Any]]:
        ...

    def save_addresses(self, addresses: List[Dict[str, Any]]) -> None:
        ...

    def delete_address(self, address_id: str) -> bool:
        ...


@runtime_checkable
class ISeenOrdersRepository(IRepository, Protocol):
    """Pedidos ya revisados por cada vendedor."""

    def get_seen(self, seller_name: str) -> List[str]:
        ...

    def set_seen(self, seller_name: str, order_ids: List[str]) -> None:
        ...


@runtime_checkable
class ISettingsRepository(IRepository, Protocol):
    """Blob de configuración de la plataforma."""

    def load(self) -> Optional[Dict[str, Any]]:
        ...

    def save(self, settings: Dict[str, Any]) -> None:
        ...

    def reset(self) -> bool:
        ...


@runtime_checkable
class IPreferencesRepository(IRepository, Protocol):
    """Preferencias por usuario."""

    def get_theme(self, user_id: str) -> str:
        ...

    def set_theme(self, user_id: str, theme: str) -> str:
        ...


@runtime_checkable
class IAchievementRepository(IRepository, Protocol):
    """Datos de logros por clave namespaced."""

    def load(self, user_type: str, user_id: str) -> Optional[Dict[str, Any]]:
        ...

    def save(self, user_type: str, user_id: str, data: Dict[str, Any]) -> None:
        ...

    def remove(self, user_type: str, user_id: str) -> bool:
        ...


@runtime_checkable
class ISellerProductRepository(IRepository, Protocol):
    """Lista de productos de vendedor (borradores o publicados)."""

    def get_all(self) -> List[Dict[str, Any]]:
        ...

    def get_by_seller(self, seller_id: str) -> List[Dict[str, Any]]:
        ...

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        ...

    def save_product(self, product: Dict[str, Any]) -> bool:
        ...

    def delete_product(self, product_id: str) -> bool:
        ...


@runtime_checkable
class IReviewRepository(IRepository, Protocol):
    """Reseñas de productos."""

    def get_by_product(self, product_id: str) -> List[Dict[str, Any]]:
        ...

    def get_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        ...

    def add_review(self, review: Dict[str, Any]) -> None:
        ...


@runtime_checkable
class IStoryRepository(IRepository, Protocol):
    """Historias de artesanos."""

    def get_stories(self) -> List[Dict[str, Any]]:
        ...

    def get_story(self, story_id: str) -> Optional[Dict[str, Any]]:
        ...


@runtime_checkable
class ISellerStoryRepository(IStoryRepository, Protocol):
    """Historias editables por los vendedores."""

    def save_story(self, story: Dict[str, Any]) -> bool:
        ...


@runtime_checkable
class IVerificationRepository(IRepository, Protocol):
    """Solicitudes de verificación de vendedores."""

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        ...

    def find_request(self, request_id: str) -> Optional[Dict[str, Any]]:
        ...

    def save_request(self, request: Dict[str, Any]) -> None:
        ...
