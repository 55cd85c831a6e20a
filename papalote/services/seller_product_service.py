# ==============================================================================
# SERVICIO DE PRODUCTOS DE VENDEDOR
# ==============================================================================
# Borradores, publicación y retiro de productos creados por vendedores.
# Un producto publicado aparece en el catálogo junto a los estáticos.
# ==============================================================================

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from papalote.errors import StorageError, log_error
from papalote.models.entities import ProductStatus, SellerProduct, UserType
from papalote.repositories.interfaces import ISellerProductRepository
from papalote.services.order_service import random_base36, to_base36
from papalote.validators import validate_product

logger = logging.getLogger(__name__)

# Campos de metadatos que no forman parte del producto en sí
_META_FIELDS = ('id', 'seller_id', 'seller_name', 'status', 'created_at', 'updated_at', 'published_at')


def generate_product_id() -> str:
    """PROD-<milisegundos base36>-<6 aleatorios>, en mayúsculas."""
    return f"PROD-{to_base36(int(time.time() * 1000))}-{random_base36(6)}".upper()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SellerProductService:
    """
    Servicio de productos de vendedor.

    Los borradores y los publicados viven en archivos separados; publicar
    mueve el registro de uno a otro.
    """

    def __init__(
        self,
        draft_repo: ISellerProductRepository,
        published_repo: ISellerProductRepository,
        achievement_service=None,
    ):
        self.draft_repo = draft_repo
        self.published_repo = published_repo
        self.achievement_service = achievement_service

    # =========================================================================
    # Borradores
    # =========================================================================

    def save_draft(
        self,
        product: Dict[str, Any],
        seller_id: str,
        seller_name: str,
        existing_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Guarda un borrador (nuevo o existente).

        Un borrador no se valida: puede estar incompleto.

        Args:
            product: Campos del producto
            seller_id: Dueño
            seller_name: Nombre visible del vendedor
            existing_id: ID a actualizar (conserva created_at)

        Returns:
            Dict con ok y el borrador guardado
        """
        if not seller_id:
            return {'ok': False, 'error': 'seller_id es requerido'}

        product_id = existing_id or product.get('id') or generate_product_id()
        existing = self.draft_repo.get_product(product_id)
        now = _now()

        draft = SellerProduct(
            id=product_id,
            seller_id=seller_id,
            seller_name=seller_name or 'Vendedor',
            status=ProductStatus.DRAFT,
            product={k: v for k, v in product.items() if k not in _META_FIELDS},
            created_at=(existing or {}).get('created_at') or product.get('created_at') or now,
            updated_at=now,
        ).to_dict()

        try:
            self.draft_repo.save_product(draft)
        except StorageError as e:
            log_error('productos', e, op='save_draft', product_id=product_id)
            return {'ok': False, 'error': 'No se pudo guardar el borrador'}
        return {'ok': True, 'product': draft}

    def get_drafts(self, seller_id: str) -> List[Dict[str, Any]]:
        return self.draft_repo.get_by_seller(seller_id)

    def get_draft(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self.draft_repo.get_product(product_id)

    def delete_draft(self, product_id: str) -> Dict[str, Any]:
        try:
            removed = self.draft_repo.delete_product(product_id)
        except StorageError as e:
            log_error('productos', e, op='delete_draft', product_id=product_id)
            return {'ok': False, 'error': 'No se pudo eliminar el borrador'}
        if not removed:
            return {'ok': False, 'error': 'Borrador no encontrado', 'not_found': True}
        return {'ok': True, 'message': 'Borrador eliminado'}

    # =========================================================================
    # Publicados
    # =========================================================================

    def publish(self, product_id: str) -> Dict[str, Any]:
        """
        Publica un borrador después de validarlo completo.

        Returns:
            Dict con ok y el producto publicado, o errores por campo
        """
        draft = self.draft_repo.get_product(product_id)
        if not draft:
            return {'ok': False, 'error': 'Borrador no encontrado', 'not_found': True}

        validation = validate_product(draft)
        if not validation['ok']:
            return {
                'ok': False,
                'error': 'El producto no está listo para publicarse',
                'errors': validation['errors'],
            }

        now = _now()
        published = dict(draft)
        published.update(validation['data'].model_dump())
        published.update({
            'status': ProductStatus.PUBLISHED.value,
            'updated_at': now,
            'published_at': now,
        })

        try:
            self.published_repo.save_product(published)
            self.draft_repo.delete_product(product_id)
        except StorageError as e:
            log_error('productos', e, op='publish', product_id=product_id)
            return {'ok': False, 'error': 'No se pudo publicar el producto'}

        logger.info("[productos] %s publicado por %s", product_id, published['seller_id'])
        unlocks = self._track_catalog_size(published['seller_id'])
        return {'ok': True, 'product': published, 'achievements': unlocks}

    def save_published(self, product: Dict[str, Any]) -> Dict[str, Any]:
        """Actualiza un producto ya publicado (se revalida)."""
        product_id = product.get('id')
        existing = self.published_repo.get_product(product_id) if product_id else None
        if not existing:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

        merged = dict(existing)
        merged.update({k: v for k, v in product.items() if k not in _META_FIELDS})
        validation = validate_product(merged)
        if not validation['ok']:
            return {'ok': False, 'error': 'Revisa los campos marcados', 'errors': validation['errors']}

        merged.update(validation['data'].model_dump())
        merged['updated_at'] = _now()
        try:
            self.published_repo.save_product(merged)
        except StorageError as e:
            log_error('productos', e, op='save_published', product_id=product_id)
            return {'ok': False, 'error': 'No se pudo guardar el producto'}
        return {'ok': True, 'product': merged}

    def get_published(self, seller_id: str) -> List[Dict[str, Any]]:
        return [
            p for p in self.published_repo.get_by_seller(seller_id)
            if p.get('status') == ProductStatus.PUBLISHED.value
        ]

    def get_all_seller_products(self, seller_id: str) -> List[Dict[str, Any]]:
        """Borradores y publicados, el modificado más recientemente primero."""
        products = self.get_drafts(seller_id) + self.get_published(seller_id)
        return sorted(products, key=lambda p: p.get('updated_at') or '', reverse=True)

    def unpublish(self, product_id: str, seller_id: str) -> Dict[str, Any]:
        """Regresa un producto publicado a borradores."""
        product = next((p for p in self.get_published(seller_id) if p['id'] == product_id), None)
        if not product:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

        result = self.save_draft(product, seller_id, product.get('seller_name'), existing_id=product_id)
        if not result['ok']:
            return result
        try:
            self.published_repo.delete_product(product_id)
        except StorageError as e:
            log_error('productos', e, op='unpublish', product_id=product_id)
            return {'ok': False, 'error': 'No se pudo retirar el producto'}
        return {'ok': True, 'product': result['product']}

    def delete_product(self, product_id: str, seller_id: str) -> Dict[str, Any]:
        """Elimina un producto del vendedor, sea borrador o publicado."""
        draft = self.draft_repo.get_product(product_id)
        if draft and draft.get('seller_id') == seller_id:
            return self.delete_draft(product_id)

        published = self.published_repo.get_product(product_id)
        if not published or published.get('seller_id') != seller_id:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}
        try:
            self.published_repo.delete_product(product_id)
        except StorageError as e:
            log_error('productos', e, op='delete_product', product_id=product_id)
            return {'ok': False, 'error': 'No se pudo eliminar el producto'}
        return {'ok': True, 'message': 'Producto eliminado'}

    def get_counts(self, seller_id: str) -> Dict[str, int]:
        return {
            'drafts': len(self.get_drafts(seller_id)),
            'published': len(self.get_published(seller_id)),
        }

    def _track_catalog_size(self, seller_id: str) -> List[Dict[str, Any]]:
        if self.achievement_service is None:
            return []
        return self.achievement_service.track_metric(
            seller_id, UserType.SELLER.value, 'products_count', len(self.get_published(seller_id))
        )
