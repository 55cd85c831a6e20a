# ==============================================================================
# SERVICIO DE RESEÑAS
# ==============================================================================
# Reseñas de compradores sobre productos del catálogo. Cada reseña nueva
# actualiza el logro de reseñas del comprador (métrica reviews_count).
# ==============================================================================

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from papalote.errors import StorageError, log_error
from papalote.models.entities import ProductReview, UserType
from papalote.repositories.interfaces import IReviewRepository
from papalote.services.catalog_service import CatalogService
from papalote.services.order_service import random_base36, to_base36
from papalote.validators import validate_review

logger = logging.getLogger(__name__)


def generate_review_id() -> str:
    return f"REV-{to_base36(int(time.time() * 1000))}-{random_base36(4)}".upper()


class ReviewService:
    """Alta y consulta de reseñas de productos."""

    def __init__(
        self,
        review_repo: IReviewRepository,
        catalog_service: CatalogService,
        achievement_service=None,
    ):
        self.repo = review_repo
        self.catalog_service = catalog_service
        self.achievement_service = achievement_service

    def get_reviews(self, product_id: str) -> Dict[str, Any]:
        """
        Reseñas de un producto, más reciente primero.

        Returns:
            Dict con reviews, count y average_rating (None si no hay reseñas)
        """
        if not self.catalog_service.get_product(product_id):
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}
        reviews = [ProductReview.from_dict(r).to_dict() for r in self.repo.get_by_product(product_id)]
        average: Optional[float] = None
        if reviews:
            average = round(sum(r['rating'] for r in reviews) / len(reviews), 1)
        return {'ok': True, 'reviews': reviews, 'count': len(reviews), 'average_rating': average}

    def add_review(self, product_id: str, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Publica una reseña.

        Args:
            product_id: Producto reseñado
            user_id: Comprador que escribe la reseña
            data: {rating, comment, title?}

        Returns:
            Dict con ok, la reseña guardada y los logros desbloqueados
        """
        if not user_id:
            return {'ok': False, 'error': 'user_id es requerido'}
        product = self.catalog_service.get_product(product_id)
        if not product:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

        validation = validate_review(data)
        if not validation['ok']:
            return {'ok': False, 'error': 'Revisa los campos de la reseña', 'errors': validation['errors']}
        form = validation['data']

        review = ProductReview(
            id=generate_review_id(),
            product_id=product['id'],
            user_id=user_id,
            rating=form.rating,
            title=form.title,
            comment=form.comment,
            created_at=datetime.now(timezone.utc).isoformat(),
        ).to_dict()

        try:
            self.repo.add_review(review)
        except StorageError as e:
            log_error('reseñas', e, op='add', product_id=product['id'])
            return {'ok': False, 'error': 'No se pudo guardar la reseña'}

        unlocked = []
        if self.achievement_service is not None:
            unlocked = self.achievement_service.track_metric(
                user_id, UserType.BUYER.value, 'reviews_count', len(self.repo.get_by_user(user_id))
            )
        logger.info("[reseñas] %s reseñó el producto %s", user_id, product['id'])
        return {'ok': True, 'review': review, 'unlocked': unlocked}
