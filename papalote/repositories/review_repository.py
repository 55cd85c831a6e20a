# ==============================================================================
# REPOSITORIO DE RESEÑAS
# ==============================================================================
# Encapsula el acceso a papalote-reviews.json (lista, más reciente primero)
# ==============================================================================

from typing import Any, Dict, List

from .base import ListRepository

REVIEWS_KEY = 'papalote-reviews'


class ReviewRepository(ListRepository):
    """Reseñas de productos."""

    def __init__(self, base_path: str):
        super().__init__(base_path, REVIEWS_KEY)

    def get_by_product(self, product_id: str) -> List[Dict[str, Any]]:
        return self.find_all_by('product_id', str(product_id))

    def get_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return self.find_all_by('user_id', user_id)

    def add_review(self, review: Dict[str, Any]) -> None:
        self.prepend(review)
