# ==============================================================================
# SERVICIO DE RECOMENDACIONES
# ==============================================================================
# Recomendaciones por puntuación de atributos compartidos con el producto
# actual, más el historial de productos vistos (session['vistos']).
# ==============================================================================

from typing import Any, Dict, List

from flask import session

SCORE_WEIGHTS = {
    'same_category': 10,
    'same_maker': 8,
    'same_state': 5,
    'same_material': 4,
    'similar_price': 3,
    'featured': 2,
    'verified': 1,
}

CROSS_CATEGORY_WEIGHTS = {
    'same_maker': 10,
    'same_state': 5,
    'same_material': 3,
    'similar_price': 2,
    'featured': 2,
    'verified': 1,
}

# Tolerancia de "precio similar" (±30%)
PRICE_TOLERANCE = 0.3
MAX_RECENTLY_VIEWED = 10


def _score(candidate: Dict[str, Any], reference: Dict[str, Any], weights: Dict[str, int]) -> int:
    score = 0
    if 'same_category' in weights and candidate.get('category') == reference.get('category'):
        score += weights['same_category']
    if candidate.get('maker') == reference.get('maker'):
        score += weights['same_maker']
    if candidate.get('state') == reference.get('state'):
        score += weights['same_state']

    reference_materials = reference.get('materials') or []
    shared = [m for m in candidate.get('materials') or [] if m in reference_materials]
    score += len(shared) * weights['same_material']

    price = reference.get('price', 0)
    low = price * (1 - PRICE_TOLERANCE)
    high = price * (1 + PRICE_TOLERANCE)
    if low <= candidate.get('price', 0) <= high:
        score += weights['similar_price']

    if candidate.get('featured'):
        score += weights['featured']
    if candidate.get('verified'):
        score += weights['verified']
    return score


def _rank(scored: List[tuple], limit: int) -> List[Dict[str, Any]]:
    """Ordena por puntuación y desempata por calificación."""
    scored.sort(key=lambda item: (item[1], item[0].get('rating') or 0), reverse=True)
    return [product for product, _ in scored[:limit]]


def get_recommended_products(
    current: Dict[str, Any], products: List[Dict[str, Any]], limit: int = 4
) -> List[Dict[str, Any]]:
    """
    Productos similares al actual (excluye el actual y los agotados).

    Returns:
        Hasta `limit` productos ordenados por relevancia
    """
    candidates = [p for p in products if p['id'] != current['id'] and p.get('in_stock')]
    scored = [(p, _score(p, current, SCORE_WEIGHTS)) for p in candidates]
    return _rank(scored, limit)


def get_cross_category_recommendations(
    current: Dict[str, Any], products: List[Dict[str, Any]], limit: int = 4
) -> List[Dict[str, Any]]:
    """Productos de otras categorías con algún atributo en común (score > 0)."""
    candidates = [
        p for p in products
        if p['id'] != current['id']
        and p.get('category') != current.get('category')
        and p.get('in_stock')
    ]
    scored = [(p, _score(p, current, CROSS_CATEGORY_WEIGHTS)) for p in candidates]
    return _rank([item for item in scored if item[1] > 0], limit)


class RecommendationService:
    """
    Servicio de recomendaciones.

    Los productos vistos se guardan en session['vistos'] como lista de IDs,
    más reciente primero.
    """

    SESSION_KEY = 'vistos'

    def __init__(self, catalog_service):
        """
        Args:
            catalog_service: CatalogService para obtener el catálogo completo
        """
        self.catalog_service = catalog_service

    # =========================================================================
    # Vistos recientemente
    # =========================================================================

    def get_recently_viewed_ids(self) -> List[str]:
        return list(session.get(self.SESSION_KEY, []))

    def record_view(self, product_id: str) -> None:
        ids = [i for i in self.get_recently_viewed_ids() if i != product_id]
        ids.insert(0, product_id)
        session[self.SESSION_KEY] = ids[:MAX_RECENTLY_VIEWED]
        session.modified = True

    def clear_recently_viewed(self) -> None:
        session.pop(self.SESSION_KEY, None)
        session.modified = True

    def get_recently_viewed(
        self, exclude_id: str, products: List[Dict[str, Any]], limit: int = 4
    ) -> List[Dict[str, Any]]:
        """Productos vistos (sin el actual), solo los que siguen en existencia."""
        by_id = {p['id']: p for p in products}
        result = []
        for product_id in self.get_recently_viewed_ids():
            if product_id == exclude_id:
                continue
            product = by_id.get(product_id)
            if product and product.get('in_stock'):
                result.append(product)
        return result[:limit]

    # =========================================================================
    # Recomendaciones combinadas
    # =========================================================================

    def get_combined(self, product_id: str, limit: int = 4) -> Dict[str, Any]:
        """
        Similares, de otras categorías y vistos recientemente.

        Returns:
            Dict con ok, similar, cross_category, recently_viewed
        """
        products = self.catalog_service.get_all_products()
        current = next((p for p in products if p['id'] == str(product_id)), None)
        if current is None:
            return {'ok': False, 'error': 'Producto no encontrado'}
        return {
            'ok': True,
            'similar': get_recommended_products(current, products, limit),
            'cross_category': get_cross_category_recommendations(current, products, limit),
            'recently_viewed': self.get_recently_viewed(current['id'], products, limit),
        }
