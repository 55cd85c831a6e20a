# ==============================================================================
# SERVICIO DE BÚSQUEDA
# ==============================================================================
# Búsqueda difusa con tolerancia a errores de escritura (distancia de
# Levenshtein), sugerencias de autocompletado e historial de búsquedas.
# El historial se guarda en la sesión de Flask (session['busquedas']).
# ==============================================================================

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from flask import session

from papalote.performance_logger import profile_function

MAX_HISTORY_ITEMS = 10
DEFAULT_LIMIT = 10
DEFAULT_MIN_SCORE = 0.2

# Peso de cada campo en la puntuación total
FIELD_WEIGHTS = {
    'name': 3,
    'category': 2,
    'maker': 1.5,
    'state': 1.5,
    'description': 0.5,
}
LIST_FIELD_WEIGHTS = {
    'materials': 1,
    'tags': 1,
}


# ==============================================================================
# COINCIDENCIA DIFUSA
# ==============================================================================

def levenshtein_distance(a: str, b: str) -> int:
    """Cantidad mínima de inserciones, eliminaciones o sustituciones."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def _similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein_distance(a, b) / longest


def fuzzy_match(text: str, query: str) -> float:
    """
    Puntuación de coincidencia entre 0 y 1.

    - 1.0 coincidencia exacta
    - 0.8-0.9 el texto contiene la consulta (más alto si aparece antes)
    - 0.7 cada palabra de la consulta es prefijo de alguna palabra del texto
    - escala reducida para similitud por Levenshtein (consultas de 3 a 15
      caracteres)
    """
    text_lower = (text or '').lower()
    query_lower = (query or '').lower()
    if not text_lower or not query_lower:
        return 0

    if text_lower == query_lower:
        return 1

    position = text_lower.find(query_lower)
    if position >= 0:
        position_bonus = max(0.0, 1 - position / len(text_lower))
        return 0.8 + position_bonus * 0.1

    words = text_lower.split()
    query_words = query_lower.split()
    if query_words and all(any(w.startswith(qw) for w in words) for qw in query_words):
        return 0.7

    if 3 <= len(query_lower) <= 15:
        similarity = _similarity(text_lower, query_lower)
        if similarity > 0.4:
            return similarity * 0.5

        for word in words:
            if len(word) >= 3:
                word_similarity = _similarity(word, query_lower)
                if word_similarity > 0.6:
                    return word_similarity * 0.4

    return 0


@profile_function(name="Búsqueda difusa")
def search_products(
    products: List[Dict[str, Any]],
    query: str,
    limit: int = DEFAULT_LIMIT,
    min_score: float = DEFAULT_MIN_SCORE,
) -> List[Dict[str, Any]]:
    """
    Busca productos con puntuación de relevancia.

    Args:
        products: Productos como dicts
        query: Texto buscado
        limit: Máximo de resultados
        min_score: Puntuación mínima para incluir un producto

    Returns:
        Lista de {'product', 'score', 'matched_fields'} ordenada por score
    """
    normalized = (query or '').strip().lower()
    if not normalized:
        return []

    results = []
    for product in products:
        total = 0.0
        matched: List[str] = []

        for field_name, weight in FIELD_WEIGHTS.items():
            score = fuzzy_match(product.get(field_name) or '', normalized)
            if score > 0:
                total += score * weight
                matched.append(field_name)

        # En listas solo cuenta la primera coincidencia
        for field_name, weight in LIST_FIELD_WEIGHTS.items():
            for value in product.get(field_name) or []:
                score = fuzzy_match(value, normalized)
                if score > 0:
                    total += score * weight
                    matched.append(field_name)
                    break

        final = total / 10
        if product.get('verified'):
            final *= 1.1
        if product.get('featured'):
            final *= 1.1
        if product.get('in_stock'):
            final *= 1.05

        if matched and final >= min_score:
            results.append({'product': product, 'score': round(final, 4), 'matched_fields': matched})

    results.sort(key=lambda r: r['score'], reverse=True)
    return results[:limit]


def get_search_suggestions(products: List[Dict[str, Any]], query: str, limit: int = 5) -> List[str]:
    """
    Sugerencias de autocompletado (mínimo 2 caracteres).

    Se recolectan nombres, categorías, artesanos, estados y materiales que
    contienen la consulta. Primero los que empiezan con ella, luego los más
    cortos y al final orden alfabético.
    """
    if not query or not query.strip() or len(query) < 2:
        return []

    query_lower = query.lower()
    suggestions: List[str] = []

    def add(value: Optional[str]) -> None:
        if value and query_lower in value.lower() and value not in suggestions:
            suggestions.append(value)

    for product in products:
        add(product.get('name'))
        add(product.get('category'))
        add(product.get('maker'))
        add(product.get('state'))
        for material in product.get('materials') or []:
            add(material)
        if len(suggestions) >= limit * 2:
            break

    suggestions.sort(key=lambda s: (not s.lower().startswith(query_lower), len(s), s))
    return suggestions[:limit]


# ==============================================================================
# HISTORIAL DE BÚSQUEDA (sesión)
# ==============================================================================

class SearchHistoryService:
    """
    Historial de búsquedas del visitante.

    Guardado en session['busquedas'] como lista de {'query', 'timestamp'},
    más reciente primero, sin duplicados (sin distinguir mayúsculas).
    """

    SESSION_KEY = 'busquedas'

    def get_history(self) -> List[Dict[str, str]]:
        return list(session.get(self.SESSION_KEY, []))

    def _save(self, history: List[Dict[str, str]]) -> None:
        session[self.SESSION_KEY] = history
        session.modified = True

    def add(self, query: str) -> List[Dict[str, str]]:
        """Agrega una búsqueda al inicio (las vacías se ignoran)."""
        query = (query or '').strip()
        if not query:
            return self.get_history()
        normalized = query.lower()
        history = [h for h in self.get_history() if h.get('query', '').lower() != normalized]
        history.insert(0, {'query': query, 'timestamp': datetime.now(timezone.utc).isoformat()})
        history = history[:MAX_HISTORY_ITEMS]
        self._save(history)
        return history

    def remove(self, query: str) -> List[Dict[str, str]]:
        normalized = (query or '').strip().lower()
        history = [h for h in self.get_history() if h.get('query', '').lower() != normalized]
        self._save(history)
        return history

    def clear(self) -> None:
        session.pop(self.SESSION_KEY, None)
        session.modified = True
