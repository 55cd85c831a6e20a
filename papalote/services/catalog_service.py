# ==============================================================================
# SERVICIO DE CATÁLOGO
# ==============================================================================
# Filtrado, ordenamiento y paginación del catálogo en memoria.
# El catálogo = productos estáticos + productos publicados por vendedores.
# Cada petición recalcula el resultado completo; no hay índices ni caché.
# ==============================================================================

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

from papalote.models.entities import Product, SortOption
from papalote.performance_logger import profile_function
from papalote.repositories.interfaces import ICatalogRepository, ISellerProductRepository

logger = logging.getLogger(__name__)

DEFAULT_PRICE_RANGE = (0, 10000)
MAX_PRICE_PARAM = 1000000
DEFAULT_PER_PAGE = 12


# ==============================================================================
# ESTADO DE FILTROS
# ==============================================================================

@dataclass
class ProductFilters:
    """
    Filtros activos del catálogo.

    Los filtros booleanos son de tres estados: None (sin filtro),
    True (solo los que cumplen) y False (solo los que no cumplen).
    """
    categories: List[str] = field(default_factory=list)
    subcategories: List[str] = field(default_factory=list)
    states: List[str] = field(default_factory=list)
    price_min: float = DEFAULT_PRICE_RANGE[0]
    price_max: float = DEFAULT_PRICE_RANGE[1]
    min_rating: float = 0
    in_stock: Optional[bool] = None
    verified: Optional[bool] = None
    featured: Optional[bool] = None
    search_query: str = ''
    sort_by: str = SortOption.RELEVANCE.value

    # -------------------------------------------------------------------------
    # Operaciones de estado (cada una devuelve un filtro nuevo)
    # -------------------------------------------------------------------------

    def toggle_category(self, category: str) -> 'ProductFilters':
        """Selección única: repetir la misma categoría la deselecciona."""
        if category in self.categories:
            return replace(self, categories=[])
        return replace(self, categories=[category])

    def toggle_subcategory(self, subcategory: str) -> 'ProductFilters':
        return replace(self, subcategories=_toggle(self.subcategories, subcategory))

    def toggle_state(self, state: str) -> 'ProductFilters':
        return replace(self, states=_toggle(self.states, state))

    def cycle(self, name: str) -> 'ProductFilters':
        """
        Rota un filtro booleano None → True → False → None.

        Args:
            name: 'in_stock', 'verified' o 'featured'
        """
        if name not in ('in_stock', 'verified', 'featured'):
            raise ValueError(f"Filtro booleano desconocido: {name}")
        current = getattr(self, name)
        next_value = True if current is None else (False if current is True else None)
        return replace(self, **{name: next_value})

    def reset(self, bounds: Optional[Dict[str, float]] = None) -> 'ProductFilters':
        """Quita todos los filtros; el rango de precio vuelve a los límites del catálogo."""
        bounds = bounds or {'min': DEFAULT_PRICE_RANGE[0], 'max': DEFAULT_PRICE_RANGE[1]}
        return ProductFilters(price_min=bounds['min'], price_max=bounds['max'])

    def reset_filter(self, name: str) -> 'ProductFilters':
        """Restablece un solo filtro a su valor por defecto."""
        if name == 'price_range':
            return replace(self, price_min=DEFAULT_PRICE_RANGE[0], price_max=DEFAULT_PRICE_RANGE[1])
        defaults = ProductFilters()
        if not hasattr(defaults, name):
            raise ValueError(f"Filtro desconocido: {name}")
        return replace(self, **{name: getattr(defaults, name)})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'categories': list(self.categories),
            'subcategories': list(self.subcategories),
            'states': list(self.states),
            'price_range': {'min': self.price_min, 'max': self.price_max},
            'min_rating': self.min_rating,
            'in_stock': self.in_stock,
            'verified': self.verified,
            'featured': self.featured,
            'search_query': self.search_query,
            'sort_by': self.sort_by,
        }


def _toggle(values: List[str], value: str) -> List[str]:
    if value in values:
        return [v for v in values if v != value]
    return values + [value]


# ==============================================================================
# FILTRADO Y ORDENAMIENTO
# ==============================================================================

def _numeric_id(product: Dict[str, Any]) -> float:
    try:
        return float(product.get('id'))
    except (TypeError, ValueError):
        return 0


_SORT_KEYS = {
    SortOption.PRICE_ASC.value: (lambda p: p.get('price', 0), False),
    SortOption.PRICE_DESC.value: (lambda p: p.get('price', 0), True),
    SortOption.RATING_DESC.value: (lambda p: p.get('rating') or 0, True),
    SortOption.NEWEST.value: (_numeric_id, True),
    SortOption.POPULAR.value: (lambda p: p.get('review_count') or 0, True),
    SortOption.NAME_ASC.value: (lambda p: (p.get('name') or '').lower(), False),
}


def sort_products(products: List[Dict[str, Any]], sort_by: str) -> List[Dict[str, Any]]:
    """
    Ordena productos (orden estable). 'relevance' o valores desconocidos
    conservan el orden de entrada.
    """
    sort_key = _SORT_KEYS.get(sort_by)
    if sort_key is None:
        return list(products)
    key, reverse = sort_key
    return sorted(products, key=key, reverse=reverse)


def matches_search(product: Dict[str, Any], query: str) -> bool:
    """Búsqueda simple por subcadena en nombre, descripción, artesano y categoría."""
    q = query.strip().lower()
    if not q:
        return True
    return any(
        q in (product.get(f) or '').lower()
        for f in ('name', 'description', 'maker', 'category')
    )


@profile_function(name="Filtrar catálogo")
def filter_products(products: List[Dict[str, Any]], filters: ProductFilters) -> List[Dict[str, Any]]:
    """
    Aplica cada filtro activo en orden y después el ordenamiento elegido.

    Args:
        products: Productos como dicts
        filters: Filtros activos

    Returns:
        Nueva lista filtrada y ordenada
    """
    result = list(products)

    if filters.search_query.strip():
        result = [p for p in result if matches_search(p, filters.search_query)]

    if filters.categories:
        result = [p for p in result if p.get('category') in filters.categories]

    if filters.subcategories:
        result = [p for p in result if p.get('subcategory') and p['subcategory'] in filters.subcategories]

    if filters.states:
        result = [p for p in result if p.get('state') in filters.states]

    result = [p for p in result if filters.price_min <= p.get('price', 0) <= filters.price_max]

    if filters.min_rating > 0:
        result = [p for p in result if p.get('rating') and p['rating'] >= filters.min_rating]

    if filters.in_stock is not None:
        result = [p for p in result if bool(p.get('in_stock')) == filters.in_stock]

    if filters.verified is not None:
        result = [p for p in result if bool(p.get('verified')) == filters.verified]

    if filters.featured is not None:
        result = [p for p in result if bool(p.get('featured')) == filters.featured]

    return sort_products(result, filters.sort_by)


def price_bounds(products: List[Dict[str, Any]]) -> Dict[str, float]:
    """
    Límites de precio redondeados a centenas.

    Returns:
        {'min': floor(min/100)*100, 'max': ceil(max/100)*100}
        o 0-10000 si no hay productos
    """
    if not products:
        return {'min': DEFAULT_PRICE_RANGE[0], 'max': DEFAULT_PRICE_RANGE[1]}
    prices = [p.get('price', 0) for p in products]
    return {
        'min': math.floor(min(prices) / 100) * 100,
        'max': math.ceil(max(prices) / 100) * 100,
    }


def filter_options(products: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Valores únicos y ordenados de categorías, subcategorías y estados."""
    return {
        'categories': sorted({p['category'] for p in products if p.get('category')}),
        'subcategories': sorted({p['subcategory'] for p in products if p.get('subcategory')}),
        'states': sorted({p['state'] for p in products if p.get('state')}),
    }


def active_filter_count(filters: ProductFilters, bounds: Dict[str, float]) -> int:
    """Cuenta los grupos de filtro activos (máximo 9)."""
    count = 0
    if filters.categories:
        count += 1
    if filters.subcategories:
        count += 1
    if filters.states:
        count += 1
    if filters.price_min > bounds['min'] or filters.price_max < bounds['max']:
        count += 1
    if filters.min_rating > 0:
        count += 1
    if filters.in_stock is not None:
        count += 1
    if filters.verified is not None:
        count += 1
    if filters.featured is not None:
        count += 1
    if filters.search_query.strip():
        count += 1
    return count


def paginate(items: List[Any], page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> Dict[str, Any]:
    """
    Paginación por rebanado. La página se ajusta al rango [1, total_pages].

    Returns:
        Dict con items, page, per_page, total, total_pages
    """
    per_page = max(1, int(per_page))
    total = len(items)
    total_pages = max(1, math.ceil(total / per_page))
    page = min(max(1, int(page)), total_pages)
    start = (page - 1) * per_page
    return {
        'items': items[start:start + per_page],
        'page': page,
        'per_page': per_page,
        'total': total,
        'total_pages': total_pages,
    }


# ==============================================================================
# PARÁMETROS DE URL
# ==============================================================================

def validate_price_param(value: Optional[str]) -> Optional[int]:
    """Precio entero entre 0 y 1,000,000; cualquier otra cosa → None."""
    if not value:
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    if parsed < 0 or parsed > MAX_PRICE_PARAM:
        return None
    return parsed


def validate_sort_param(value: Optional[str]) -> str:
    valid = {s.value for s in SortOption}
    return value if value in valid else SortOption.RELEVANCE.value


def validate_boolean_param(value: Optional[str]) -> Optional[bool]:
    """'si' → True, cualquier otro valor no vacío → False, vacío → None."""
    if not value:
        return None
    return value.strip().lower() == 'si'


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_query(args: Mapping[str, Any], bounds: Optional[Dict[str, float]] = None) -> Dict[str, Any]:
    """
    Convierte los parámetros de URL del catálogo en filtros y paginación.

    Parámetros reconocidos: categoria, subcategoria, estado (repetibles),
    q, ordenar, pagina, por_pagina, precio_min, precio_max, calificacion,
    disponible, destacado, verificado.

    Args:
        args: request.args (MultiDict) o dict simple
        bounds: Límites de precio del catálogo (rango por defecto)

    Returns:
        {'filters': ProductFilters, 'page': int, 'per_page': int}
    """
    def get_list(name: str) -> List[str]:
        if hasattr(args, 'getlist'):
            values = args.getlist(name)
        else:
            raw = args.get(name)
            values = raw if isinstance(raw, list) else ([raw] if raw else [])
        result = []
        for v in values:
            result.extend(part.strip() for part in str(v).split(',') if part.strip())
        return result

    bounds = bounds or {'min': DEFAULT_PRICE_RANGE[0], 'max': DEFAULT_PRICE_RANGE[1]}
    price_min = validate_price_param(args.get('precio_min'))
    price_max = validate_price_param(args.get('precio_max'))

    filters = ProductFilters(
        categories=get_list('categoria')[:1],
        subcategories=get_list('subcategoria'),
        states=get_list('estado'),
        price_min=price_min if price_min is not None else bounds['min'],
        price_max=price_max if price_max is not None else bounds['max'],
        min_rating=max(0.0, min(5.0, _to_float(args.get('calificacion'), 0))),
        in_stock=validate_boolean_param(args.get('disponible')),
        verified=validate_boolean_param(args.get('verificado')),
        featured=validate_boolean_param(args.get('destacado')),
        search_query=(args.get('q') or '').strip(),
        sort_by=validate_sort_param(args.get('ordenar')),
    )
    return {
        'filters': filters,
        'page': max(1, _to_int(args.get('pagina'), 1)),
        'per_page': max(1, min(100, _to_int(args.get('por_pagina'), DEFAULT_PER_PAGE))),
    }


# ==============================================================================
# SERVICIO
# ==============================================================================

class CatalogService:
    """
    Servicio de catálogo.

    Responsabilidades:
    - Combinar catálogo estático y productos publicados por vendedores
    - Buscar productos por id
    - Ejecutar la búsqueda filtrada y paginada de la API
    """

    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        published_repo: Optional[ISellerProductRepository] = None,
    ):
        self.catalog_repo = catalog_repo
        self.published_repo = published_repo

    def get_all_products(self) -> List[Dict[str, Any]]:
        """
        Todos los productos normalizados (estáticos primero, luego publicados).
        """
        products = [Product.from_dict(p).to_dict() for p in self.catalog_repo.get_products()]
        if self.published_repo is not None:
            published = self.published_repo.get_all()
            products.extend(Product.from_dict(p).to_dict() for p in published)
        return products

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        if not product_id:
            return None
        for product in self.get_all_products():
            if product['id'] == str(product_id):
                return product
        return None

    def browse(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Ejecuta una consulta del catálogo a partir de parámetros de URL.

        Returns:
            Dict con productos paginados, filtros aplicados, opciones
            disponibles, límites de precio y cantidad de filtros activos
        """
        products = self.get_all_products()
        bounds = price_bounds(products)
        query = parse_query(args, bounds)
        filters = query['filters']
        filtered = filter_products(products, filters)
        page = paginate(filtered, query['page'], query['per_page'])
        logger.debug("[catalogo] %d de %d productos, página %d", len(filtered), len(products), page['page'])
        return {
            'ok': True,
            'products': page['items'],
            'pagination': {k: v for k, v in page.items() if k != 'items'},
            'filters': filters.to_dict(),
            'active_filter_count': active_filter_count(filters, bounds),
            'options': filter_options(products),
            'price_bounds': bounds,
        }
