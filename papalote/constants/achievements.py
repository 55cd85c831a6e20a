# ==============================================================================
# DEFINICIONES DE LOGROS - Compradores y vendedores
# ==============================================================================
# Cada fila: (id, nombre, descripción, icono, nivel, categoría,
#             tipo de criterio, métrica, objetivo, orden)
# Los logros ocultos y las recompensas se agregan aparte.
# ==============================================================================

from typing import Any, Dict, List, Optional

from papalote.models.entities import (
    AchievementCriteria,
    AchievementDefinition,
    AchievementReward,
    AchievementTier,
    UserType,
)

STORAGE_PREFIX = 'papalote_achievements_'
STORAGE_VERSION = 1


BUYER_CATEGORIES: Dict[str, Dict[str, str]] = {
    'getting_started': {'label': 'Primeros Pasos', 'icon': 'Sprout',
                        'description': 'Comienza tu viaje apoyando artesanos mexicanos'},
    'cultural_explorer': {'label': 'Explorador Cultural', 'icon': 'Map',
                          'description': 'Descubre la riqueza artesanal de México'},
    'artisan_support': {'label': 'Apoyo Artesanal', 'icon': 'Users',
                        'description': 'Impacta la vida de familias artesanas'},
    'environmental': {'label': 'Impacto Ambiental', 'icon': 'Leaf',
                      'description': 'Contribuye a un futuro más sostenible'},
    'shopping': {'label': 'Compras', 'icon': 'ShoppingBag',
                 'description': 'Celebra tus hitos de compra'},
    'categories': {'label': 'Categorías', 'icon': 'Palette',
                   'description': 'Explora la diversidad artesanal'},
    'reviews': {'label': 'Campeón de Reseñas', 'icon': 'MessageSquarePlus',
                'description': 'Comparte tu opinión y ayuda a otros compradores'},
    'social': {'label': 'Social', 'icon': 'Share2',
               'description': 'Conecta y comparte con la comunidad'},
    'special': {'label': 'Especiales', 'icon': 'Star',
                'description': 'Logros únicos y temporales'},
}

SELLER_CATEGORIES: Dict[str, Dict[str, str]] = {
    'getting_started': {'label': 'Primeros Pasos', 'icon': 'Rocket',
                        'description': 'Inicia tu camino como vendedor'},
    'sales': {'label': 'Ventas', 'icon': 'Package',
              'description': 'Celebra tus hitos de ventas'},
    'revenue': {'label': 'Ingresos', 'icon': 'TrendingUp',
                'description': 'Alcanza metas de ingresos'},
    'quality': {'label': 'Calidad', 'icon': 'Star',
                'description': 'Mantén la excelencia en tu servicio'},
    'service': {'label': 'Servicio al Cliente', 'icon': 'MessageCircle',
                'description': 'Destaca por tu atención'},
    'speed': {'label': 'Velocidad', 'icon': 'Zap',
              'description': 'Destaca por tu rapidez de envío'},
    'catalog': {'label': 'Catálogo', 'icon': 'Grid3X3',
                'description': 'Expande tu oferta de productos'},
    'community': {'label': 'Comunidad', 'icon': 'Users',
                  'description': 'Forma parte de nuestra comunidad'},
    'growth': {'label': 'Crecimiento', 'icon': 'Sparkles',
               'description': 'Crece y evoluciona tu negocio'},
}


_BUYER_ROWS = [
    # Primeros pasos
    ('b-first-purchase', 'Primera Compra', 'Tu primera compra artesanal', 'ShoppingBag', 'bronze', 'getting_started', 'count', 'orders_count', 1, 1),
    ('b-first-review', 'Tu Voz Importa', 'Dejaste tu primera reseña', 'MessageSquare', 'bronze', 'getting_started', 'count', 'reviews_count', 1, 2),
    ('b-first-favorite', 'Coleccionista', 'Agregaste tu primer favorito', 'Heart', 'bronze', 'getting_started', 'count', 'favorites_count', 1, 3),
    # Explorador cultural
    ('b-states-3', 'Explorador de Estados', 'Compraste de 3 estados diferentes', 'MapPin', 'bronze', 'cultural_explorer', 'count', 'states_count', 3, 1),
    ('b-states-10', 'Viajero Cultural', 'Compraste de 10 estados diferentes', 'Compass', 'silver', 'cultural_explorer', 'count', 'states_count', 10, 2),
    ('b-states-20', 'Embajador de México', 'Compraste de 20+ estados', 'Flag', 'gold', 'cultural_explorer', 'count', 'states_count', 20, 3),
    ('b-all-states', 'Conocedor Nacional', 'Compraste de todos los estados', 'Crown', 'platinum', 'cultural_explorer', 'count', 'states_count', 32, 4),
    # Apoyo artesanal
    ('b-artisans-5', 'Mecenas Principiante', 'Apoyaste a 5 artesanos', 'Users', 'bronze', 'artisan_support', 'count', 'artisans_count', 5, 1),
    ('b-artisans-15', 'Mecenas Dedicado', 'Apoyaste a 15 artesanos', 'Users', 'silver', 'artisan_support', 'count', 'artisans_count', 15, 2),
    ('b-artisans-50', 'Mecenas Legendario', 'Apoyaste a 50 artesanos', 'Crown', 'gold', 'artisan_support', 'count', 'artisans_count', 50, 3),
    ('b-repeat-buyer', 'Cliente Fiel', 'Compraste 3+ veces al mismo artesano', 'Heart', 'silver', 'artisan_support', 'count', 'repeat_purchases', 3, 4),
    # Impacto ambiental
    ('b-eco-10kg', 'Guardián Verde', 'Ahorraste 10kg de CO₂', 'Leaf', 'bronze', 'environmental', 'threshold', 'co2_saved', 10, 1),
    ('b-eco-50kg', 'Eco Héroe', 'Ahorraste 50kg de CO₂', 'TreePine', 'silver', 'environmental', 'threshold', 'co2_saved', 50, 2),
    ('b-eco-100kg', 'Protector del Planeta', 'Ahorraste 100kg de CO₂', 'Globe', 'gold', 'environmental', 'threshold', 'co2_saved', 100, 3),
    # Compras
    ('b-orders-10', 'Comprador Activo', '10 compras realizadas', 'Package', 'bronze', 'shopping', 'count', 'orders_count', 10, 1),
    ('b-orders-25', 'Comprador Frecuente', '25 compras realizadas', 'Package', 'silver', 'shopping', 'count', 'orders_count', 25, 2),
    ('b-orders-50', 'Comprador Experto', '50 compras realizadas', 'Award', 'gold', 'shopping', 'count', 'orders_count', 50, 3),
    ('b-orders-100', 'Comprador Leyenda', '100 compras realizadas', 'Trophy', 'platinum', 'shopping', 'count', 'orders_count', 100, 4),
    # Categorías
    ('b-cat-3', 'Gustos Variados', 'Compraste de 3 categorías diferentes', 'Palette', 'bronze', 'categories', 'count', 'categories_count', 3, 1),
    ('b-cat-all', 'Coleccionista Total', 'Compraste de todas las categorías', 'Sparkles', 'gold', 'categories', 'count', 'categories_count', 10, 2),
    # Reseñas
    ('b-reviews-5', 'Opinador', 'Escribiste 5 reseñas', 'MessageSquare', 'bronze', 'reviews', 'count', 'reviews_count', 5, 1),
    ('b-reviews-15', 'Crítico Dedicado', 'Escribiste 15 reseñas', 'MessageSquarePlus', 'silver', 'reviews', 'count', 'reviews_count', 15, 2),
    ('b-reviews-50', 'Campeón de Reseñas', 'Escribiste 50 reseñas', 'Award', 'gold', 'reviews', 'count', 'reviews_count', 50, 3),
    ('b-photo-reviews-10', 'Fotógrafo de Compras', '10 reseñas con fotos', 'Camera', 'silver', 'reviews', 'count', 'reviews_with_photos', 10, 4),
    ('b-helpful-reviews', 'Reseñas Útiles', '20 reseñas marcadas como útiles', 'ThumbsUp', 'gold', 'reviews', 'count', 'helpful_reviews', 20, 5),
    # Social
    ('b-referral-1', 'Embajador', 'Referiste a tu primer amigo', 'UserPlus', 'bronze', 'social', 'count', 'referrals_count', 1, 1),
    ('b-referral-5', 'Super Embajador', 'Referiste a 5 amigos', 'Users', 'silver', 'social', 'count', 'referrals_count', 5, 2),
    ('b-referral-10', 'Influencer Artesanal', 'Referiste a 10 amigos', 'Megaphone', 'gold', 'social', 'count', 'referrals_count', 10, 3),
    ('b-gift-giver', 'Espíritu Generoso', 'Enviaste tu primer regalo', 'Gift', 'bronze', 'social', 'count', 'gifts_sent', 1, 4),
    ('b-gift-master', 'Maestro de Regalos', 'Enviaste 10 regalos', 'Gift', 'gold', 'social', 'count', 'gifts_sent', 10, 5),
    ('b-wishlist-shared', 'Lista de Deseos Completa', '10 productos en tu lista de deseos', 'ListHeart', 'bronze', 'social', 'count', 'wishlist_count', 10, 6),
    # Especiales
    ('b-dia-muertos', 'Tradición Viva', 'Compraste en Día de Muertos', 'Skull', 'silver', 'special', 'date', 'order_date', 'dia_muertos', 1),
    ('b-navidad', 'Navidad Artesanal', 'Compraste en época navideña', 'Gift', 'silver', 'special', 'date', 'order_date', 'navidad', 2),
    ('b-buen-fin', 'Cazador del Buen Fin', 'Compraste durante el Buen Fin', 'Tag', 'silver', 'special', 'date', 'order_date', 'buen_fin', 3),
    ('b-early-adopter', 'Early Adopter', 'Te uniste en el primer año', 'Zap', 'gold', 'special', 'date', 'join_date', 'first_year', 4),
    ('b-night-owl', 'Búho Nocturno', 'Compraste a las 3am', 'Moon', 'bronze', 'special', 'date', 'order_date', 'night_owl', 5),
    ('b-big-spender', 'Gran Mecenas', 'Una compra de más de $5,000 MXN', 'Gem', 'gold', 'special', 'threshold', 'total_spent', 5000, 6),
]

_SELLER_ROWS = [
    # Primeros pasos
    ('s-first-sale', 'Primera Venta', '¡Tu primera venta!', 'DollarSign', 'bronze', 'getting_started', 'count', 'sales_count', 1, 1),
    ('s-first-review', 'Primer Aplauso', 'Recibiste tu primera reseña', 'Star', 'bronze', 'getting_started', 'count', 'reviews_count', 1, 2),
    ('s-profile-complete', 'Perfil Completo', 'Completaste tu perfil al 100%', 'CheckCircle', 'bronze', 'getting_started', 'percentage', 'profile_completion', 100, 3),
    # Ventas
    ('s-sales-10', 'Vendedor Activo', '10 ventas realizadas', 'Package', 'bronze', 'sales', 'count', 'sales_count', 10, 1),
    ('s-sales-50', 'Vendedor Experimentado', '50 ventas realizadas', 'Package', 'silver', 'sales', 'count', 'sales_count', 50, 2),
    ('s-sales-100', 'Vendedor Estrella', '100 ventas realizadas', 'Star', 'gold', 'sales', 'count', 'sales_count', 100, 3),
    ('s-sales-500', 'Vendedor Leyenda', '500 ventas realizadas', 'Trophy', 'platinum', 'sales', 'count', 'sales_count', 500, 4),
    ('s-sales-1000', 'Mil Ventas', '¡1,000 ventas realizadas!', 'Crown', 'platinum', 'sales', 'count', 'sales_count', 1000, 5),
    # Ingresos
    ('s-revenue-5k', 'Umbral de $5,000', 'Alcanzaste $5,000 en ventas', 'TrendingUp', 'bronze', 'revenue', 'threshold', 'revenue_total', 5000, 1),
    ('s-revenue-25k', 'Club de $25,000', 'Alcanzaste $25,000 en ventas', 'TrendingUp', 'silver', 'revenue', 'threshold', 'revenue_total', 25000, 2),
    ('s-revenue-100k', 'Élite de $100,000', 'Alcanzaste $100,000 en ventas', 'Gem', 'gold', 'revenue', 'threshold', 'revenue_total', 100000, 3),
    ('s-revenue-500k', 'Millonario Artesanal', 'Alcanzaste $500,000 en ventas', 'Crown', 'platinum', 'revenue', 'threshold', 'revenue_total', 500000, 4),
    # Calidad
    ('s-rating-4.5', 'Alta Calidad', 'Mantén 4.5+ estrellas', 'Star', 'silver', 'quality', 'threshold', 'rating_average', 4.5, 1),
    ('s-rating-perfect', 'Perfección', '5.0 estrellas con 10+ reseñas', 'Sparkles', 'gold', 'quality', 'threshold', 'rating_average', 5.0, 2),
    ('s-reviews-25', '25 Aplausos', 'Recibiste 25 reseñas', 'ThumbsUp', 'silver', 'quality', 'count', 'reviews_count', 25, 3),
    ('s-reviews-100', '100 Aplausos', 'Recibiste 100 reseñas', 'Award', 'gold', 'quality', 'count', 'reviews_count', 100, 4),
    # Servicio
    ('s-response-90', 'Respuesta Rápida', '90%+ tasa de respuesta', 'Clock', 'bronze', 'service', 'percentage', 'response_rate', 90, 1),
    ('s-response-100', 'Siempre Presente', '100% tasa de respuesta', 'Zap', 'silver', 'service', 'percentage', 'response_rate', 100, 2),
    ('s-repeat-customers', 'Clientes Fieles', '10+ clientes recurrentes', 'Heart', 'gold', 'service', 'count', 'repeat_customers', 10, 3),
    # Velocidad
    ('s-fast-responder', 'Respuesta Relámpago', 'Responde en menos de 1 hora (promedio)', 'MessageCircle', 'silver', 'speed', 'threshold', 'response_time_hours', 1, 1),
    ('s-same-day-ship-10', 'Envío Express', '10 pedidos enviados el mismo día', 'Truck', 'bronze', 'speed', 'count', 'orders_same_day_shipped', 10, 2),
    ('s-same-day-ship-50', 'Maestro del Envío Rápido', '50 pedidos enviados el mismo día', 'Rocket', 'silver', 'speed', 'count', 'orders_same_day_shipped', 50, 3),
    ('s-speed-demon', 'Velocista Artesanal', 'Promedio de envío menor a 24 horas', 'Zap', 'gold', 'speed', 'threshold', 'shipping_time_hours', 24, 4),
    ('s-zero-returns', 'Perfección Total', '0% devoluciones con 50+ ventas', 'ShieldCheck', 'gold', 'speed', 'percentage', 'return_rate', 0, 5),
    # Catálogo
    ('s-products-10', 'Catálogo Inicial', '10 productos publicados', 'Grid3X3', 'bronze', 'catalog', 'count', 'products_count', 10, 1),
    ('s-products-50', 'Catálogo Extenso', '50 productos publicados', 'Grid3X3', 'silver', 'catalog', 'count', 'products_count', 50, 2),
    ('s-bestseller', 'Bestseller', 'Un producto con 25+ ventas', 'Flame', 'gold', 'catalog', 'count', 'bestseller_count', 1, 3),
    ('s-video-1', 'Primer Video', 'Agregaste un video a tu producto', 'Video', 'bronze', 'catalog', 'count', 'products_with_video', 1, 4),
    ('s-video-5', 'Creador de Contenido', '5 productos con video', 'Film', 'silver', 'catalog', 'count', 'products_with_video', 5, 5),
    ('s-video-20', 'Maestro Audiovisual', '20 productos con video', 'Clapperboard', 'gold', 'catalog', 'count', 'products_with_video', 20, 6),
    # Comunidad
    ('s-verified', 'Artesano Verificado', 'Obtuviste verificación', 'ShieldCheck', 'silver', 'community', 'status', 'verification_status', 'verified', 1),
    ('s-master', 'Maestro Artesano', 'Nivel Maestro Artesano', 'Crown', 'gold', 'community', 'status', 'verification_status', 'master', 2),
    ('s-story', 'Cuenta Tu Historia', 'Publicaste tu historia de artesano', 'BookOpen', 'bronze', 'community', 'status', 'story_published', True, 3),
    # Crecimiento
    ('s-month-growth', 'Mes en Crecimiento', 'Ventas +20% vs mes anterior', 'ArrowUp', 'silver', 'growth', 'percentage', 'month_growth', 20, 1),
    ('s-year-active', 'Un Año Activo', 'Un año vendiendo activamente', 'Calendar', 'gold', 'growth', 'threshold', 'days_active', 365, 2),
    ('s-consecutive-30', 'Racha de 30 Días', 'Ventas en 30 días consecutivos', 'Flame', 'gold', 'growth', 'streak', 'consecutive_sales_days', 30, 3),
]

_HIDDEN_HINTS: Dict[str, str] = {
    'b-helpful-reviews': 'Escribe reseñas detalladas y útiles',
    'b-gift-master': 'Comparte el amor artesanal con regalos',
    'b-night-owl': 'Los artesanos no duermen...',
    'b-big-spender': 'Apoya en grande',
    's-zero-returns': 'La calidad habla por sí misma',
    's-video-20': 'Muestra tu arte en movimiento',
}

_REWARDS: Dict[str, AchievementReward] = {
    'b-reviews-50': AchievementReward('badge', 'review_champion', 'Distintivo de Campeón de Reseñas en tu perfil'),
    'b-referral-5': AchievementReward('credit', 100, '$100 MXN de crédito en tu próxima compra'),
    'b-referral-10': AchievementReward('discount', 15, '15% de descuento en tu próxima compra', expires_in_days=30),
    'b-buen-fin': AchievementReward('discount', 10, '10% de descuento adicional', expires_in_days=7),
    's-sales-1000': AchievementReward('badge', 'elite_seller', 'Distintivo de Vendedor Élite en tu tienda'),
    's-speed-demon': AchievementReward('feature', 'speed_badge', 'Distintivo de "Envío Rápido" en tus productos'),
    's-video-5': AchievementReward('feature', 'video_boost', 'Tus productos con video aparecen primero en búsquedas'),
}

# Requisitos extra que deben cumplirse además del objetivo
_CONDITIONS: Dict[str, Dict[str, Any]] = {
    's-zero-returns': {'min_sales': 50},
}

# Métricas donde un valor menor es mejor (ej. horas de respuesta)
LOWER_IS_BETTER = frozenset(['response_time_hours', 'shipping_time_hours', 'return_rate'])


def _build(rows, user_type: UserType) -> List[AchievementDefinition]:
    definitions = []
    for (ach_id, name, description, icon, tier, category,
         criteria_type, metric, target, order) in rows:
        definitions.append(AchievementDefinition(
            id=ach_id,
            name=name,
            description=description,
            icon=icon,
            tier=AchievementTier(tier),
            category=category,
            criteria=AchievementCriteria(
                type=criteria_type,
                metric=metric,
                target_value=target,
                period='monthly' if metric == 'month_growth' else None,
                conditions=_CONDITIONS.get(ach_id),
            ),
            user_type=user_type,
            order=order,
            hidden=ach_id in _HIDDEN_HINTS,
            hint=_HIDDEN_HINTS.get(ach_id),
            reward=_REWARDS.get(ach_id),
        ))
    return definitions


BUYER_ACHIEVEMENTS: List[AchievementDefinition] = _build(_BUYER_ROWS, UserType.BUYER)
SELLER_ACHIEVEMENTS: List[AchievementDefinition] = _build(_SELLER_ROWS, UserType.SELLER)


# ==============================================================================
# FUNCIONES DE CONSULTA
# ==============================================================================

def get_achievements_by_user_type(user_type: str) -> List[AchievementDefinition]:
    """Definiciones del tipo de usuario ('buyer' o 'seller')."""
    return SELLER_ACHIEVEMENTS if user_type == UserType.SELLER.value else BUYER_ACHIEVEMENTS


def get_categories(user_type: str) -> Dict[str, Dict[str, str]]:
    return SELLER_CATEGORIES if user_type == UserType.SELLER.value else BUYER_CATEGORIES


def get_achievement_by_id(achievement_id: str) -> Optional[AchievementDefinition]:
    """Busca una definición en ambos catálogos."""
    for definition in BUYER_ACHIEVEMENTS + SELLER_ACHIEVEMENTS:
        if definition.id == achievement_id:
            return definition
    return None
