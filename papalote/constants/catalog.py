# ==============================================================================
# CONSTANTES DE CATÁLOGO - Categorías y estados de la República
# ==============================================================================

from typing import Dict, List

CATEGORIES: Dict[str, str] = {
    'TEXTILES': 'Textiles y Ropa',
    'CERAMICA': 'Cerámica y Alfarería',
    'JOYERIA': 'Joyería',
    'MADERA': 'Madera y Tallado',
    'CUERO': 'Cuero y Piel',
    'PAPEL': 'Papel y Cartón',
    'METAL': 'Metalistería',
    'VIDRIO': 'Vidrio y Cristal',
}

SUBCATEGORIES: Dict[str, List[str]] = {
    CATEGORIES['TEXTILES']: [
        'Sarapes y Rebozos',
        'Huipiles y Vestimenta',
        'Bordados',
        'Tapetes y Alfombras',
        'Bolsas Tejidas',
    ],
    CATEGORIES['CERAMICA']: [
        'Talavera',
        'Barro Negro',
        'Cerámica de Alta Temperatura',
        'Vajillas',
        'Figuras Decorativas',
    ],
    CATEGORIES['JOYERIA']: [
        'Plata', 'Filigrana', 'Piedras Naturales', 'Collares',
        'Aretes', 'Pulseras', 'Anillos',
    ],
    CATEGORIES['MADERA']: [
        'Alebrijes', 'Máscaras', 'Muebles', 'Utensilios de Cocina',
        'Juguetes', 'Cajas',
    ],
    CATEGORIES['CUERO']: ['Bolsas', 'Cinturones', 'Carteras', 'Huaraches', 'Mochilas'],
    CATEGORIES['PAPEL']: ['Papel Amate', 'Papel Picado', 'Cuadernos Artesanales', 'Piñatas'],
    CATEGORIES['METAL']: ['Herrería', 'Hojalata', 'Cobre Martillado', 'Esculturas', 'Lámparas'],
    CATEGORIES['VIDRIO']: ['Vidrio Soplado', 'Vitrales', 'Vajillas', 'Decoración'],
}

MEXICAN_STATES: List[str] = [
    'Aguascalientes',
    'Baja California',
    'Baja California Sur',
    'Campeche',
    'Chiapas',
    'Chihuahua',
    'Ciudad de México',
    'Coahuila',
    'Colima',
    'Durango',
    'Estado de México',
    'Guanajuato',
    'Guerrero',
    'Hidalgo',
    'Jalisco',
    'Michoacán',
    'Morelos',
    'Nayarit',
    'Nuevo León',
    'Oaxaca',
    'Puebla',
    'Querétaro',
    'Quintana Roo',
    'San Luis Potosí',
    'Sinaloa',
    'Sonora',
    'Tabasco',
    'Tamaulipas',
    'Tlaxcala',
    'Veracruz',
    'Yucatán',
    'Zacatecas',
]

# Estados con costo y tiempo de envío extendido
REMOTE_STATES = frozenset([
    'Baja California',
    'Baja California Sur',
    'Chiapas',
    'Quintana Roo',
    'Yucatán',
    'Sonora',
    'Chihuahua',
])


def get_subcategories(category: str) -> List[str]:
    """Subcategorías de una categoría (lista vacía si no existe)."""
    return list(SUBCATEGORIES.get(category, []))


def get_category_names() -> List[str]:
    """Nombres de todas las categorías principales."""
    return list(CATEGORIES.values())
