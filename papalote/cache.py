# ==============================================================================
# ENCABEZADOS DE CACHÉ HTTP
# ==============================================================================
# Cache-Control para las respuestas de la API según qué tan seguido cambian
# los datos: listados públicos, datos de referencia o datos del usuario.
# ==============================================================================

from typing import Dict, Optional

# Duraciones en segundos
CACHE_DURATIONS: Dict[str, int] = {
    'NONE': 0,
    'SHORT': 60,          # 1 minuto
    'MEDIUM': 300,        # 5 minutos
    'LONG': 3600,         # 1 hora
    'EXTENDED': 86400,    # 24 horas
}


def create_cache_headers(
    duration: int,
    private: bool = False,
    stale_while_revalidate: Optional[int] = None,
) -> Dict[str, str]:
    """
    Construye los encabezados de caché para una respuesta.

    Args:
        duration: Segundos de vigencia (0 = sin caché)
        private: Solo el navegador puede guardar la respuesta (sin s-maxage)
        stale_while_revalidate: Segundos que se puede servir contenido viejo
            mientras se revalida

    Returns:
        Dict con Cache-Control (y Pragma cuando no hay caché)
    """
    if duration == 0:
        return {
            'Cache-Control': 'no-store, no-cache, must-revalidate',
            'Pragma': 'no-cache',
        }

    directives = ['private' if private else 'public', f'max-age={duration}']
    if not private:
        directives.append(f's-maxage={duration}')
    if stale_while_revalidate:
        directives.append(f'stale-while-revalidate={stale_while_revalidate}')
    return {'Cache-Control': ', '.join(directives)}


# Combinaciones usadas por las rutas
CACHE_HEADERS: Dict[str, Dict[str, str]] = {
    'PUBLIC_LISTINGS': create_cache_headers(
        CACHE_DURATIONS['SHORT'], stale_while_revalidate=CACHE_DURATIONS['MEDIUM']
    ),
    'REFERENCE_DATA': create_cache_headers(
        CACHE_DURATIONS['LONG'], stale_while_revalidate=CACHE_DURATIONS['EXTENDED']
    ),
    'USER_DATA': create_cache_headers(CACHE_DURATIONS['NONE']),
}
