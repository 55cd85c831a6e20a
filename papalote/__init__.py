# ==============================================================================
# PAPALOTE MARKET - API del marketplace de artesanías mexicanas
# ==============================================================================
# Paquete principal. La aplicación Flask vive en papalote.main:
#   from papalote.main import app
# ==============================================================================

__version__ = '0.1.0'
