# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# Este archivo es el punto de entrada para servidores WSGI como Gunicorn.
#
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# ESTRUCTURA DEL PROYECTO:
#   repo_root/           <- Directorio de trabajo (en sys.path automáticamente)
#   ├── wsgi.py          <- Este archivo
#   ├── pyproject.toml
#   └── papalote/        <- Paquete Python
#       ├── __init__.py
#       ├── main.py
#       ├── services/
#       └── repositories/
#
# Variables de entorno: ver papalote/config.py (PAPALOTE_SECRET_KEY,
# PAPALOTE_DATA_DIR, PAPALOTE_PRODUCTION, ...)
# ==============================================================================

from papalote.main import app

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
