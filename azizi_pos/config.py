# ==============================================================================
# CONFIGURACIÓN - Variables de entorno
# ==============================================================================
# Todos los valores se pueden sobrescribir con variables de entorno:
#   export AZIZI_POS_DATA_DIR="/var/lib/azizi_pos"
#   export AZIZI_POS_STORAGE="memory"
# ==============================================================================

import logging
import os

BASE = os.path.dirname(os.path.abspath(__file__))

# Carpeta donde JsonFileStorage guarda un archivo por clave
DATA_DIR = os.environ.get('AZIZI_POS_DATA_DIR', os.path.join(BASE, 'data'))

# 'file' = JSON en disco, 'memory' = solo en memoria (demo / tests)
STORAGE_BACKEND = os.environ.get('AZIZI_POS_STORAGE', 'file').strip().lower()

# Capacidad máxima del almacenamiento (similar al límite de localStorage).
# 0 = sin límite
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024  # 5 MB


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"[ADVERTENCIA] {name}={raw!r} no es un entero, usando {default}")
        return default


QUOTA_BYTES = _read_int('AZIZI_POS_QUOTA_BYTES', DEFAULT_QUOTA_BYTES)

# Espacio de nombres de las claves persistidas (az_pos_products, ...)
KEY_PREFIX = os.environ.get('AZIZI_POS_KEY_PREFIX', 'az_pos_')

LOG_LEVEL = os.environ.get('AZIZI_POS_LOG_LEVEL', 'INFO').upper()

# Servidor Flask
HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
PORT = _read_int('FLASK_PORT', 5000)
DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'


def quota_or_none(quota_bytes: int):
    """Convierte 0/negativo en None (sin límite)."""
    return quota_bytes if quota_bytes and quota_bytes > 0 else None


def configure_logging(level: str = None) -> None:
    """Configura el logger raíz del paquete con salida a consola."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
