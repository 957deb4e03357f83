# ==============================================================================
# UTILIDADES - Tiempo local e identificadores
# ==============================================================================
# Todas las marcas de tiempo se guardan en hora LOCAL, sin zona horaria:
#   YYYY-MM-DD HH:MM:SS
# ==============================================================================

import uuid
from datetime import datetime
from typing import Callable, Iterable, Optional

# Fuente de tiempo por defecto (inyectable en servicios para testing)
Clock = Callable[[], datetime]

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def pad(value: int, length: int) -> str:
    """Rellena con ceros a la izquierda hasta `length` dígitos."""
    return str(value).zfill(length)


def ts(now: Optional[datetime] = None) -> str:
    """Timestamp local legible: YYYY-MM-DD HH:MM:SS"""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def uid(taken: Iterable[str] = ()) -> str:
    """
    Genera un identificador opaco único.
    
    Args:
        taken: IDs ya usados (se evita colisión con ellos)
        
    Returns:
        Cadena hexadecimal de 32 caracteres
    """
    taken = set(taken)
    new_id = uuid.uuid4().hex
    while new_id in taken:
        new_id = uuid.uuid4().hex
    return new_id
