# ==============================================================================
# ALMACÉN CLAVE/VALOR - Serialización JSON tolerante a fallos
# ==============================================================================
# Política de errores:
#   - Entrada corrupta al leer  → se elimina y se retorna el default
#   - Escritura rechazada       → se registra en el log y se retorna la falla
#   - update()                  → lectura-transformación-escritura bajo lock
# ==============================================================================

import copy
import json
import logging
import threading
from typing import Any, Callable, Optional

from azizi_pos.exceptions import StorageError
from azizi_pos.repositories.interfaces import IStorageBackend

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Envoltura JSON sobre un IStorageBackend.

    Nunca lanza excepciones por datos corruptos ni por escrituras rechazadas:
    degrada a valores por defecto.
    set() retorna la falla (o None) para que el llamador decida.

    Uso:
        store = KeyValueStore(MemoryStorage())
        store.set('az_pos_products', [])
        store.update('az_pos_products', lambda cur: cur + [p], [])
    """

    def __init__(self, backend: IStorageBackend):
        """
        Args:
            backend: Medio de persistencia inyectado
        """
        self.backend = backend
        # Un escritor a la vez para lecturas-modificaciones-escrituras
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Lee y deserializa una entrada.

        Args:
            key: Clave a leer
            default: Valor si no existe o está corrupta (se retorna una copia)

        Returns:
            Valor deserializado (copia nueva en cada llamada)
        """
        try:
            raw = self.backend.get_item(key)
        except UnicodeDecodeError as e:
            logger.warning("Entrada corrupta en %s, se elimina: %s", key, e)
            self._discard(key)
            return copy.deepcopy(default)
        except (OSError, ValueError) as e:
            logger.warning("storage.get failed for %s: %s", key, e)
            return copy.deepcopy(default)

        if raw is None:
            return copy.deepcopy(default)

        try:
            return json.loads(raw)
        except (ValueError, TypeError) as e:
            logger.warning("Entrada corrupta en %s, se elimina: %s", key, e)
            self._discard(key)
            return copy.deepcopy(default)

    def set(self, key: str, value: Any) -> Optional[Exception]:
        """
        Serializa y escribe una entrada.
        Si el medio la rechaza, solo se registra una advertencia.

        Returns:
            None si se escribió, o la excepción que impidió la escritura
        """
        try:
            raw = json.dumps(value, ensure_ascii=False)
            self.backend.set_item(key, raw)
        except (StorageError, OSError, TypeError, ValueError) as e:
            logger.warning("storage.set failed for %s: %s", key, e)
            return e
        return None

    def update(self, key: str, updater: Callable[[Any], Any], default: Any = None) -> Any:
        """
        Aplica una transformación al valor actual y la persiste.

        Si `updater` lanza una excepción, no se escribe nada y la excepción
        se propaga al llamador.

        Returns:
            El nuevo valor calculado por `updater`
        """
        with self._lock:
            current = self.get(key, default)
            next_value = updater(current)
            self.set(key, next_value)
            return next_value

    def remove(self, key: str) -> None:
        """Elimina una entrada."""
        with self._lock:
            self._discard(key)

    def _discard(self, key: str) -> None:
        try:
            self.backend.remove_item(key)
        except (OSError, ValueError) as e:
            logger.debug("No se pudo eliminar %s: %s", key, e)
