# ==============================================================================
# BACKENDS DE ALMACENAMIENTO - Medio clave/valor de cadenas crudas
# ==============================================================================
# MemoryStorage   → diccionario en memoria (tests, demo)
# JsonFileStorage → un archivo <clave>.json por entrada en DATA_DIR
#
# Ambos pueden aplicar una cuota de bytes (como el límite de localStorage):
# si la escritura la excede se lanza StorageQuotaError y nada cambia.
# ==============================================================================

import os
import re
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from azizi_pos.exceptions import StorageQuotaError

# Claves válidas como nombre de archivo
_KEY_RE = re.compile(r'^[A-Za-z0-9_.\-]+$')


def _entry_size(key: str, raw: str) -> int:
    return len(key.encode('utf-8')) + len(raw.encode('utf-8'))


class BaseStorage(ABC):
    """
    Clase base para los backends.
    Implementa la verificación de cuota; las subclases solo leen/escriben.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        pass

    @abstractmethod
    def _write(self, key: str, raw: str) -> None:
        pass

    def set_item(self, key: str, raw: str) -> None:
        """
        Escribe un valor crudo respetando la cuota.

        Raises:
            StorageQuotaError: si el total resultante supera quota_bytes
        """
        if self.quota_bytes is not None:
            required = self.used_bytes(exclude=key) + _entry_size(key, raw)
            if required > self.quota_bytes:
                raise StorageQuotaError(key, required, self.quota_bytes)
        self._write(key, raw)

    def used_bytes(self, exclude: Optional[str] = None) -> int:
        """Bytes ocupados por todas las entradas (opcionalmente sin una)."""
        total = 0
        for key in self.keys():
            if key == exclude:
                continue
            raw = self.get_item(key)
            if raw is not None:
                total += _entry_size(key, raw)
        return total

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)


class MemoryStorage(BaseStorage):
    """Almacenamiento volátil en un diccionario."""

    def __init__(self, quota_bytes: Optional[int] = None):
        super().__init__(quota_bytes)
        self._data: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class JsonFileStorage(BaseStorage):
    """
    Almacenamiento persistente: un archivo JSON por clave.

    Estructura en disco:
        data/
        ├── az_pos_products.json
        ├── az_pos_settings.json
        └── ...

    El contenido de cada archivo es el JSON serializado tal cual lo entrega
    KeyValueStore; este backend no interpreta los datos.
    """

    SUFFIX = '.json'

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, data_dir: str, quota_bytes: Optional[int] = None):
        """
        Inicializa el backend.

        Args:
            data_dir: Carpeta de datos (se crea si no existe)
            quota_bytes: Capacidad máxima o None para ilimitado
        """
        super().__init__(quota_bytes)
        self.data_dir = data_dir
        os.makedirs(self.data_dir, exist_ok=True)

    def _path(self, key: str) -> str:
        if not _KEY_RE.match(key or ''):
            raise ValueError(f"Clave de almacenamiento inválida: {key!r}")
        return os.path.join(self.data_dir, key + self.SUFFIX)

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        with self._file_lock:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    return f.read()
            except FileNotFoundError:
                return None

    def _write(self, key: str, raw: str) -> None:
        path = self._path(key)
        with self._file_lock:
            # Escribir a archivo temporal primero para atomicidad
            temp_path = path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    f.write(raw)
                os.replace(temp_path, path)
            except Exception:
                # Limpiar archivo temporal si algo falla
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise

    def set_item(self, key: str, raw: str) -> None:
        with self._file_lock:
            super().set_item(key, raw)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        with self._file_lock:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass

    def keys(self) -> List[str]:
        if not os.path.isdir(self.data_dir):
            return []
        return sorted(
            name[:-len(self.SUFFIX)]
            for name in os.listdir(self.data_dir)
            if name.endswith(self.SUFFIX)
        )
