# ==============================================================================
# REPOSITORIO BASE - Persistencia en archivos JSON
# ==============================================================================
# Cada repositorio es dueño de un archivo <clave>.json dentro de la carpeta de
# datos. La clave sigue el esquema de nombres con prefijo del marketplace
# (papalote-orders, papalote_platform_settings, ...).
# ==============================================================================

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from papalote.errors import StorageError

logger = logging.getLogger(__name__)


class BaseRepository(ABC):
    """
    Clase base abstracta para todos los repositorios.

    Lectura tolerante: un archivo ausente o corrupto se lee como datos vacíos.
    Escritura atómica: se escribe a <archivo>.tmp y luego os.replace.
    Un RLock de clase serializa las escrituras de todo el proceso.
    """

    _file_lock = threading.RLock()

    def __init__(self, base_path: str, storage_key: str):
        """
        Args:
            base_path: Carpeta de datos
            storage_key: Nombre lógico del almacenamiento (sin extensión)
        """
        self.storage_key = storage_key
        self.file_path = os.path.join(base_path, f"{storage_key}.json")

    @abstractmethod
    def _empty_data(self) -> Any:
        """Estructura vacía (dict o list) según el repositorio."""
        pass

    def exists(self) -> bool:
        """True si el archivo de datos ya fue creado."""
        return os.path.exists(self.file_path)

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Returns:
            Datos parseados, o la estructura vacía si el archivo no existe
            o no es JSON válido
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except FileNotFoundError:
                return self._empty_data()
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("[%s] archivo corrupto, se usan datos vacíos: %s", self.storage_key, e)
                return self._empty_data()
        if not isinstance(data, type(self._empty_data())):
            logger.warning("[%s] formato inesperado (%s)", self.storage_key, type(data).__name__)
            return self._empty_data()
        return data

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON de forma atómica.

        Raises:
            StorageError: Si no se pudo escribir
        """
        with self._file_lock:
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except (OSError, TypeError, ValueError) as e:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise StorageError(f"No se pudo escribir {self.storage_key}: {e}", self.file_path) from e

    def clear(self) -> bool:
        """
        Elimina el archivo de datos.

        Returns:
            True si existía
        """
        with self._file_lock:
            if not os.path.exists(self.file_path):
                return False
            try:
                os.remove(self.file_path)
            except OSError as e:
                raise StorageError(f"No se pudo eliminar {self.storage_key}: {e}", self.file_path) from e
            return True

    def reload(self) -> None:
        """Sin caché en memoria: cada lectura va al archivo."""
        pass


class DictRepository(BaseRepository):
    """
    Repositorio cuyo archivo es un diccionario {id: registro}.
    """

    def _empty_data(self) -> Dict:
        return {}

    def get_all(self) -> Dict[str, Any]:
        return self._read_raw()

    def get_by_id(self, record_id: Any) -> Optional[Any]:
        """
        Obtiene un registro por su clave.

        Returns:
            Registro o None si no existe
        """
        return self._read_raw().get(str(record_id))

    def save_all(self, data: Dict[str, Any]) -> None:
        self._write_raw(data)

    def update(self, record_id: Any, record_data: Any) -> None:
        """Inserta o reemplaza un registro."""
        with self._file_lock:
            data = self._read_raw()
            data[str(record_id)] = record_data
            self._write_raw(data)

    def delete(self, record_id: Any) -> Optional[Any]:
        """
        Elimina un registro.

        Returns:
            Registro eliminado o None si no existía
        """
        with self._file_lock:
            data = self._read_raw()
            removed = data.pop(str(record_id), None)
            if removed is not None:
                self._write_raw(data)
            return removed


class ListRepository(BaseRepository):
    """
    Repositorio cuyo archivo es una lista de registros con campo 'id'.
    """

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        return self._read_raw()

    def save_all(self, data: List[Dict[str, Any]]) -> None:
        self._write_raw(data)

    def prepend(self, record: Dict[str, Any]) -> None:
        """Agrega un registro al inicio (más reciente primero)."""
        with self._file_lock:
            data = self.get_all()
            data.insert(0, record)
            self._write_raw(data)

    def append(self, record: Dict[str, Any]) -> None:
        """Agrega un registro al final."""
        with self._file_lock:
            data = self.get_all()
            data.append(record)
            self._write_raw(data)

    def find_by(self, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """Primer registro cuyo campo coincide, o None."""
        for record in self.get_all():
            if record.get(field) == value:
                return record
        return None

    def find_all_by(self, field: str, value: Any) -> List[Dict[str, Any]]:
        return [r for r in self.get_all() if r.get(field) == value]

    def upsert(self, record: Dict[str, Any], key: str = 'id', at_front: bool = True) -> bool:
        """
        Reemplaza el registro con la misma clave o lo inserta.

        Args:
            record: Registro completo
            key: Campo que identifica al registro
            at_front: Insertar registros nuevos al inicio

        Returns:
            True si era un registro nuevo
        """
        with self._file_lock:
            data = self.get_all()
            for index, existing in enumerate(data):
                if existing.get(key) == record.get(key):
                    data[index] = record
                    self._write_raw(data)
                    return False
            if at_front:
                data.insert(0, record)
            else:
                data.append(record)
            self._write_raw(data)
            return True

    def remove_where(self, field: str, value: Any) -> int:
        """
        Elimina todos los registros cuyo campo coincide.

        Returns:
            Cantidad de registros eliminados
        """
        with self._file_lock:
            data = self.get_all()
            kept = [r for r in data if r.get(field) != value]
            removed = len(data) - len(kept)
            if removed:
                self._write_raw(kept)
            return removed

    def update_where(self, field: str, value: Any, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Actualiza el primer registro cuyo campo coincide.

        Returns:
            Registro actualizado o None si no hubo coincidencia
        """
        with self._file_lock:
            data = self.get_all()
            for record in data:
                if record.get(field) == value:
                    record.update(updates)
                    self._write_raw(data)
                    return record
            return None
