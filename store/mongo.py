# store/mongo.py
import logging
from datetime import date, datetime, time
from typing import Any, Generic, List, Type, TypeVar

from bson.errors import InvalidDocument
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError
from pymongo.database import Database
from pymongo.errors import PyMongoError

from core.errors import StorageError
from store.query import Filter, Update

logger = logging.getLogger("store.mongo")

T = TypeVar("T", bound=BaseModel)

# bson rechaza enteros de más de 8 bytes con OverflowError, fuera de PyMongoError
DRIVER_ERRORS = (PyMongoError, InvalidDocument, OverflowError)


# ============================================================
# 🔧 Conversión a tipos BSON
# ============================================================
def encode_value(value: Any) -> Any:
    """BSON no admite ``date``: se guarda como datetime a medianoche."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, dict):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    return value


# ============================================================
# 🗂️ Repositorio genérico sobre una colección
# ============================================================
class MongoStore(Generic[T]):
    """Ejecuta filtros/actualizaciones compilados sobre una colección tipada."""

    def __init__(self, model: Type[T], database: Database, collection: str):
        self.model = model
        self.collection = database[collection]

    def _to_document(self, item: T) -> dict:
        doc = item.model_dump(by_alias=True)
        doc["_id"] = doc.pop("id")
        return encode_value(doc)

    def _from_document(self, doc: dict) -> T:
        doc = dict(doc)
        doc["id"] = doc.pop("_id", None)
        return self.model.model_validate(doc)

    # ------------------------------------------------------------
    # 🔹 Crear
    # ------------------------------------------------------------
    def create(self, item: T) -> None:
        try:
            self.collection.insert_one(self._to_document(item))
        except DRIVER_ERRORS as e:
            raise StorageError(f"insert into {self.collection.name} failed: {e}") from e

    # ------------------------------------------------------------
    # 🔹 Buscar
    # ------------------------------------------------------------
    def find(self, filter: Filter) -> List[T]:
        query = encode_value(filter.compile())
        try:
            cursor = self.collection.find(query)
            if filter.limit > 0:
                cursor = cursor.limit(filter.limit)
            docs = list(cursor)
        except DRIVER_ERRORS as e:
            raise StorageError(f"find on {self.collection.name} failed: {e}") from e

        try:
            return [self._from_document(doc) for doc in docs]
        except ModelValidationError as e:
            raise StorageError(f"cannot decode {self.model.__name__}: {e}") from e

    # ------------------------------------------------------------
    # 🔹 Actualizar (solo el primer documento que coincide)
    # ------------------------------------------------------------
    def update(self, filter: Filter, update: Update) -> int:
        update_doc = update.compile()
        if not update_doc:
            logger.debug(f"update vacío sobre {self.collection.name}, no se ejecuta")
            return 0
        try:
            result = self.collection.update_one(encode_value(filter.compile()), encode_value(update_doc))
        except DRIVER_ERRORS as e:
            raise StorageError(f"update on {self.collection.name} failed: {e}") from e
        return result.modified_count

    # ------------------------------------------------------------
    # 🔹 Eliminar por clave primaria
    # ------------------------------------------------------------
    def delete(self, id: str) -> int:
        try:
            result = self.collection.delete_one({"_id": id})
        except DRIVER_ERRORS as e:
            raise StorageError(f"delete on {self.collection.name} failed: {e}") from e
        return result.deleted_count
