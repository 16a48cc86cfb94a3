# database/connection.py
import logging
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from config import settings
from core.errors import ConfigurationError

logger = logging.getLogger("database.connection")

# ============================================================
# 🔧 CONSTRUCTOR DE URI
# ============================================================
def build_mongo_uri(username: str, password: str, host: str) -> str:
    if not username:
        raise ConfigurationError("MONGO_USERNAME no está configurado")
    if not password:
        raise ConfigurationError("MONGO_PASSWORD no está configurado")
    return f"mongodb://{quote_plus(username)}:{quote_plus(password)}@{host}"

# ============================================================
# 🎵 CONEXIÓN A BASE DE DATOS DE MÚSICA
# ============================================================
def get_music_db() -> Database:
    """Conecta, verifica con ping y devuelve el handle de la base de tracks."""
    mongo_uri = build_mongo_uri(settings.MONGO_USERNAME, settings.MONGO_PASSWORD, settings.MONGO_HOST)
    logger.info(f"🔌 Estableciendo conexión con MongoDB en {settings.MONGO_HOST} ...")
    try:
        client = MongoClient(mongo_uri, server_api=ServerApi("1"))
        client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"❌ Error conectando a MongoDB ({settings.MONGO_DB}): {e}")
        raise
    logger.info(f"✅ Conectado a base de música: {settings.MONGO_DB}")
    return client[settings.MONGO_DB]
