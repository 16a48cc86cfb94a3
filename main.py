from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config import settings
from core.context import RequestContext
from core.errors import ConfigurationError
from core.injector import Injector
from database.connection import get_music_db
from models.api import APIRequest, APIResponse
from routes.router import Router
from routes.track_routes import register_track_routes
import logging

logger = logging.getLogger("main")

# =====================================================
# * Configuración de Logging global
# =====================================================
def setup_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    )

# =====================================================
# * Ruta raíz
# =====================================================
def root(request: APIRequest, context: RequestContext) -> APIResponse:
    return APIResponse(status_code=200, body={
        "message": f"🚀 {settings.PROJECT_NAME} Backend activo",
        "version": settings.VERSION,
        "env": settings.ENV,
    })

# =====================================================
# * Inicialización de la aplicación
# =====================================================
def create_router(injector: Injector) -> Router:
    app = FastAPI(
        title=f"{settings.PROJECT_NAME} Backend",
        version=settings.VERSION,
        debug=settings.DEBUG
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    router = Router(app)
    router.handle("GET", "/", root)
    register_track_routes(router, injector)

    logger.info("📜 Rutas registradas: / , /tracks , /tracks/:id")
    return router

def parse_port(value: str) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"puerto de ejecución inválido: {value}")
    if port < 0 or port > 65535:
        raise ConfigurationError(f"puerto de ejecución inválido: {value}")
    return port

# =====================================================
# * Arranque
# =====================================================
def main():
    setup_logging()
    logger.info("🚀 Iniciando instancia del servicio ...")

    port = parse_port(settings.PORT)
    injector = Injector(database=get_music_db())

    router = create_router(injector)
    logger.info(f"🌍 {settings.PROJECT_NAME} backend iniciado en modo '{settings.ENV}'.")
    router.run(port)

if __name__ == "__main__":
    main()
