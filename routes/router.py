# routes/router.py
import logging
import re
from typing import Callable, Dict, Iterable, Optional, Tuple

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from core.context import RequestContext, new_context
from core.errors import InvalidBodyError, TransformationError
from core.injector import Injector
from models.api import APIRequest, APIResponse

logger = logging.getLogger("routes.router")

RouterHandlerFunc = Callable[[APIRequest, RequestContext], APIResponse]
RouterInjectionHandlerFunc = Callable[[APIRequest, Optional[Injector], RequestContext], APIResponse]

_TEMPLATE_PARAM = re.compile(r":(\w+)")


# ============================================================
# 💉 Contenedor de dependencias de una ruta
# ============================================================
class RouterInjector:
    def __init__(self):
        self.injector: Optional[Injector] = None

    def inject(self, injector: Injector) -> "RouterInjector":
        self.injector = injector
        return self


# ============================================================
# 🔧 Transformación petición -> APIRequest
# ============================================================
def join_repeated(items: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Claves repetidas se unen con comas, respetando el orden."""
    result: Dict[str, str] = {}
    for key, value in items:
        if key in result:
            result[key] = f"{result[key]},{value}"
        else:
            result[key] = value
    return result


def extract_path_parameters(template: str, path: str) -> Dict[str, str]:
    path_segments = path.lstrip("/").split("/")
    template_segments = template.lstrip("/").split("/")
    if len(path_segments) != len(template_segments):
        raise TransformationError(
            f"path '{path}' has {len(path_segments)} segments, template '{template}' has {len(template_segments)}"
        )

    params = {}
    for segment, value in zip(template_segments, path_segments):
        if segment.startswith(":"):
            params[segment[1:]] = value
    return params


def extract_query_parameters(items: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    return join_repeated(items)


def decode_body(body: bytes) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidBodyError(f"body is not valid utf-8: {e}") from e


async def transform_request(template: str, request: Request) -> APIRequest:
    body = await request.body()
    return APIRequest(
        url=str(request.url),
        path=request.url.path,
        method=request.method,
        headers=join_repeated(request.headers.items()),
        path_parameters=extract_path_parameters(template, request.url.path),
        query_parameters=extract_query_parameters(request.query_params.multi_items()),
        body=decode_body(body),
    )


def apply_response(response: APIResponse) -> Response:
    if response.body is None:
        return Response(status_code=response.status_code, headers=response.headers)
    return JSONResponse(
        content=jsonable_encoder(response.body),
        status_code=response.status_code,
        headers=response.headers,
    )


def to_fastapi_path(template: str) -> str:
    """``/tracks/:id`` -> ``/tracks/{id}``"""
    return _TEMPLATE_PARAM.sub(r"{\1}", template)


# ============================================================
# 🧭 Router sobre FastAPI
# ============================================================
class Router:
    def __init__(self, app: Optional[FastAPI] = None):
        self.app = app or FastAPI()

    def handle(self, method: str, template: str, handler: RouterHandlerFunc) -> None:
        """Registra un handler sin dependencias inyectadas."""

        async def endpoint(request: Request) -> Response:
            try:
                api_request = await self._transform(template, request)
            except InvalidBodyError as e:
                return self._reject(request, e)
            context = new_context()
            api_response = await run_in_threadpool(handler, api_request, context)
            return apply_response(api_response)

        self._register(method, template, endpoint)

    def handle_with(self, method: str, template: str, handler: RouterInjectionHandlerFunc) -> RouterInjector:
        """Registra un handler que recibe el Injector asignado con ``.inject()``."""
        route_injector = RouterInjector()

        async def endpoint(request: Request) -> Response:
            try:
                api_request = await self._transform(template, request)
            except InvalidBodyError as e:
                return self._reject(request, e)
            context = new_context()
            api_response = await run_in_threadpool(handler, api_request, route_injector.injector, context)
            return apply_response(api_response)

        self._register(method, template, endpoint)
        return route_injector

    def run(self, port: int, host: str = "0.0.0.0") -> None:
        logger.info(f"🚀 Router escuchando en {host}:{port}")
        uvicorn.run(self.app, host=host, port=port)

    async def _transform(self, template: str, request: Request) -> APIRequest:
        try:
            return await transform_request(template, request)
        except TransformationError:
            logger.exception(f"❌ No se pudo transformar {request.method} {request.url.path} con la plantilla {template}")
            raise

    def _reject(self, request: Request, error: InvalidBodyError) -> Response:
        logger.warning(f"⚠️ Cuerpo rechazado en {request.method} {request.url.path}: {error}")
        return apply_response(APIResponse(status_code=error.status_code, body=error.body()))

    def _register(self, method: str, template: str, endpoint) -> None:
        self.app.add_api_route(
            to_fastapi_path(template),
            endpoint,
            methods=[method.upper()],
            include_in_schema=False,
        )
        logger.debug(f"ruta registrada: {method.upper()} {template}")
