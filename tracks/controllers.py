# tracks/controllers.py
import logging
import uuid
from typing import Dict, List, Optional

from core.context import RequestContext
from core.errors import MissingReferenceError, NotFoundError, TracksServiceError
from core.injector import Injector, resolve_database
from models.api import APIRequest, APIResponse
from models.artist import ArtistInfo
from models.track import TrackInfo
from store.mongo import MongoStore
from store.query import And, Eq, Filter, Set, Update
from tracks.requests import (
    CreateTrackBody,
    UpdateTrackBody,
    build_track,
    get_and_validate_id,
    merge_track,
    parse_body,
    track_set_fields,
    validate_create_body,
    validate_update_body,
)

logger = logging.getLogger("tracks.controllers")

TRACKS_COLLECTION = "tracks"
ARTISTS_COLLECTION = "artists"
GET_TRACK_LIMIT = 10


# ============================================================
# 🔧 Utilidades comunes
# ============================================================
def _log_request(context: RequestContext, request: APIRequest) -> None:
    logger.info(f"[{context.id}] {request.method}: {request.path}")
    logger.debug(f"[{context.id}] request: {request.model_dump_json(by_alias=True)}")


def error_response(context: RequestContext, error: TracksServiceError) -> APIResponse:
    """Traduce un error del dominio a respuesta; los 5xx no exponen detalle."""
    if error.status_code >= 500:
        logger.error(f"[{context.id}] ❌ {type(error).__name__}: {error}")
    else:
        logger.warning(f"[{context.id}] ⚠️ {type(error).__name__}: {error}")
    return APIResponse(status_code=error.status_code, body=error.body())


def _stores(injector: Optional[Injector]):
    database = resolve_database(injector)
    return (
        MongoStore(TrackInfo, database, TRACKS_COLLECTION),
        MongoStore(ArtistInfo, database, ARTISTS_COLLECTION),
    )


def check_artist_exists(store: MongoStore[ArtistInfo], artist_id: str, message: str) -> None:
    items = store.find(Filter(root=Eq("_id", artist_id), limit=1))
    if not items:
        raise MissingReferenceError(message)


def check_artists(store: MongoStore[ArtistInfo], artist_id: Optional[str], featured: Optional[List[str]]) -> None:
    if artist_id is not None:
        check_artist_exists(store, artist_id, "artist does not exist")
    for featured_id in featured or []:
        check_artist_exists(store, featured_id, "featured artist does not exist")


def find_track_by_id(store: MongoStore[TrackInfo], track_id: str) -> TrackInfo:
    items = store.find(Filter(root=Eq("_id", track_id), limit=1))
    if not items:
        raise NotFoundError(f"track {track_id} not found")
    return items[0]


def create_filter_from_query_parameters(query_parameters: Dict[str, str]) -> Filter:
    """``artist`` filtra por artista; ``limit`` se ignora si no es un entero positivo."""
    conditions = []
    artist = query_parameters.get("artist")
    if artist is not None:
        conditions.append(Eq("artistId", artist))

    limit = 0
    raw_limit = query_parameters.get("limit")
    if raw_limit is not None:
        try:
            limit = max(int(raw_limit), 0)
        except ValueError:
            limit = 0

    return Filter(root=And(conditions) if conditions else None, limit=limit)


# ============================================================
# 🔹 GET /tracks
# ============================================================
def get_tracks(request: APIRequest, injector: Optional[Injector], context: RequestContext) -> APIResponse:
    _log_request(context, request)
    try:
        track_store, _ = _stores(injector)
        items = track_store.find(create_filter_from_query_parameters(request.query_parameters))
    except TracksServiceError as e:
        return error_response(context, e)

    logger.debug(f"[{context.id}] {len(items)} tracks encontrados")
    return APIResponse(status_code=200, body=items)


# ============================================================
# 🔹 GET /tracks/:id
# ============================================================
def get_track(request: APIRequest, injector: Optional[Injector], context: RequestContext) -> APIResponse:
    _log_request(context, request)
    try:
        track_store, _ = _stores(injector)
        track_id = request.path_parameters.get("id", "")
        items = track_store.find(Filter(root=Eq("_id", track_id), limit=GET_TRACK_LIMIT))
        if not items:
            raise NotFoundError(f"track {track_id} not found")
    except TracksServiceError as e:
        return error_response(context, e)

    return APIResponse(status_code=200, body=items[0])


# ============================================================
# 🔹 POST /tracks
# ============================================================
def create_track(request: APIRequest, injector: Optional[Injector], context: RequestContext) -> APIResponse:
    _log_request(context, request)
    try:
        track_store, artist_store = _stores(injector)
        body = validate_create_body(parse_body(request, CreateTrackBody))
        check_artists(artist_store, body.artist_id, body.featured_artist_ids)

        track = build_track(str(uuid.uuid4()), body)
        logger.debug(f"[{context.id}] creando track {track.id} ...")
        track_store.create(track)
    except TracksServiceError as e:
        return error_response(context, e)

    logger.info(f"[{context.id}] ✅ Track creado: {track.id}")
    return APIResponse(status_code=200, body=track)


# ============================================================
# 🔹 PUT /tracks/:id
# ============================================================
def update_track(request: APIRequest, injector: Optional[Injector], context: RequestContext) -> APIResponse:
    _log_request(context, request)
    try:
        track_store, artist_store = _stores(injector)
        track_id = get_and_validate_id(request)
        body = validate_update_body(parse_body(request, UpdateTrackBody))
        check_artists(artist_store, body.artist_id, body.featured_artist_ids)

        current = find_track_by_id(track_store, track_id)
        merged = merge_track(current, body)

        logger.debug(f"[{context.id}] actualizando track {track_id} ...")
        count = track_store.update(
            Filter(root=Eq("_id", track_id)),
            Update(root=Set(track_set_fields(merged))),
        )
    except TracksServiceError as e:
        return error_response(context, e)

    if count == 0:
        logger.warning(f"[{context.id}] ⚠️ Ningún documento modificado para {track_id}")
    return APIResponse(status_code=204)


# ============================================================
# 🔹 DELETE /tracks/:id
# ============================================================
def delete_track(request: APIRequest, injector: Optional[Injector], context: RequestContext) -> APIResponse:
    _log_request(context, request)
    try:
        track_store, _ = _stores(injector)
        count = track_store.delete(request.path_parameters.get("id", ""))
    except TracksServiceError as e:
        return error_response(context, e)

    if count == 0:
        return APIResponse(status_code=204)
    logger.info(f"[{context.id}] 🗑️ Track eliminado: {request.path_parameters.get('id')}")
    return APIResponse(status_code=202)
