# tracks/requests.py
"""
Cuerpos de petición de los endpoints de tracks.

Creación: todos los campos con su valor por defecto, igual que el modelo.
Actualización: todos los campos son opcionales; un campo presente (no ``null``)
sobrescribe el valor guardado, aunque sea 0 o "". Así ``streams = 0`` es una
actualización válida y no se confunde con "no enviado".
"""
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as ModelValidationError
from pydantic.alias_generators import to_camel

from core.errors import InvalidBodyError, PathValidationError, ValidationError
from models.api import APIRequest
from models.track import AUDIO_KEYS, TrackInfo

DATE_FORMAT = "%Y-%m-%d"

# streams/likes son contadores de 32 bits sin signo
MAX_COUNTER = 2**32 - 1
MAX_BSON_INT = 2**63 - 1

B = TypeVar("B", bound=BaseModel)


class _Body(BaseModel):
    # NaN e Infinity no son JSON válido al responder
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


# ============================================================
# 🆕 Creación
# ============================================================
class CreateTrackStatsBody(_Body):
    streams: int = 0
    likes: int = 0


class CreateTrackAudioFeaturesBody(_Body):
    key: str = ""
    tempo: float = 0
    duration: float = 0
    energy: float = 0
    danceability: float = 0
    accousticness: float = 0
    instrumentalness: float = 0
    liveness: float = 0
    loudness: float = 0
    time_signature: int = 0


class CreateTrackBody(_Body):
    artist_id: str = ""
    featured_artist_ids: List[str] = Field(default_factory=list)
    title: str = ""
    label: str = ""
    release_date: str = ""
    track_stats: CreateTrackStatsBody = Field(default_factory=CreateTrackStatsBody)
    audio_features: CreateTrackAudioFeaturesBody = Field(default_factory=CreateTrackAudioFeaturesBody)


# ============================================================
# ✏️ Actualización
# ============================================================
class UpdateTrackStatsBody(_Body):
    streams: Optional[int] = None
    likes: Optional[int] = None


class UpdateTrackAudioFeaturesBody(_Body):
    key: Optional[str] = None
    tempo: Optional[float] = None
    duration: Optional[float] = None
    energy: Optional[float] = None
    danceability: Optional[float] = None
    accousticness: Optional[float] = None
    instrumentalness: Optional[float] = None
    liveness: Optional[float] = None
    loudness: Optional[float] = None
    time_signature: Optional[int] = None


class UpdateTrackBody(_Body):
    artist_id: Optional[str] = None
    featured_artist_ids: Optional[List[str]] = None
    title: Optional[str] = None
    label: Optional[str] = None
    release_date: Optional[str] = None
    track_stats: Optional[UpdateTrackStatsBody] = None
    audio_features: Optional[UpdateTrackAudioFeaturesBody] = None


# ============================================================
# 🔍 Parseo y validación
# ============================================================
def parse_body(request: APIRequest, model: Type[B]) -> B:
    try:
        return model.model_validate_json(request.body)
    except ModelValidationError as e:
        raise InvalidBodyError(str(e)) from e


def is_uuid(value: str) -> bool:
    """Solo la forma canónica con guiones o los 32 dígitos hex sin separadores."""
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    return value.lower() in (str(parsed), parsed.hex)


def parse_release_date(value: str) -> date:
    """Solo acepta ``YYYY-MM-DD`` con ceros a la izquierda y fecha de calendario real."""
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError("releaseDate", "expected following format: yyyy-MM-dd")
    if parsed.strftime(DATE_FORMAT) != value:
        raise ValidationError("releaseDate", "expected following format: yyyy-MM-dd")
    return parsed


def get_and_validate_id(request: APIRequest) -> str:
    track_id = request.path_parameters.get("id", "")
    if not is_uuid(track_id):
        raise PathValidationError(":id", "value is not a valid uuid")
    return track_id


def _validate_artist_id(artist_id: str) -> None:
    if not is_uuid(artist_id):
        raise ValidationError("artistId", "value is not a valid uuid")


def _validate_featured_artist_ids(artist_ids: List[str]) -> None:
    if not all(is_uuid(artist_id) for artist_id in artist_ids):
        raise ValidationError("featuredArtistIds", "array contains invalid uuid")


def _validate_title(title: str) -> None:
    if not title:
        raise ValidationError("title", "value must not be empty")


def _validate_stats(stats) -> None:
    for name in ("streams", "likes"):
        value = getattr(stats, name)
        if value is None:
            continue
        if value < 0:
            raise ValidationError(f"trackStats.{name}", "value must not be negative")
        if value > MAX_COUNTER:
            raise ValidationError(f"trackStats.{name}", "value is out of range")


def _validate_audio_features(features) -> None:
    if features.key and features.key not in AUDIO_KEYS:
        raise ValidationError("audioFeatures.key", "value is not a valid audio key")
    if features.time_signature is not None and abs(features.time_signature) > MAX_BSON_INT:
        raise ValidationError("audioFeatures.timeSignature", "value is out of range")


def _strip_ids(artist_ids: List[str]) -> List[str]:
    return [artist_id.strip() for artist_id in artist_ids]


def validate_create_body(body: CreateTrackBody) -> CreateTrackBody:
    """Valida y devuelve una copia con los textos recortados."""
    body = body.model_copy(update={
        "artist_id": body.artist_id.strip(),
        "featured_artist_ids": _strip_ids(body.featured_artist_ids),
        "title": body.title.strip(),
        "label": body.label.strip(),
        "release_date": body.release_date.strip(),
    })
    _validate_artist_id(body.artist_id)
    _validate_featured_artist_ids(body.featured_artist_ids)
    _validate_title(body.title)
    parse_release_date(body.release_date)
    _validate_stats(body.track_stats)
    _validate_audio_features(body.audio_features)
    return body


def validate_update_body(body: UpdateTrackBody) -> UpdateTrackBody:
    changes: Dict[str, Any] = {}
    for name in ("artist_id", "title", "label", "release_date"):
        value = getattr(body, name)
        if value is not None:
            changes[name] = value.strip()
    if body.featured_artist_ids is not None:
        changes["featured_artist_ids"] = _strip_ids(body.featured_artist_ids)
    body = body.model_copy(update=changes)

    if body.artist_id is not None:
        _validate_artist_id(body.artist_id)
    if body.featured_artist_ids is not None:
        _validate_featured_artist_ids(body.featured_artist_ids)
    if body.title is not None:
        _validate_title(body.title)
    if body.release_date is not None:
        parse_release_date(body.release_date)
    if body.track_stats is not None:
        _validate_stats(body.track_stats)
    if body.audio_features is not None:
        _validate_audio_features(body.audio_features)
    return body


# ============================================================
# 🧩 Construcción y merge selectivo
# ============================================================
def build_track(track_id: str, body: CreateTrackBody) -> TrackInfo:
    return TrackInfo(
        id=track_id,
        artist_id=body.artist_id,
        featured_artist_ids=body.featured_artist_ids,
        title=body.title,
        label=body.label,
        release_date=parse_release_date(body.release_date),
        track_stats=body.track_stats.model_dump(),
        audio_features=body.audio_features.model_dump(),
    )


def merge_track(track: TrackInfo, body: UpdateTrackBody) -> TrackInfo:
    """Solo los campos presentes en el cuerpo reemplazan los valores guardados."""
    changes: Dict[str, Any] = {}
    for name in ("artist_id", "featured_artist_ids", "title", "label"):
        value = getattr(body, name)
        if value is not None:
            changes[name] = value
    if body.release_date is not None:
        changes["release_date"] = parse_release_date(body.release_date)
    if body.track_stats is not None:
        changes["track_stats"] = track.track_stats.model_copy(
            update=body.track_stats.model_dump(exclude_none=True)
        )
    if body.audio_features is not None:
        changes["audio_features"] = track.audio_features.model_copy(
            update=body.audio_features.model_dump(exclude_none=True)
        )
    return track.model_copy(update=changes)


def flatten_fields(doc: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """``{"trackStats": {"likes": 1}}`` -> ``{"trackStats.likes": 1}``"""
    flat: Dict[str, Any] = {}
    for key, value in doc.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten_fields(value, f"{path}."))
        else:
            flat[path] = value
    return flat


def track_set_fields(track: TrackInfo) -> Dict[str, Any]:
    """Campos con notación de puntos para un ``Set`` que reescribe el track (sin ``_id``)."""
    return flatten_fields(track.model_dump(by_alias=True, exclude={"id"}))
