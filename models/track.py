# models/track.py
from datetime import date, datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AudioKey(str, Enum):
    A_MINOR = "A Minor"
    B_MINOR = "B Minor"
    C_MINOR = "C Minor"
    D_MINOR = "D Minor"
    E_MINOR = "E Minor"
    F_MINOR = "F Minor"
    G_MINOR = "G Minor"
    A_MAJOR = "A Major"
    B_MAJOR = "B Major"
    C_MAJOR = "C Major"
    D_MAJOR = "D Major"
    E_MAJOR = "E Major"
    F_MAJOR = "F Major"
    G_MAJOR = "G Major"
    A_SHARP_MINOR = "A# Minor"
    B_SHARP_MINOR = "B# Minor"
    C_SHARP_MINOR = "C# Minor"
    D_SHARP_MINOR = "D# Minor"
    E_SHARP_MINOR = "E# Minor"
    F_SHARP_MINOR = "F# Minor"
    G_SHARP_MINOR = "G# Minor"
    A_FLAT_MAJOR = "Ab Major"
    B_FLAT_MAJOR = "Bb Major"
    C_FLAT_MAJOR = "Cb Major"
    D_FLAT_MAJOR = "Db Major"
    E_FLAT_MAJOR = "Eb Major"
    F_FLAT_MAJOR = "Fb Major"
    G_FLAT_MAJOR = "Gb Major"


AUDIO_KEYS = {key.value for key in AudioKey}


class TrackStats(BaseModel):
    streams: int = 0
    likes: int = 0


class AudioFeatures(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    key: str = ""
    tempo: float = 0
    duration: float = 0
    energy: float = 0
    danceability: float = 0
    accousticness: float = 0
    instrumentalness: float = 0
    liveness: float = 0
    loudness: float = 0  # LUFS
    time_signature: int = 0


class TrackInfo(BaseModel):
    """Track tal como se guarda en Mongo (``_id`` en base, ``id`` en la API)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    artist_id: str
    featured_artist_ids: List[str] = Field(default_factory=list)
    title: str
    label: str = ""
    release_date: date
    track_stats: TrackStats = Field(default_factory=TrackStats)
    audio_features: AudioFeatures = Field(default_factory=AudioFeatures)

    @field_validator("release_date", mode="before")
    @classmethod
    def _datetime_to_date(cls, value):
        # Mongo devuelve la fecha como datetime a medianoche
        if isinstance(value, datetime):
            return value.date()
        return value
