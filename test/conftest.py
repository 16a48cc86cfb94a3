"""Fixtures de pytest: Mongo en memoria (mongomock) y cliente HTTP."""

import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient

from core.injector import Injector
from main import create_router


@pytest.fixture
def database():
    """Base de datos Mongo en memoria, nueva en cada test."""
    client = mongomock.MongoClient()
    return client["gostream"]


@pytest.fixture
def artist_id(database):
    artist = str(uuid.uuid4())
    database["artists"].insert_one({"_id": artist, "name": "Soda Stereo"})
    return artist


@pytest.fixture
def featured_artist_id(database):
    artist = str(uuid.uuid4())
    database["artists"].insert_one({"_id": artist, "name": "Andrea Echeverri"})
    return artist


@pytest.fixture
def client(database):
    router = create_router(Injector(database=database))
    return TestClient(router.app)


@pytest.fixture
def track_payload(artist_id):
    return {
        "artistId": artist_id,
        "featuredArtistIds": [],
        "title": "De Música Ligera",
        "label": "BMG",
        "releaseDate": "1990-08-06",
        "trackStats": {"streams": 1200, "likes": 300},
        "audioFeatures": {
            "key": "F# Minor",
            "tempo": 126.5,
            "duration": 212.0,
            "energy": 0.8,
            "danceability": 0.6,
            "accousticness": 0.1,
            "instrumentalness": 0.02,
            "liveness": 0.3,
            "loudness": -7.5,
            "timeSignature": 4,
        },
    }
