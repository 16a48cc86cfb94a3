"""Tests del repositorio genérico MongoStore sobre mongomock."""

from datetime import date, datetime
from unittest import mock

import pytest
from bson.errors import InvalidDocument
from pymongo.errors import PyMongoError

from core.errors import StorageError
from models.artist import ArtistInfo
from models.track import TrackInfo
from store.mongo import MongoStore, encode_value
from store.query import Eq, Filter, Gte, Set, Update


def make_track(track_id: str, artist_id: str = "artist-1", streams: int = 0) -> TrackInfo:
    return TrackInfo(
        id=track_id,
        artist_id=artist_id,
        title=f"Track {track_id}",
        release_date=date(2021, 3, 14),
        track_stats={"streams": streams, "likes": 1},
    )


@pytest.fixture
def store(database):
    return MongoStore(TrackInfo, database, "tracks")


def test_encode_value_converts_dates_to_midnight_datetimes():
    encoded = encode_value({"releaseDate": date(2024, 1, 2), "nested": [date(2020, 5, 6)]})

    assert encoded == {
        "releaseDate": datetime(2024, 1, 2, 0, 0),
        "nested": [datetime(2020, 5, 6, 0, 0)],
    }


def test_create_stores_primary_key_as_underscore_id(store, database):
    store.create(make_track("t1"))

    raw = database["tracks"].find_one({"_id": "t1"})
    assert raw is not None
    assert "id" not in raw
    assert raw["artistId"] == "artist-1"
    assert raw["releaseDate"] == datetime(2021, 3, 14)
    assert raw["trackStats"] == {"streams": 0, "likes": 1}


def test_find_decodes_typed_items(store):
    store.create(make_track("t1"))

    items = store.find(Filter(root=Eq("_id", "t1")))

    assert items == [make_track("t1")]
    assert items[0].release_date == date(2021, 3, 14)


def test_find_without_matches_returns_empty_list(store):
    assert store.find(Filter(root=Eq("_id", "missing"))) == []


def test_find_applies_limit_only_when_positive(store):
    for i in range(5):
        store.create(make_track(f"t{i}"))

    assert len(store.find(Filter(limit=2))) == 2
    assert len(store.find(Filter())) == 5


def test_find_with_comparison_predicate(store):
    store.create(make_track("low", streams=5))
    store.create(make_track("high", streams=500))

    items = store.find(Filter(root=Gte("trackStats.streams", 100)))

    assert [item.id for item in items] == ["high"]


def test_create_duplicate_id_raises_storage_error(store):
    store.create(make_track("t1"))

    with pytest.raises(StorageError):
        store.create(make_track("t1"))


def test_update_returns_modified_count(store):
    store.create(make_track("t1"))

    count = store.update(Filter(root=Eq("_id", "t1")), Update(root=Set({"trackStats.streams": 42})))

    assert count == 1
    assert store.find(Filter(root=Eq("_id", "t1")))[0].track_stats.streams == 42


def test_update_without_match_modifies_nothing(store):
    count = store.update(Filter(root=Eq("_id", "missing")), Update(root=Set({"title": "x"})))

    assert count == 0


def test_update_without_root_is_noop(store, database):
    store.create(make_track("t1"))

    with mock.patch.object(type(store.collection), "update_one") as update_one:
        assert store.update(Filter(root=Eq("_id", "t1")), Update()) == 0
    update_one.assert_not_called()


def test_delete_returns_deleted_count(store):
    store.create(make_track("t1"))

    assert store.delete("t1") == 1
    assert store.delete("t1") == 0


def test_driver_errors_become_storage_errors(store):
    with mock.patch.object(type(store.collection), "find", side_effect=PyMongoError("boom")):
        with pytest.raises(StorageError):
            store.find(Filter())


def test_bson_encoding_errors_become_storage_errors(store):
    with mock.patch.object(type(store.collection), "insert_one", side_effect=OverflowError("MongoDB can only handle up to 8-byte ints")):
        with pytest.raises(StorageError):
            store.create(make_track("t1"))

    with mock.patch.object(type(store.collection), "update_one", side_effect=InvalidDocument("cannot encode object")):
        with pytest.raises(StorageError):
            store.update(Filter(root=Eq("_id", "t1")), Update(root=Set({"title": "x"})))


def test_undecodable_document_raises_storage_error(store, database):
    database["tracks"].insert_one({"_id": "broken", "title": "sin artista"})

    with pytest.raises(StorageError):
        store.find(Filter(root=Eq("_id", "broken")))


def test_store_is_generic_over_model(database):
    database["artists"].insert_one({"_id": "a1", "name": "Cerati", "country": "AR"})
    artists = MongoStore(ArtistInfo, database, "artists")

    assert artists.find(Filter(root=Eq("_id", "a1"), limit=1)) == [ArtistInfo(id="a1", name="Cerati")]
