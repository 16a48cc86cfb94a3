"""Tests del identificador de correlación por petición."""

import hashlib
import base64
from unittest import mock

from core.context import new_context


def test_context_ids_are_derived_from_hashed_timestamp():
    with mock.patch("core.context.time.time_ns", return_value=1700000000000000000):
        context = new_context()

    expected = base64.urlsafe_b64encode(hashlib.sha256(b"1700000000000000000").digest()).decode()
    assert context.long_id == expected
    assert context.short_id == expected[:7]
    assert context.id == context.short_id


def test_new_context_returns_fresh_value_per_call():
    with mock.patch("core.context.time.time_ns", side_effect=[1, 2]):
        first = new_context()
        second = new_context()

    assert first.id != second.id
