import hashlib

import pytest

from src.core.access import AccessGate, hash_password
from src.core.errors import AccessUnavailableError

SECRET_HASH = hashlib.sha256(b"rat-atlas").hexdigest()


def test_hash_password_is_hex_sha256():
    assert hash_password("rat-atlas") == SECRET_HASH


def test_unknown_algorithm_raises_access_unavailable():
    with pytest.raises(AccessUnavailableError):
        hash_password("x", algorithm="not-a-real-hash")


def test_gate_without_hash_is_open():
    gate = AccessGate(None, {})

    assert not gate.enabled
    assert gate.is_granted()


def test_wrong_password_keeps_gate_closed():
    session = {}
    gate = AccessGate(SECRET_HASH, session)

    assert not gate.unlock("wrong")
    assert not gate.is_granted()
    assert session == {}


def test_correct_password_sets_session_flag():
    session = {}
    gate = AccessGate(SECRET_HASH.upper(), session, session_key="flag")

    assert gate.unlock("  rat-atlas ")
    assert session["flag"] == SECRET_HASH
    assert AccessGate(SECRET_HASH, session, session_key="flag").is_granted()

    gate.lock()
    assert not gate.is_granted()


def test_stale_session_value_does_not_grant_access():
    gate = AccessGate(SECRET_HASH, {"expression_viewer_access": "something-else"})

    assert not gate.is_granted()
