"""
Tests for the in-memory session registry.
"""

import asyncio

import pytest

from backend.services.session_service import SessionNotFoundError, SessionService


def test_create_and_get():
    service = SessionService()
    session = service.create()
    assert service.get(session.session_id) is session
    assert len(service) == 1


def test_sessions_use_configured_placeholders():
    service = SessionService(empty_placeholder="# empty")
    assert service.create().text == "# empty"


def test_unknown_session_raises():
    service = SessionService()
    with pytest.raises(SessionNotFoundError):
        service.get("nope")
    with pytest.raises(SessionNotFoundError):
        service.delete("nope")


def test_delete():
    service = SessionService()
    session = service.create()
    service.delete(session.session_id)
    assert len(service) == 0


def test_least_recently_used_is_evicted():
    service = SessionService(max_sessions=2)
    first = service.create()
    second = service.create()
    service.get(first.session_id)  # first is now most recent
    third = service.create()

    assert len(service) == 2
    assert service.get(first.session_id) is first
    assert service.get(third.session_id) is third
    with pytest.raises(SessionNotFoundError):
        service.get(second.session_id)


def test_publish_without_subscribers():
    service = SessionService()
    session = service.create()
    session.add("server.port")
    asyncio.run(service.publish(session))
