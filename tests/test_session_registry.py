# tests/test_session_registry.py

"""
Tests for the cookie → dashboard session registry and its sweep job.
"""

import asyncio
from datetime import datetime, timedelta

from core.scheduler import run_session_sweep
from core.session_registry import SessionRegistry

from fakes import FakeDatabase, session_factory


def test_new_session_gets_fresh_id_and_is_initialized():
    async def scenario():
        registry = SessionRegistry(session_factory(FakeDatabase()), ttl_seconds=60)
        session, created = await registry.get_or_create("client-chosen-id")

        assert created is True
        assert session.session_id != "client-chosen-id"
        assert session.manager.loading is False
        assert registry.get(session.session_id) is session

        again, created = await registry.get_or_create(session.session_id)
        assert again is session
        assert created is False

    asyncio.run(scenario())


def test_expired_sessions_are_swept_and_closed():
    async def scenario():
        auths = []
        registry = SessionRegistry(session_factory(FakeDatabase(), auths), ttl_seconds=60)
        session, _ = await registry.get_or_create(None)

        registry._entries[session.session_id].expires_at = datetime.now() - timedelta(seconds=1)
        assert registry.get(session.session_id) is None

        await run_session_sweep(registry)
        assert len(registry) == 0
        assert auths[0].callbacks == []

    asyncio.run(scenario())


def test_close_all():
    async def scenario():
        registry = SessionRegistry(session_factory(FakeDatabase()), ttl_seconds=60)
        await registry.get_or_create(None)
        await registry.get_or_create(None)
        assert len(registry) == 2

        await registry.close_all()
        assert len(registry) == 0

    asyncio.run(scenario())
