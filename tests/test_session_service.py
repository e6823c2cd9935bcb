# tests/test_session_service.py

import asyncio
import json

import pytest

from core.store import ClientStore
from models.enums import SignInPhase
from services.local_storage import SIGNED_IN_KEY, THEME_KEY, TOKEN_KEY, USER_KEY
from services.session_service import SessionService

from .test_store import make_task

def test_initial_signed_in_requires_token_and_user(storage):
    assert SessionService.initial_signed_in(storage) is False

    storage.set_item(TOKEN_KEY, "tok")
    assert SessionService.initial_signed_in(storage) is False

    storage.set_item(USER_KEY, json.dumps({"id": "u1"}))
    assert SessionService.initial_signed_in(storage) is True

def test_initial_theme(storage):
    assert SessionService.initial_theme(storage) is True
    storage.set_item(THEME_KEY, "false")
    assert SessionService.initial_theme(storage) is False
    storage.set_item(THEME_KEY, "not-json")
    assert SessionService.initial_theme(storage, default=False) is False

def test_toggle_theme_persists(store, storage, session):
    assert store.dark is True

    assert session.toggle_theme() is False

    assert store.dark is False
    assert storage.get_item(THEME_KEY) == "false"

def test_sign_out_clears_session_and_tasks(store, storage, session):
    storage.set_item(TOKEN_KEY, "tok")
    storage.set_item(USER_KEY, "{}")
    storage.set_item(SIGNED_IN_KEY, "true")
    storage.set_item(THEME_KEY, "true")
    store.replace_tasks([make_task("a")])

    session.sign_out()

    assert store.signed_in is False
    assert store.tasks == ()
    assert session.phase == SignInPhase.IDLE
    for key in (TOKEN_KEY, USER_KEY, SIGNED_IN_KEY):
        assert storage.get_item(key) is None
    assert storage.get_item(THEME_KEY) == "true"

@pytest.mark.asyncio
async def test_complete_sign_in_goes_through_phases(storage):
    store = ClientStore()
    phases = []
    session = SessionService(store, storage, signin_delay=0.01)
    session.on_transition = lambda: phases.append(session.phase)

    session.complete_sign_in("tok-1", {"id": "u1", "username": "alice"})

    assert session.phase == SignInPhase.VERIFIED
    assert store.signed_in is False
    assert storage.get_item(TOKEN_KEY) == "tok-1"
    assert session.user == {"id": "u1", "username": "alice"}

    await asyncio.sleep(0.05)

    assert phases == [SignInPhase.TRANSITIONING]
    assert session.phase == SignInPhase.SIGNED_IN
    assert store.signed_in is True
    assert storage.get_item(SIGNED_IN_KEY) is None

@pytest.mark.asyncio
async def test_transition_callback_failure_still_signs_in(storage):
    store = ClientStore()

    def broken():
        raise RuntimeError("navigation failed")

    session = SessionService(store, storage, signin_delay=0, on_transition=broken)
    loop = asyncio.get_running_loop()
    errors = []
    loop.set_exception_handler(lambda _loop, context: errors.append(context))

    session.complete_sign_in("tok-1", {})
    await asyncio.sleep(0.02)

    assert store.signed_in is True
    assert session.phase == SignInPhase.SIGNED_IN
    assert errors

@pytest.mark.asyncio
async def test_sign_out_cancels_pending_sign_in(storage):
    store = ClientStore()
    session = SessionService(store, storage, signin_delay=0.05)

    session.complete_sign_in("tok-1", {})
    session.sign_out()
    await asyncio.sleep(0.1)

    assert store.signed_in is False
    assert session.phase == SignInPhase.IDLE
    assert storage.get_item(TOKEN_KEY) is None
