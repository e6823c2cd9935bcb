# tests/test_signup_service.py

import asyncio

import pytest

from core.store import ClientStore
from models.enums import SignupStep
from services.session_service import SessionService
from services.signup_service import RESEND_SUCCESS, SignupForm, SignupService
from services.local_storage import TOKEN_KEY

from .fakes import FakeApi

VALID_FORM = SignupForm(
    username="alice",
    email="alice@example.com",
    password="secret1",
    confirm_password="secret1",
)

@pytest.fixture()
def signup(storage, fake_api: FakeApi) -> SignupService:
    session = SessionService(ClientStore(), storage, signin_delay=0.01)
    return SignupService(fake_api, session)

@pytest.mark.asyncio
async def test_invalid_form_does_not_call_api(signup: SignupService, fake_api: FakeApi):
    form = SignupForm(username="al", email="nope", password="123", confirm_password="124")

    assert await signup.submit_signup(form) is False

    assert signup.errors == {
        "username": "Username must be at least 3 characters",
        "email": "Please enter a valid email",
        "password": "Password must be at least 6 characters",
        "confirmPassword": "Passwords do not match",
    }
    assert fake_api.called("register") == []
    assert signup.is_loading is False

@pytest.mark.asyncio
async def test_valid_form_moves_to_otp_step(signup: SignupService, fake_api: FakeApi):
    assert await signup.submit_signup(VALID_FORM) is True

    assert signup.step == SignupStep.OTP
    assert signup.user_id == "user-1"
    assert fake_api.called("register") == [
        {"username": "alice", "email": "alice@example.com", "password": "secret1"}
    ]

@pytest.mark.asyncio
async def test_register_failure_shows_server_message(signup: SignupService, fake_api: FakeApi):
    fake_api.failures["register"] = "Email already registered"

    assert await signup.submit_signup(VALID_FORM) is False

    assert signup.errors == {"submit": "Email already registered"}
    assert signup.step == SignupStep.SIGNUP

def test_update_field_clears_its_error(signup: SignupService):
    signup.errors = {"confirmPassword": "Passwords do not match", "email": "bad"}

    signup.update_field("confirm_password", "secret1")

    assert signup.form.confirm_password == "secret1"
    assert signup.errors == {"email": "bad"}

def test_update_unknown_field_is_rejected(signup: SignupService):
    with pytest.raises(ValueError):
        signup.update_field("role", "admin")

def test_otp_input_is_sanitized(signup: SignupService):
    signup.set_otp("12a3-45678")
    assert signup.otp == "123456"

@pytest.mark.asyncio
async def test_short_otp_is_rejected_locally(signup: SignupService, fake_api: FakeApi):
    signup.set_otp("123")

    assert await signup.submit_otp() is False

    assert signup.errors == {"otp": "Please enter a 6-digit OTP"}
    assert fake_api.called("verify_otp") == []

@pytest.mark.asyncio
async def test_verified_otp_signs_in_after_delay(signup: SignupService, fake_api: FakeApi, storage):
    await signup.submit_signup(VALID_FORM)
    signup.set_otp("123456")

    assert await signup.submit_otp() is True

    assert signup.success is True
    assert fake_api.called("verify_otp") == [{"userId": "user-1", "otp": "123456"}]
    assert storage.get_item(TOKEN_KEY) == "tok-1"
    assert signup.session.store.signed_in is False

    await asyncio.sleep(0.05)
    assert signup.session.store.signed_in is True

@pytest.mark.asyncio
async def test_wrong_otp_shows_server_message(signup: SignupService, fake_api: FakeApi):
    fake_api.failures["verify_otp"] = "Invalid OTP"
    signup.set_otp("000000")

    assert await signup.submit_otp() is False
    assert signup.errors == {"otp": "Invalid OTP"}
    assert signup.success is False

@pytest.mark.asyncio
async def test_resend_otp(signup: SignupService, fake_api: FakeApi):
    signup.resume({"step": "otp", "userId": "user-9"})

    assert await signup.resend_otp() is True

    assert signup.step == SignupStep.OTP
    assert signup.errors == {"resend": RESEND_SUCCESS}
    assert fake_api.called("resend_otp") == [{"userId": "user-9"}]

def test_back_to_signup_resets_otp(signup: SignupService):
    signup.resume({"step": "otp", "userId": "user-1"})
    signup.set_otp("123456")

    signup.back_to_signup()

    assert signup.step == SignupStep.SIGNUP
    assert signup.otp == ""
