# services/signup_service.py

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

from models.enums import SignupStep
from services.session_service import SessionService
from shared.exceptions import TransportError
from utils.validators import is_valid_otp, sanitize_otp, validate_signup_form

logger = logging.getLogger(__name__)

RESEND_SUCCESS = "New OTP sent to your email!"

class AuthApi(Protocol):
    async def register(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    async def verify_otp(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...

    async def resend_otp(self, payload: Dict[str, Any]) -> Dict[str, Any]: ...

@dataclass
class SignupForm:
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

# Имена полей формы -> ключи ошибок
FORM_FIELDS = {
    "username": "username",
    "email": "email",
    "password": "password",
    "confirm_password": "confirmPassword",
}

class SignupService:
    """Регистрация: форма -> код из письма -> вход"""

    def __init__(self, api: AuthApi, session: SessionService):
        self.api = api
        self.session = session
        self.form = SignupForm()
        self.step = SignupStep.SIGNUP
        self.user_id: Optional[str] = None
        self.otp = ""
        self.errors: Dict[str, str] = {}
        self.is_loading = False
        self.success = False

    def resume(self, state: Optional[Mapping[str, Any]]):
        """Продолжить с шага OTP (например, после перехода со страницы входа)"""
        if state and state.get("step") == SignupStep.OTP.value and state.get("userId"):
            self.step = SignupStep.OTP
            self.user_id = state["userId"]

    def update_field(self, name: str, value: str):
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self.form, name, value)
        self.errors.pop(FORM_FIELDS[name], None)

    def set_otp(self, value: str):
        self.otp = sanitize_otp(value)
        self.errors.pop("otp", None)

    def back_to_signup(self):
        self.step = SignupStep.SIGNUP
        self.otp = ""
        self.errors = {}

    async def submit_signup(self, form: Optional[SignupForm] = None) -> bool:
        if form is not None:
            self.form = form

        self.is_loading = True
        self.errors = {}
        try:
            form_errors = validate_signup_form(
                self.form.username,
                self.form.email,
                self.form.password,
                self.form.confirm_password
            )
            if form_errors:
                self.errors = form_errors
                return False

            response = await self.api.register({
                "username": self.form.username,
                "email": self.form.email,
                "password": self.form.password
            })

            if response and response.get("requiresVerification"):
                self.user_id = response.get("userId")
                self.step = SignupStep.OTP
                logger.info(f"📧 Код подтверждения отправлен для {self.user_id}")
                return True
            return False

        except TransportError as e:
            self.errors = {"submit": e.message}
            return False
        finally:
            self.is_loading = False

    async def submit_otp(self) -> bool:
        self.is_loading = True
        self.errors = {}
        try:
            if not is_valid_otp(self.otp):
                self.errors = {"otp": "Please enter a 6-digit OTP"}
                return False

            response = await self.api.verify_otp({"userId": self.user_id, "otp": self.otp})

            if response and response.get("token"):
                self.session.complete_sign_in(response["token"], response.get("user") or {})
                self.success = True
                return True
            return False

        except TransportError as e:
            self.errors = {"otp": e.message}
            return False
        finally:
            self.is_loading = False

    async def resend_otp(self) -> bool:
        self.is_loading = True
        self.errors = {}
        try:
            await self.api.resend_otp({"userId": self.user_id})
            self.errors = {"resend": RESEND_SUCCESS}
            return True
        except TransportError as e:
            self.errors = {"resend": e.message}
            return False
        finally:
            self.is_loading = False
