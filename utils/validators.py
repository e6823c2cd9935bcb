import re
from typing import Dict

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
OTP_LENGTH = 6

def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.search(email))

def sanitize_otp(value: str) -> str:
    # Только цифры, не больше 6
    return re.sub(r"\D", "", value)[:OTP_LENGTH]

def is_valid_otp(otp: str) -> bool:
    return len(otp) == OTP_LENGTH and otp.isdigit()

def validate_signup_form(username: str, email: str, password: str, confirm_password: str) -> Dict[str, str]:
    """Проверка формы регистрации, возвращает ошибки по полям"""
    errors = {}

    if len(username) < 3:
        errors["username"] = "Username must be at least 3 characters"

    if not is_valid_email(email):
        errors["email"] = "Please enter a valid email"

    if len(password) < 6:
        errors["password"] = "Password must be at least 6 characters"

    if password != confirm_password:
        errors["confirmPassword"] = "Passwords do not match"

    return errors
