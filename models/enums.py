# models/enums.py

from enum import Enum

class TaskStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"

class SignupStep(str, Enum):
    SIGNUP = "signup"
    OTP = "otp"

class SignInPhase(str, Enum):
    """Фазы входа после подтверждения OTP"""
    IDLE = "idle"
    VERIFIED = "verified"
    TRANSITIONING = "transitioning"
    SIGNED_IN = "signed_in"
