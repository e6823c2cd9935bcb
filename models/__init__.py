#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
amarTasks - Models Package
Client-side data models and enums
"""

from .enums import (
    TaskStatus,
    SignupStep,
    SignInPhase
)

from .task import (
    TaskEntry,
    WIRE_TO_ENTRY
)

__all__ = [
    # Enums
    'TaskStatus',
    'SignupStep',
    'SignInPhase',

    # Task models
    'TaskEntry',
    'WIRE_TO_ENTRY'
]
