"""
Handshake Use Cases

Create, claim and poll QR login sessions.
"""

from .create_session_use_case import CreateSessionUseCase
from .claim_session_use_case import ClaimSessionUseCase, DEFAULT_DEVICE_ID
from .poll_session_use_case import PollSessionUseCase
from .dtos import (
    ClaimSessionCommand,
    ClaimSessionResponse,
    CreateSessionCommand,
    CreateSessionResponse,
    PollSessionResponse,
    SessionInfo,
    SubjectSummary,
)

__all__ = [
    # Use Cases
    "CreateSessionUseCase",
    "ClaimSessionUseCase",
    "PollSessionUseCase",
    # DTOs - Commands
    "CreateSessionCommand",
    "ClaimSessionCommand",
    # DTOs - Responses
    "CreateSessionResponse",
    "ClaimSessionResponse",
    "PollSessionResponse",
    # DTOs - Nested Models
    "SessionInfo",
    "SubjectSummary",
    # Constants
    "DEFAULT_DEVICE_ID",
]
