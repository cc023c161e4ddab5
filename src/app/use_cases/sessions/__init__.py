"""
Session Management Use Cases
"""

from .manage_sessions_use_case import ManageSessionsUseCase
from .dtos import ActiveSessionInfo, DisconnectSessionResponse, VerifySessionResponse

__all__ = [
    "ManageSessionsUseCase",
    "ActiveSessionInfo",
    "DisconnectSessionResponse",
    "VerifySessionResponse",
]
