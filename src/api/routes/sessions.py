from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.sessions import (
    ActiveSessionInfo,
    DisconnectSessionResponse,
    ManageSessionsUseCase,
    VerifySessionResponse,
)
from src.depends import get_current_subject, get_unit_of_work
from src.libs.result import Error

router = APIRouter(prefix="/web-session", tags=["Sessions"])


class SessionIdRequest(BaseModel):
    """Request naming a single web session"""

    model_config = ConfigDict(str_strip_whitespace=True)

    session_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("sessionId", "session_id")
    )


def _teacher_id(current_subject: dict) -> UUID:
    try:
        return UUID(current_subject["teacher_id"])
    except (KeyError, TypeError, ValueError):
        raise ClientError(
            Error("INVALID_TOKEN", "Token does not identify a teacher"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


@router.get(
    "/active",
    status_code=status.HTTP_200_OK,
    response_model=List[ActiveSessionInfo],
)
async def list_active_sessions(
    current_subject: dict = Depends(get_current_subject),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Active Sessions

    Lists the caller's active web sessions across all devices.

    Raises:
        - 401 Unauthorized: Missing or invalid assertion
        - 404 Not Found: Teacher no longer exists
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.list_active_sessions(_teacher_id(current_subject))

    if result.is_err():
        error = result.error
        if error.code == "SUBJECT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/verify",
    status_code=status.HTTP_200_OK,
    response_model=VerifySessionResponse,
)
async def verify_session(
    request: SessionIdRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Verify Session

    Confirms that a web session is still active and unexpired.

    Raises:
        - 400 Bad Request: sessionId missing
        - 404 Not Found: Session absent, pending or expired
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.verify_session(request.session_id)

    if result.is_err():
        error = result.error
        if error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/disconnect",
    status_code=status.HTTP_200_OK,
    response_model=DisconnectSessionResponse,
)
async def disconnect_session(
    request: SessionIdRequest,
    current_subject: dict = Depends(get_current_subject),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Disconnect Session

    Ends one of the caller's sessions (logout of a single device).

    Raises:
        - 401 Unauthorized: Missing or invalid assertion
        - 403 Forbidden: Session belongs to another teacher
        - 404 Not Found: Session absent or expired
    """
    use_case = ManageSessionsUseCase(uow)
    result = await use_case.disconnect_session(
        request.session_id, _teacher_id(current_subject)
    )

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
