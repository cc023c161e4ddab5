from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.adapter.services import qr_code
from src.api.error import ClientError, ServerError
from src.app.services.token_issuer import ITokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.handshake import (
    ClaimSessionCommand,
    ClaimSessionResponse,
    ClaimSessionUseCase,
    CreateSessionCommand,
    CreateSessionResponse,
    CreateSessionUseCase,
    PollSessionResponse,
    PollSessionUseCase,
)
from src.depends import get_token_issuer, get_unit_of_work
from src.domain.entities import SubjectType
from src.libs.result import Error

router = APIRouter(prefix="/web-session", tags=["Handshake"])


class CreateSessionRequest(BaseModel):
    """Web client request for a new QR session"""

    model_config = ConfigDict(populate_by_name=True)

    subject_type: SubjectType = Field(
        SubjectType.teacher,
        validation_alias=AliasChoices("subjectType", "userType", "subject_type"),
    )
    tenant_id: Optional[UUID] = Field(
        None, validation_alias=AliasChoices("tenantId", "companyId", "tenant_id")
    )


class ClaimSessionRequest(BaseModel):
    """
    Mobile app claim payload

    Blank strings count as missing; both are rejected with 400 before the
    use case runs.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    session_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("sessionId", "session_id")
    )
    external_subject_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("externalSubjectId", "teacherId", "external_subject_id"),
    )
    device_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("deviceId", "device_id")
    )


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateSessionResponse,
    response_model_exclude_none=True,
)
async def create_session(
    request: Optional[CreateSessionRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create QR Session

    Starts a pending session for the web client and returns the QR payload
    (plus a rendered SVG of it) to display. The session expires after
    SESSION_TTL_SECONDS if nobody claims it.

    Raises:
        - 400 Bad Request: Invalid subject type or tenant id
        - 500 Internal Server Error: Storage unavailable
    """
    request = request or CreateSessionRequest()
    command = CreateSessionCommand(
        subject_type=request.subject_type, tenant_id=request.tenant_id
    )

    use_case = CreateSessionUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        raise ServerError(result.error)

    response = result.value
    response.qr_code = qr_code.encode(response.qr_payload)
    return response


@router.post(
    "/authenticate",
    status_code=status.HTTP_200_OK,
    response_model=ClaimSessionResponse,
)
async def authenticate(
    body: ClaimSessionRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
):
    """
    Claim QR Session (mobile app)

    Binds the scanned session to the teacher and device, associates the
    teacher with the session's tenant, and returns a signed assertion.

    Raises:
        - 400 Bad Request: sessionId or externalSubjectId missing
        - 404 Not Found: SUBJECT_NOT_FOUND, SESSION_NOT_FOUND
        - 500 Internal Server Error: Storage unavailable
    """
    command = ClaimSessionCommand(
        session_id=body.session_id,
        external_id=body.external_subject_id,
        device_id=body.device_id or None,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    use_case = ClaimSessionUseCase(uow, token_issuer)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("SUBJECT_NOT_FOUND", "SESSION_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get(
    "/check-auth",
    status_code=status.HTTP_200_OK,
    response_model=PollSessionResponse,
    response_model_exclude_none=True,
)
async def check_auth(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
):
    """
    Poll QR Session (web client)

    Returns authenticated=false while the session is pending. Once claimed,
    returns the teacher, the session and a freshly minted assertion.

    Raises:
        - 400 Bad Request: sessionId missing
        - 404 Not Found: Session absent or expired
        - 500 Internal Server Error: Storage unavailable
    """
    if not session_id or not session_id.strip():
        raise ClientError(Error("VALIDATION_ERROR", "Session ID is required"))

    use_case = PollSessionUseCase(uow, token_issuer)
    result = await use_case.execute(session_id.strip())

    if result.is_err():
        error = result.error
        if error.code in ("SESSION_NOT_FOUND", "SUBJECT_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
