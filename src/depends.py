from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.token_issuer import ITokenIssuer
from src.libs.result import Error

security = HTTPBearer(auto_error=False)


async def get_unit_of_work(request: Request):
    async with request.app.state.database.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_issuer(request: Request) -> ITokenIssuer:
    return request.app.state.token_issuer


async def get_current_subject(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
) -> dict:
    """
    Dependency to extract and verify the assertion from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded assertion claims (sub, teacher_id, external_id, tenant_ids, ...)

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("INVALID_TOKEN", "Authorization bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = token_issuer.verify(credentials.credentials)
    if payload is None:
        raise ClientError(
            Error("INVALID_TOKEN", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload
