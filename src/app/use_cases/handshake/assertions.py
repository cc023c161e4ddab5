"""
Assertion and subject summary building shared by claim and poll.

Assertions are never cached: every call mints a new token with its own
validity window.
"""

from datetime import timedelta
from typing import List
from uuid import UUID

from config import ApplicationConfig
from src.app.services.token_issuer import ITokenIssuer
from src.domain.entities import SubjectType, Teacher
from .dtos import SubjectSummary


def build_subject_summary(teacher: Teacher, tenant_ids: List[UUID]) -> SubjectSummary:
    return SubjectSummary(
        id=str(teacher.id),
        external_id=teacher.external_id,
        name=teacher.name,
        email=teacher.email,
        tenant_refs=[str(tenant_id) for tenant_id in tenant_ids],
    )


def issue_assertion(
    token_issuer: ITokenIssuer,
    teacher: Teacher,
    tenant_ids: List[UUID],
    subject_type: SubjectType,
    session_id: str,
) -> str:
    claims = {
        "teacher_id": str(teacher.id),
        "external_id": teacher.external_id,
        "email": teacher.email,
        "tenant_ids": [str(tenant_id) for tenant_id in tenant_ids],
        "subject_type": subject_type.value,
        "session_id": session_id,
    }
    return token_issuer.issue(
        str(teacher.id),
        claims,
        timedelta(hours=ApplicationConfig.ASSERTION_TTL_HOURS),
    )
