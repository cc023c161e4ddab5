from datetime import datetime

from src.domain.entities import SubjectType, WebSession

UNIT_TEST_SECRET = "unit-test-secret"
FIXED_NOW = datetime(2024, 3, 1, 9, 30, 0)


def make_web_session(**overrides) -> WebSession:
    values = {
        "subject_type": SubjectType.teacher,
        "is_active": False,
        "expires_at": datetime(2024, 3, 1, 9, 35, 0),
        "created_at": datetime(2024, 3, 1, 9, 30, 0),
        "last_activity_at": datetime(2024, 3, 1, 9, 30, 0),
    }
    values.update(overrides)
    return WebSession(**values)
