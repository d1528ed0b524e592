"""공통 Pydantic 스키마 정의.

Common Pydantic schema definitions shared by both services.
"""

from pydantic import BaseModel


class FieldViolation(BaseModel):
    """필드 단위 검증 위반.

    A single field-level validation violation.

    Attributes:
        field: 위반이 발생한 필드명 (JSON field name)
        message: 사람이 읽을 수 있는 메시지 (Human-readable message)
    """

    field: str
    message: str


class HealthResponse(BaseModel):
    """서버 상태 응답 (Liveness probe response)."""

    status: str
