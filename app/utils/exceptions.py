"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error taxonomy
shared by both services. Services raise them directly; FastAPI renders
them as ``{"detail": ...}`` responses.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("User not found with id: 1")
    raise DuplicateError("User with email a@b.com already exists")
"""

from fastapi import HTTPException, status

from app.schemas.common import FieldViolation


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested identifier or key has no matching record.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 보조 키 중복 시 사용.

    409 Conflict exception.
    Raised when a create or update would violate a secondary-key uniqueness
    rule (email, owning-user reference, SKU, category name).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ValidationFailedError(HTTPException):
    """422 Unprocessable Entity 예외 — 경계 검증 실패 시 사용.

    422 validation failure raised at the router boundary, before any
    business logic runs. The detail is the list of field-level violations
    returned by the validators in ``app.utils.validators``.

    Args:
        violations: 필드별 위반 목록 (Field-level violations, non-empty)
    """

    def __init__(self, violations: list[FieldViolation]) -> None:
        self.violations: list[FieldViolation] = violations
        super().__init__(
            status_code=422,
            detail=[v.model_dump() for v in violations],
        )


def raise_for_violations(violations: list[FieldViolation]) -> None:
    """위반 목록이 비어 있지 않으면 ValidationFailedError를 발생시킵니다.

    Raise ValidationFailedError when the violation list is non-empty.
    """
    if violations:
        raise ValidationFailedError(violations)
