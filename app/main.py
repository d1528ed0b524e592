"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Two independent services are built from the same template:

    - product_app: 상품 카탈로그 서비스 (Product catalog: /api/products, /api/categories)
    - user_app: 사용자 프로필 서비스 (User profiles: /api/users)
    - app: 로컬 개발용 통합 앱 (Both surfaces in one process, for local development)

Run one with ``uvicorn app.main:product_app`` or ``uvicorn app.main:user_app``.
"""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.api.catalog import catalog_router
from app.api.profiles import profile_router
from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.schemas.common import FieldViolation, HealthResponse

# 표준 로깅 설정 — Root logging configuration for service-level logs
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 파싱 오류를 필드별 위반 목록으로 변환합니다.

    Render FastAPI request parsing errors (wrong JSON types, missing path or
    query parameters) in the same ``[{field, message}]`` shape used by the
    explicit validators.
    """
    violations: list[FieldViolation] = [
        FieldViolation(
            field=".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
            or "body",
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    logger.warning("Request validation failed on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=422,
        content={"detail": [v.model_dump() for v in violations]},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """제약 조건 위반을 409로 변환합니다.

    A unique or foreign-key constraint rejected the write, typically because
    a concurrent request claimed the same key after the service checked it.
    The request session is rolled back when ``get_db`` closes it.
    """
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content={"detail": "Request conflicts with an existing record"},
    )


def _build_app(title: str, routers: list[APIRouter]) -> FastAPI:
    """미들웨어와 라우터를 등록한 FastAPI 앱을 생성합니다.

    Create a FastAPI application with the shared middleware stack and the
    given routers mounted under ``/api``.

    Args:
        title: OpenAPI 문서 제목 (Application title)
        routers: /api 하위에 등록할 라우터 (Routers mounted under /api)

    Returns:
        FastAPI: 구성된 애플리케이션 (Configured application)
    """
    application: FastAPI = FastAPI(
        title=title,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
    application.add_middleware(AxiomLoggingMiddleware)

    # CORS 미들웨어 — 로컬 개발 출처 허용 목록 (Fixed allow-list of local dev origins)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=["*"],
        expose_headers=settings.CORS_EXPOSE_HEADERS,
        max_age=settings.CORS_MAX_AGE,
    )

    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(IntegrityError, integrity_error_handler)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """서버 상태 확인 엔드포인트.

        Health check endpoint for load balancers and monitoring.
        """
        return HealthResponse(status="ok")

    for router in routers:
        application.include_router(router, prefix="/api")

    return application


product_app: FastAPI = _build_app(f"{settings.APP_NAME} — Product Service", [catalog_router])
user_app: FastAPI = _build_app(f"{settings.APP_NAME} — User Service", [profile_router])
app: FastAPI = _build_app(settings.APP_NAME, [catalog_router, profile_router])
