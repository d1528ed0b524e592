"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Captures request/response data for both services and sends structured
events to Axiom. Logs: service, endpoint, method, data (body/params),
status code, duration, error reason. Sensitive fields and personal
contact fields are masked automatically.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Credential and personal-contact fields masked in logged bodies
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential|phone|address|zip_code)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging (liveness probes and docs)
_SKIP_PATHS = {
    "/health",
    "/api/users/health",
    "/api/products/health",
    "/docs",
    "/redoc",
    "/openapi.json",
}


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _service_for(path: str) -> str:
    """요청 경로로 서비스 이름을 판별합니다 (Map a request path to its service)."""
    if path.startswith("/api/users"):
        return "user-service"
    if path.startswith(("/api/products", "/api/categories")):
        return "product-service"
    return "gateway"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_json_body(self, request: Request) -> Any:
        body_bytes = await request.body()
        if not body_bytes:
            return None
        try:
            return _mask_dict(json.loads(body_bytes))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 제외 경로 또는 Axiom 미설정시 패스스루 — Skip excluded paths or unconfigured Axiom
        if request.url.path in _SKIP_PATHS or not self._client:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            request_body = await self._read_json_body(request)

        error_detail: Any = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    error_detail = json.loads(resp_body).get("detail")
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "service": _service_for(path),
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if request.query_params:
                log_event["query_params"] = _mask_dict(dict(request.query_params))
            if request.path_params:
                log_event["path_params"] = request.path_params
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail is not None:
                log_event["error"] = error_detail

            # 로깅 실패는 요청 처리에 영향주지 않음 — Ingest failures never fail the request
            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception as ingest_exc:  # noqa: BLE001
                logger.warning("Axiom ingest failed: %s", ingest_exc)

        return response
