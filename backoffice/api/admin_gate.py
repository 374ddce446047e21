"""Admin Gate Middleware — denies the whole admin prefix before routing.

Invariants:
    - Any request under /api/v1/admin from a caller the gate rejects gets the
      unknown-route 404, whatever the method or trailing slash
    - Routing never answers a denied caller with 405 (Allow) or 307 (Location)
    - Authorized callers pass through; handlers still gate every operation
"""

import logging

from fastapi import FastAPI, Request

from backoffice.api.deps import identity_from_headers
from backoffice.api.error_handlers import not_found_response

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/api/v1/admin"


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def register_admin_gate(app: FastAPI) -> None:

    @app.middleware("http")
    async def deny_unauthorized_admin_requests(request: Request, call_next):
        if is_admin_path(request.url.path):
            gate = request.app.state.authorization_gate
            if not gate.is_authorized(identity_from_headers(request.headers)):
                logger.warning(
                    "Admin access denied",
                    extra={"error_code": "NOT_FOUND", "path": request.url.path},
                )
                return not_found_response()
        return await call_next(request)
