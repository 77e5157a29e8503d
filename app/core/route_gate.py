"""
Route gate.

Denies role-restricted path prefixes before any handler runs. Paths outside
the configured prefixes pass through; the services still run their own
policy checks.
"""

from typing import Callable, FrozenSet, Optional, Sequence

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from app.core.logging import logger
from app.core.policy import Role
from app.core.security import subject_from_authorization
from app.shared.exceptions import StoreUnavailableException


ADMIN_ONLY: FrozenSet[Role] = frozenset({Role.ADMIN})
ASHA_OR_ADMIN: FrozenSet[Role] = frozenset({Role.ASHA, Role.ADMIN})


def _matches(path: str, prefixes: Sequence[str]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


def required_roles(
    path: str,
    admin_prefixes: Sequence[str],
    asha_prefixes: Sequence[str],
) -> Optional[FrozenSet[Role]]:
    """Return the roles allowed on ``path``, or None if the path is not gated."""
    if _matches(path, admin_prefixes):
        return ADMIN_ONLY
    if _matches(path, asha_prefixes):
        return ASHA_OR_ADMIN
    return None


def is_route_allowed(
    path: str,
    role: Optional[Role],
    admin_prefixes: Sequence[str],
    asha_prefixes: Sequence[str],
) -> bool:
    allowed = required_roles(path, admin_prefixes, asha_prefixes)
    return allowed is None or (role or Role.CITIZEN) in allowed


class RouteGateMiddleware(BaseHTTPMiddleware):
    """
    Resolve the caller's role from the role store and deny gated prefixes.

    ``role_store_provider`` is the FastAPI dependency that builds the role
    store; an override registered in ``app.dependency_overrides`` is honoured
    so the gate and the handlers always read the same store.
    """

    def __init__(
        self,
        app,
        role_store_provider: Callable,
        admin_prefixes: Sequence[str],
        asha_prefixes: Sequence[str],
        redirect_url: Optional[str] = None,
    ):
        super().__init__(app)
        self.role_store_provider = role_store_provider
        self.admin_prefixes = tuple(admin_prefixes)
        self.asha_prefixes = tuple(asha_prefixes)
        self.redirect_url = redirect_url

    async def _resolve_role(self, request: Request) -> Role:
        user_id = subject_from_authorization(request.headers.get("Authorization"))
        if user_id is None:
            return Role.CITIZEN

        overrides = getattr(request.app, "dependency_overrides", {})
        provider = overrides.get(self.role_store_provider, self.role_store_provider)
        return await provider().get_role(user_id)

    def _deny(self, request: Request, role: Role) -> Response:
        logger.warning(f"Route gate denied {request.method} {request.url.path} for role {role.value}")
        if self.redirect_url:
            return RedirectResponse(self.redirect_url, status_code=307)
        return JSONResponse(
            status_code=403,
            content={"detail": f"Role '{role.value}' is not allowed to access this route"},
        )

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if required_roles(path, self.admin_prefixes, self.asha_prefixes) is None:
            return await call_next(request)

        try:
            role = await self._resolve_role(request)
        except StoreUnavailableException as e:
            return JSONResponse(status_code=e.status_code, content={"detail": e.detail}, headers=e.headers)

        if not is_route_allowed(path, role, self.admin_prefixes, self.asha_prefixes):
            return self._deny(request, role)

        return await call_next(request)
