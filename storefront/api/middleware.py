# storefront/api/middleware.py
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.services.access_gate import AccessGate, Outcome


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Bramka przed kazdym handlerem; identity trafia do request.state."""

    def __init__(self, app, gate: AccessGate):
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next):
        #rewokacja moze pytac redisa - poza petla zdarzen
        decision = await run_in_threadpool(
            self.gate.evaluate,
            request.method,
            request.url.path,
            request.headers.get("Authorization"),
        )

        if decision.outcome is Outcome.DENY_WITH_IDENTITY:
            return JSONResponse(
                {"success": False, "message": decision.reason},
                status_code=401,
                headers={"WWW-Authenticate": "Bearer"},
            )
        if decision.outcome is Outcome.DENY:
            return JSONResponse({"success": False, "message": decision.reason}, status_code=403)

        request.state.identity = decision.identity
        return await call_next(request)
