"""CORS - preflight short-circuit and fixed header set on every response.

Invariants:
    - OPTIONS on any path returns 200 with an empty body before routing,
      so no dependency (and no database session) is ever created for it
    - Every response that passes through the middleware stack gets CORS_HEADERS
"""

from fastapi import FastAPI, Request, Response

from freezefit.api.envelope import CORS_HEADERS


def register_cors(app: FastAPI) -> None:
    """Install the CORS middleware on the FastAPI app."""

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
