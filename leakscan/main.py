from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from leakscan import settings
from leakscan.routers import analysis, demo, files, proposal
from leakscan.routers.auth import router as auth_router
from leakscan.storage import MemStorage
from leakscan.utils.llm_client import LLMClient
from leakscan.utils.logs import log


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_app(storage: MemStorage | None = None, llm=None) -> FastAPI:
    """Build the API with its own store and language-model client.

    Both live on `app.state` for the lifetime of the process and reach the
    routes through the dependencies in `leakscan.deps`.
    """
    app = FastAPI(title="LeakScan MSP Analysis API", version="1.0")
    app.state.storage = storage if storage is not None else MemStorage()
    app.state.llm = llm if llm is not None else LLMClient()

    app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET)
    app.add_middleware(CORSMiddleware, allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
                       allow_methods=["*"], allow_headers=["*"])

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(files.router)
    app.include_router(analysis.router)
    app.include_router(proposal.router)
    app.include_router(demo.router)

    @app.middleware("http")
    async def logger(request: Request, call_next):
        started = _utcnow()
        try:
            resp = await call_next(request)
            log(request.method, request.url.path, resp.status_code, started)
            return resp
        except Exception as e:
            log("ERR", request.method, request.url.path, e)
            raise

    @app.get("/health")
    def health():
        return {"ok": True, "time": _utcnow()}

    return app


app = create_app()
