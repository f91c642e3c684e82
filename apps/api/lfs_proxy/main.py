from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from starlette.types import Receive, Scope, Send

from lfs_proxy.config import get_cors_allow_origins, get_static_dir
from lfs_proxy.routers import handle_lfs_error, handle_validation_error, lfs_batch_router
from lfs_proxy.services.endpoint_config import BATCH_SUFFIX
from lfs_proxy.services.errors import LFSError


class AssetFiles(StaticFiles):
    """Static asset server that never answers for batch paths.

    Methods without a batch route (TRACE, WebDAV verbs, ...) fall through the
    router to this mount; they still get the batch endpoint's 405.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].endswith(BATCH_SUFFIX):
            response = Response(status_code=405, headers={"Allow": "POST"})
            await response(scope, receive, send)
            return
        await super().__call__(scope, receive, send)


def create_app(*, static_dir: str | None = None) -> FastAPI:
    # Docs routes are disabled so every non-batch path reaches the asset server.
    app = FastAPI(
        title="LFS S3 Proxy",
        description="Git LFS batch API → presigned S3 URLs",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    allow_origins = get_cors_allow_origins()
    if allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(LFSError, handle_lfs_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.include_router(lfs_batch_router)

    assets_dir = static_dir or get_static_dir()
    if assets_dir:
        app.mount("/", AssetFiles(directory=assets_dir, html=True), name="assets")

    return app


app = create_app()
