import logging
import sys

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from lfs_proxy.config import (
    get_default_expiry,
    get_enforce_media_type,
    get_log_level,
    get_signing_max_workers,
)
from lfs_proxy.schemas.batch import LFS_MEDIA_TYPE, BatchRequest, ErrorResponse
from lfs_proxy.schemas.store import StoreTarget
from lfs_proxy.services.basic_auth import Credentials, parse_basic_authorization
from lfs_proxy.services.endpoint_config import BATCH_SUFFIX, resolve_store_target
from lfs_proxy.services.errors import LFSError, NotAcceptableError
from lfs_proxy.services.lfs_batch import handle_batch_request

LOGLEVEL = get_log_level()
logging.basicConfig(level=LOGLEVEL, stream=sys.stdout)
logger = logging.getLogger("lfs-proxy")
logger.setLevel(LOGLEVEL)

router = APIRouter(tags=["lfs-batch"])
_REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


class LFSJSONResponse(JSONResponse):
    media_type = LFS_MEDIA_TYPE


def _store_path(request: Request) -> str:
    # Option segments are percent-decoded individually, so work on the raw path.
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.decode("latin-1").split("?", 1)[0]
        if path.endswith(BATCH_SUFFIX):
            return path
    return request.url.path


def require_lfs_media_type(request: Request) -> None:
    if not get_enforce_media_type():
        return
    accept = request.headers.get("accept", "")
    content_type = request.headers.get("content-type", "")
    if not accept.startswith(LFS_MEDIA_TYPE) or not content_type.startswith(LFS_MEDIA_TYPE):
        raise NotAcceptableError(f"Accept and Content-Type must be {LFS_MEDIA_TYPE}")


def require_credentials(authorization: str | None = Header(default=None)) -> Credentials:
    return parse_basic_authorization(authorization)


def require_store_target(
    request: Request,
    credentials: Credentials = Depends(require_credentials),
) -> StoreTarget:
    return resolve_store_target(_store_path(request), credentials)


@router.post(
    "/objects/batch",
    response_class=LFSJSONResponse,
    dependencies=[Depends(require_lfs_media_type)],
)
@router.post(
    "/{store_path:path}/objects/batch",
    response_class=LFSJSONResponse,
    dependencies=[Depends(require_lfs_media_type)],
)
def create_batch(
    payload: BatchRequest,
    target: StoreTarget = Depends(require_store_target),
) -> LFSJSONResponse:
    response = handle_batch_request(
        payload,
        target=target,
        default_expiry=get_default_expiry(),
        max_workers=get_signing_max_workers(),
    )
    return LFSJSONResponse(
        content=response.model_dump(),
        headers={"Cache-Control": "no-store"},
    )


@router.api_route("/objects/batch", methods=_REJECTED_METHODS, include_in_schema=False)
@router.api_route("/{store_path:path}/objects/batch", methods=_REJECTED_METHODS, include_in_schema=False)
def reject_batch_method() -> Response:
    return Response(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, headers={"Allow": "POST"})


async def handle_lfs_error(request: Request, exc: LFSError) -> Response:
    # Paths can carry session tokens; never log them.
    logger.warning("%s batch call rejected with %d: %s", request.method, exc.status_code, exc)
    if not exc.render_body:
        return Response(status_code=exc.status_code, headers=exc.headers)
    return LFSJSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message or str(exc)).model_dump(),
        headers=exc.headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning("%s batch call rejected with 422: %s", request.method, problems)
    return LFSJSONResponse(
        status_code=422,
        content=ErrorResponse(message=f"Invalid batch request: {problems}").model_dump(),
    )
