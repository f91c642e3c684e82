from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor

from lfs_proxy.config import DEFAULT_EXPIRY_SECONDS, get_log_level
from lfs_proxy.schemas.batch import (
    SUPPORTED_HASH_ALGO,
    BatchRequest,
    BatchResponse,
    BatchResponseObject,
    LFSObject,
    SignedAction,
)
from lfs_proxy.schemas.store import StoreTarget
from lfs_proxy.services.errors import UnsupportedHashAlgorithmError, UnsupportedOperationError
from lfs_proxy.services.s3_signer import METHOD_FOR_OPERATION, generate_presigned_object_url

LOGLEVEL = get_log_level()
logging.basicConfig(level=LOGLEVEL, stream=sys.stdout)
logger = logging.getLogger("lfs-batch")
logger.setLevel(LOGLEVEL)


def resolve_method(operation: str) -> str:
    method = METHOD_FOR_OPERATION.get(operation)
    if method is None:
        raise UnsupportedOperationError(operation)
    return method


def resolve_expiry(requested: int | None, default: int | None) -> int:
    return requested or default or DEFAULT_EXPIRY_SECONDS


def handle_batch_request(
    payload: BatchRequest,
    *,
    target: StoreTarget,
    default_expiry: int | None,
    max_workers: int = 8,
) -> BatchResponse:
    """Sign one action per requested object and assemble the batch response.

    Validation happens before any signing, so a rejected request never
    produces a partial batch. Objects are signed concurrently; the response
    keeps the request order.
    """
    if payload.hash_algo != SUPPORTED_HASH_ALGO:
        logger.warning("Rejected batch with hash algorithm %r", payload.hash_algo)
        raise UnsupportedHashAlgorithmError("null" if payload.hash_algo is None else payload.hash_algo)

    try:
        method = resolve_method(payload.operation)
    except UnsupportedOperationError:
        logger.warning("Rejected batch with operation %r", payload.operation)
        raise

    options = target.options
    if options.unknown_keys:
        logger.debug("Ignoring unrecognised store option keys: %s", ", ".join(options.unknown_keys))

    expires_in = resolve_expiry(options.expiry, default_expiry)
    logger.info(
        "Signing %d object(s) for %s on %r",
        len(payload.objects),
        payload.operation,
        target.bucket,
    )

    def _sign(obj: LFSObject) -> BatchResponseObject:
        href = generate_presigned_object_url(
            options=options,
            bucket=target.bucket,
            object_id=obj.oid,
            method=method,
            expires_in=expires_in,
        )
        return BatchResponseObject(
            oid=obj.oid,
            size=obj.size,
            authenticated=True,
            actions={payload.operation: SignedAction(href=href, expires_in=expires_in)},
        )

    if not payload.objects:
        return BatchResponse(objects=[])

    workers = min(len(payload.objects), max(1, max_workers))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        objects = list(executor.map(_sign, payload.objects))

    return BatchResponse(objects=objects)
