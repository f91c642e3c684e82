from lfs_proxy.schemas.batch import (
    LFS_MEDIA_TYPE,
    SUPPORTED_HASH_ALGO,
    BatchRequest,
    BatchResponse,
    BatchResponseObject,
    ErrorResponse,
    LFSObject,
    SignedAction,
)
from lfs_proxy.schemas.store import StoreOptions, StoreTarget

__all__ = [
    "LFS_MEDIA_TYPE",
    "SUPPORTED_HASH_ALGO",
    "BatchRequest",
    "BatchResponse",
    "BatchResponseObject",
    "ErrorResponse",
    "LFSObject",
    "SignedAction",
    "StoreOptions",
    "StoreTarget",
]
