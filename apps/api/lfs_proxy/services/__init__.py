from lfs_proxy.services.basic_auth import Credentials, parse_basic_authorization
from lfs_proxy.services.endpoint_config import (
    build_store_options,
    parse_store_segments,
    resolve_store_target,
    split_store_path,
)
from lfs_proxy.services.errors import (
    AuthMalformedError,
    AuthMissingError,
    InvalidStoreOptionsError,
    LFSError,
    NotAcceptableError,
    SigningError,
    UnsupportedHashAlgorithmError,
    UnsupportedOperationError,
)
from lfs_proxy.services.lfs_batch import handle_batch_request, resolve_expiry, resolve_method
from lfs_proxy.services.s3_signer import (
    METHOD_FOR_OPERATION,
    build_object_url,
    generate_presigned_object_url,
    guess_region,
)

__all__ = [
    "Credentials",
    "parse_basic_authorization",
    "build_store_options",
    "parse_store_segments",
    "resolve_store_target",
    "split_store_path",
    "LFSError",
    "AuthMalformedError",
    "AuthMissingError",
    "InvalidStoreOptionsError",
    "NotAcceptableError",
    "SigningError",
    "UnsupportedHashAlgorithmError",
    "UnsupportedOperationError",
    "handle_batch_request",
    "resolve_expiry",
    "resolve_method",
    "METHOD_FOR_OPERATION",
    "build_object_url",
    "generate_presigned_object_url",
    "guess_region",
]
