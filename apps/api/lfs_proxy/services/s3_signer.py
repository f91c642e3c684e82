from __future__ import annotations

import logging
import re
import sys
from urllib.parse import quote, urlsplit

from botocore.auth import S3SigV4QueryAuth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials as BotoCredentials
from botocore.exceptions import BotoCoreError

from lfs_proxy.config import get_log_level
from lfs_proxy.schemas.store import StoreOptions
from lfs_proxy.services.errors import SigningError

LOGLEVEL = get_log_level()
logging.basicConfig(level=LOGLEVEL, stream=sys.stdout)
logger = logging.getLogger("lfs-signer")
logger.setLevel(LOGLEVEL)

METHOD_FOR_OPERATION = {
    "upload": "PUT",
    "download": "GET",
}
DEFAULT_REGION = "us-east-1"

_R2_SUFFIX = ".r2.cloudflarestorage.com"
_BACKBLAZE_HOST = re.compile(r"^(?:[^.]{1,63}\.)?s3\.([^.]{1,63})\.backblazeb2\.com$")
_AMAZONAWS_HOST = re.compile(r"([^.]{1,63})\.(?:([^.]{0,63})\.)?amazonaws\.com(?:\.cn)?$")


def build_object_url(*, bucket: str, object_id: str, endpoint: str | None = None) -> str:
    """Return the unsigned target URL for one object.

    Without an endpoint the bucket path carries the host (virtual-host style,
    e.g. ``my-bucket.s3.eu-west-1.amazonaws.com/prefix``). With an endpoint the
    bucket path is appended to it (path style).
    """
    if endpoint:
        base = endpoint.rstrip("/")
        if not base.startswith(("http://", "https://")):
            base = f"https://{base}"
        if bucket:
            base = f"{base}/{bucket}"
    else:
        base = f"https://{bucket}"
    return f"{base}/{quote(object_id, safe='')}"


def guess_region(host: str) -> str:
    hostname = host.split(":", 1)[0].lower()
    if hostname.endswith(_R2_SUFFIX):
        return "auto"

    backblaze = _BACKBLAZE_HOST.match(hostname)
    if backblaze:
        return backblaze.group(1)

    amazon = _AMAZONAWS_HOST.search(hostname.replace("dualstack.", ""))
    if amazon is None:
        return DEFAULT_REGION

    service, region = amazon.group(1), amazon.group(2) or ""
    if region == "us-gov":
        return "us-gov-west-1"
    if region.startswith("s3-") and region != "s3-accelerate":
        return region[3:]
    if region in ("", "s3", "s3-accelerate"):
        # Legacy global form: s3-<region>.amazonaws.com
        if service.startswith("s3-") and service != "s3-accelerate":
            return service[3:]
        return DEFAULT_REGION
    return region


def generate_presigned_object_url(
    *,
    options: StoreOptions,
    bucket: str,
    object_id: str,
    method: str,
    expires_in: int,
) -> str:
    if method not in METHOD_FOR_OPERATION.values():
        raise ValueError(f"Unsupported signing method: {method!r}")

    url = build_object_url(bucket=bucket, object_id=object_id, endpoint=options.endpoint)
    region = options.region or guess_region(urlsplit(url).netloc)
    credentials = BotoCredentials(
        options.access_key_id,
        options.secret_access_key,
        options.session_token,
    )
    auth = S3SigV4QueryAuth(credentials, options.service, region, expires=expires_in)
    request = AWSRequest(method=method, url=url)
    try:
        auth.add_auth(request)
    except (BotoCoreError, ValueError) as exc:
        logger.warning("Failed to sign %s for object %s: %s", method, object_id, exc)
        raise SigningError(f"Failed to generate presigned URL: {exc}") from exc
    return request.url
