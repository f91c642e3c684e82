from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from lfs_proxy.schemas.store import StoreOptions, StoreTarget
from lfs_proxy.services.basic_auth import Credentials
from lfs_proxy.services.errors import InvalidStoreOptionsError
from lfs_proxy.services.s3_signer import build_object_url

BATCH_SUFFIX = "/objects/batch"


def split_store_path(path: str) -> list[str]:
    """Return the segments between the leading slash and ``objects/batch``."""
    if not path.endswith(BATCH_SUFFIX):
        raise ValueError(f"path must end with {BATCH_SUFFIX}")
    return path.split("/")[1:-2]


def parse_store_segments(segments: list[str]) -> tuple[dict[str, str], str]:
    overrides: dict[str, str] = {}
    bucket_index = 0
    for segment in segments:
        key, sep, value = segment.partition("=")
        if not sep:
            break
        overrides[unquote(key)] = unquote(value)
        bucket_index += 1
    return overrides, "/".join(segments[bucket_index:])


def build_store_options(credentials: Credentials, overrides: dict[str, str]) -> StoreOptions:
    seed: dict[str, str] = {
        "accessKeyId": credentials.user,
        "secretAccessKey": credentials.password,
    }
    for key, value in overrides.items():
        # Overrides may use either spelling of a field; drop the seeded alias so
        # the override is not shadowed by it.
        field = StoreOptions.model_fields.get(key)
        if field is not None and field.alias:
            seed.pop(field.alias, None)
        seed[key] = value

    try:
        return StoreOptions.model_validate(seed)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise InvalidStoreOptionsError(f"Invalid store options: {problems}") from exc


def resolve_store_target(path: str, credentials: Credentials) -> StoreTarget:
    overrides, bucket = parse_store_segments(split_store_path(path))
    options = build_store_options(credentials, overrides)
    if not bucket and not options.endpoint:
        raise InvalidStoreOptionsError("No bucket path or endpoint given to sign against")
    try:
        urlsplit(build_object_url(bucket=bucket, object_id="", endpoint=options.endpoint)).port
    except ValueError as exc:
        raise InvalidStoreOptionsError(f"Invalid store host: {exc}") from exc
    return StoreTarget(options=options, bucket=bucket)
