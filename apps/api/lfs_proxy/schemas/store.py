from pydantic import BaseModel, ConfigDict, Field

from lfs_proxy.config import MAX_EXPIRY_SECONDS


class StoreOptions(BaseModel):
    """Connection options for the target object store.

    Seeded from the Basic credentials and overridden by ``key=value`` path
    segments. Keys use either the field name or the camelCase alias; anything
    else lands in ``model_extra`` and is carried along without effect.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    access_key_id: str = Field(alias="accessKeyId")
    secret_access_key: str = Field(alias="secretAccessKey", repr=False)
    session_token: str | None = Field(default=None, alias="sessionToken", repr=False)
    region: str | None = None
    service: str = "s3"
    endpoint: str | None = None
    expiry: int | None = Field(default=None, ge=1, le=MAX_EXPIRY_SECONDS)

    @property
    def unknown_keys(self) -> list[str]:
        return sorted((self.model_extra or {}).keys())


class StoreTarget(BaseModel):
    options: StoreOptions
    bucket: str
