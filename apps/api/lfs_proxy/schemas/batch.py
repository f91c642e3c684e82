from pydantic import BaseModel, Field

LFS_MEDIA_TYPE = "application/vnd.git-lfs+json"
SUPPORTED_HASH_ALGO = "sha256"


class LFSObject(BaseModel):
    oid: str = Field(min_length=1)
    size: int = Field(ge=0)


class LFSRef(BaseModel):
    name: str


class BatchRequest(BaseModel):
    operation: str
    objects: list[LFSObject]
    hash_algo: str | None = SUPPORTED_HASH_ALGO
    transfers: list[str] | None = None
    ref: LFSRef | None = None


class SignedAction(BaseModel):
    href: str
    expires_in: int


class BatchResponseObject(BaseModel):
    oid: str
    size: int
    authenticated: bool = True
    actions: dict[str, SignedAction]


class BatchResponse(BaseModel):
    transfer: str = "basic"
    hash_algo: str = SUPPORTED_HASH_ALGO
    objects: list[BatchResponseObject]


class ErrorResponse(BaseModel):
    message: str
