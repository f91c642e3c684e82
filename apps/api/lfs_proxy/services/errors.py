class LFSError(Exception):
    """Terminal rejection of a batch call, rendered as a single HTTP response."""

    status_code = 500
    render_body = True

    def __init__(self, message: str | None = None, *, headers: dict[str, str] | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message
        self.headers = headers or {}


class AuthMissingError(LFSError):
    status_code = 401
    render_body = False

    def __init__(self) -> None:
        super().__init__(headers={"LFS-Authenticate": 'Basic realm="Git LFS"'})


class AuthMalformedError(LFSError):
    status_code = 400
    render_body = False


class InvalidStoreOptionsError(LFSError):
    status_code = 400


class NotAcceptableError(LFSError):
    status_code = 406


class UnsupportedHashAlgorithmError(LFSError):
    status_code = 409

    def __init__(self, hash_algo: str) -> None:
        super().__init__(
            f"Hash algorithm '{hash_algo}' is not supported. Only 'sha256' is currently supported."
        )
        self.hash_algo = hash_algo


class UnsupportedOperationError(LFSError):
    status_code = 422

    def __init__(self, operation: str) -> None:
        super().__init__(f"Operation '{operation}' is not supported. Use 'upload' or 'download'.")
        self.operation = operation


class SigningError(LFSError):
    status_code = 502
