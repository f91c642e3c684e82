import base64
import binascii
from dataclasses import dataclass

from lfs_proxy.services.errors import AuthMalformedError, AuthMissingError


@dataclass(frozen=True)
class Credentials:
    user: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(user={self.user!r}, password='***')"


def parse_basic_authorization(header: str | None) -> Credentials:
    """Decode an HTTP Basic ``Authorization`` header into a credential pair.

    The password is everything after the first ``:``, so it may itself contain
    colons.
    """
    if not header:
        raise AuthMissingError()

    scheme, _, encoded = header.partition(" ")
    encoded = encoded.strip()
    if scheme != "Basic" or not encoded:
        raise AuthMalformedError("Authorization must use the Basic scheme")

    # Padding is optional, as with browser atob().
    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        decoded = base64.b64decode(padded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise AuthMalformedError("Authorization payload is not valid base64 UTF-8") from exc

    user, sep, password = decoded.partition(":")
    if not sep:
        raise AuthMalformedError("Authorization payload has no ':' separator")
    return Credentials(user=user, password=password)
