from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt


def decode_jwt_token(token: str) -> dict:
    """
    Read the claims of a bearer token.

    The signature is not verified: the backend is the only party holding the
    signing key, the client only needs ``sub``, ``role`` and ``exp``.

    Args:
        - token (str): The encoded JWT.

    Returns:
        - dict: The token payload.

    Raises:
        - jwt.InvalidTokenError: If the token is not a well-formed JWT.
    """
    return jwt.decode(token, options={"verify_signature": False, "verify_exp": False})


@dataclass
class Credentials:
    """Bearer credentials handed to the API client at construction time."""

    token: Optional[str] = None

    def authorization_header(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def claims(self) -> dict:
        if not self.token:
            return {}
        try:
            return decode_jwt_token(self.token)
        except jwt.InvalidTokenError:
            return {}

    @property
    def user_id(self) -> Optional[str]:
        sub = self.claims().get("sub")
        return str(sub) if sub is not None else None

    @property
    def role(self) -> Optional[str]:
        return self.claims().get("role")

    def expires_at(self) -> Optional[datetime]:
        exp = self.claims().get("exp")
        if exp is None:
            return None
        return datetime.fromtimestamp(int(exp), tz=timezone.utc)

    def is_expired(self, leeway: timedelta = timedelta(seconds=0)) -> bool:
        """Opaque tokens and tokens without ``exp`` never count as expired."""
        expires_at = self.expires_at()
        if expires_at is None:
            return False
        return datetime.now(timezone.utc) + leeway >= expires_at

    def clear(self) -> None:
        self.token = None
