"""
Access Gate
Email whitelist check against the authenticated principal.

This is the authoritative check. The UI runs the same comparison only to
decide what to render.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from app.domain.errors import AuthorizationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Identity asserted by the upstream identity provider"""
    email: str
    name: Optional[str] = None


@dataclass(frozen=True)
class AccessConfig:
    """Startup access configuration"""
    authorized_users: FrozenSet[str]

    @staticmethod
    def from_csv(raw: Optional[str]) -> "AccessConfig":
        """Parse "a@x.com, b@y.com" into a normalized set."""
        emails = frozenset(
            part.strip().lower()
            for part in (raw or "").split(",")
            if part.strip()
        )
        return AccessConfig(authorized_users=emails)


class AccessGate:
    def __init__(self, config: AccessConfig):
        self.config = config
        if not config.authorized_users:
            logger.warning("No authorized users configured; every request will be denied")

    def is_authorized(self, email: Optional[str]) -> bool:
        if not email:
            return False
        return email.strip().lower() in self.config.authorized_users

    def authorize(self, principal: Optional[Principal]) -> Principal:
        """
        Return the principal when whitelisted.

        Raises:
            AuthorizationError: 401 when not logged in, 403 when not whitelisted
        """
        if principal is None or not principal.email:
            raise AuthorizationError("Unauthorized - not logged in", status_code=401)
        if not self.is_authorized(principal.email):
            logger.warning(f"Access denied for {principal.email}")
            raise AuthorizationError("Access denied", status_code=403)
        return principal
