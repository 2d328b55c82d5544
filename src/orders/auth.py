"""Principal resolution from bearer tokens.

Tokens are issued by the users service as HS256 JWTs carrying ``userId``,
``email`` and ``roles`` claims. Only verification happens here; ``issue_token``
exists for local tooling and tests and signs the same claims.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import UUID

import jwt
import structlog
from pydantic import BaseModel, ConfigDict, Field

from orders.exceptions import AuthenticationError

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "


class Role(Enum):
    USER = "user"
    ADMIN = "admin"
    MANAGER = "manager"


_ROLE_VALUES = {role.value for role in Role}


def canonical_user_id(value) -> str:
    """Lower-case hyphenated form of a UUID; anything else is kept as given."""
    try:
        return str(UUID(str(value)))
    except ValueError:
        return str(value)


def parse_roles(raw) -> frozenset[Role]:
    """Known roles in ``raw``; unknown names are ignored. No claim means ``user``."""
    if not raw:
        return frozenset({Role.USER})
    if isinstance(raw, str):
        raw = [raw]
    roles = frozenset(Role(name) for name in raw if name in _ROLE_VALUES)
    ignored = [name for name in raw if name not in _ROLE_VALUES]
    if ignored:
        logger.debug("Ignoring unknown roles", roles=ignored)
    return roles


class Principal(BaseModel):
    """The authenticated identity behind a request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    roles: frozenset[Role] = frozenset({Role.USER})
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return Role.ADMIN in self.roles

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    @property
    def role_names(self) -> list[str]:
        return sorted(role.value for role in self.roles)


class TokenVerifier:
    """Verifies bearer tokens and yields a ``Principal``."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def verify(self, token: str) -> Principal:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as exc:
            logger.info("Rejected bearer token", reason=str(exc))
            raise AuthenticationError() from exc

        try:
            return Principal(
                user_id=canonical_user_id(claims["userId"]),
                roles=parse_roles(claims.get("roles")),
                email=claims.get("email"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.info("Rejected bearer token with malformed claims", reason=str(exc))
            raise AuthenticationError() from exc

    def resolve(self, authorization: str | None) -> Principal:
        """Resolve an ``Authorization`` header value to a principal."""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthenticationError("Authorization token required", code="NO_TOKEN")
        return self.verify(authorization[len(BEARER_PREFIX) :].strip())


def issue_token(
    secret: str,
    user_id: str,
    roles=(Role.USER,),
    email: str | None = None,
    expires_in: timedelta = timedelta(hours=24),
    algorithm: str = "HS256",
) -> str:
    now = datetime.now(UTC)
    claims = {
        "userId": str(user_id),
        "roles": [Role(role).value for role in roles],
        "iat": now,
        "exp": now + expires_in,
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm=algorithm)
