from datetime import datetime, timezone
from jose import jwt
from sqlalchemy.orm import Session
from staybnb.models.token_blacklist import TokenBlacklist
from staybnb.logger import get_logger

logger = get_logger(__name__)


class TokenRevocationError(ValueError):
    """The token carries no ``jti`` or ``exp`` claim and cannot be revoked."""


class TokenBlacklistService:
    """Revoked tokens live in ``token_blacklist`` until they would have expired.

    ``revoke`` and ``purge_expired`` only stage changes on the session; the
    caller commits them together with the rest of its unit of work, so a
    failed write leaves the token usable and is reported as an error.
    """

    @staticmethod
    def revoke(db: Session, token: str) -> TokenBlacklist:
        claims = jwt.get_unverified_claims(token)
        jti, exp = claims.get("jti"), claims.get("exp")
        if not jti or exp is None:
            raise TokenRevocationError("Token carries no jti or exp claim")

        entry = db.query(TokenBlacklist).filter(TokenBlacklist.jti == jti).first()
        if entry is None:
            entry = TokenBlacklist(
                jti=jti,
                token=token,
                expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            )
            db.add(entry)
            db.flush()
            logger.info(f"Token {jti} revoked until {entry.expires_at}")
        return entry

    @staticmethod
    def is_revoked(db: Session, jti: str) -> bool:
        # Expired entries no longer matter: the token fails signature checks anyway
        return (
            db.query(TokenBlacklist.id)
            .filter(TokenBlacklist.jti == jti, TokenBlacklist.expires_at > datetime.now(timezone.utc))
            .first()
            is not None
        )

    @staticmethod
    def purge_expired(db: Session) -> int:
        purged = (
            db.query(TokenBlacklist)
            .filter(TokenBlacklist.expires_at <= datetime.now(timezone.utc))
            .delete(synchronize_session=False)
        )
        if purged:
            logger.info(f"Purged {purged} expired blacklist entries")
        return purged


token_blacklist_service = TokenBlacklistService()
