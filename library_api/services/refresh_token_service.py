"""Refresh-token ledger: issuance, lookup and one-way revocation."""
from datetime import datetime
from typing import Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value
from library_api.models.refresh_token import RefreshToken
from library_api.utils.helpers import utcnow


class RefreshTokenService:
    """Owns every ``RefreshToken`` row.

    Methods only flush; committing is left to the caller so a use case can
    group its writes into one transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def record_issuance(self, token: str, user_id: str, expires_at: datetime) -> RefreshToken:
        record = RefreshToken(
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            is_revoked=False,
        )
        self.db.add(record)
        self.db.flush()
        return record

    def lookup(self, token: str, user_id: Optional[str] = None) -> Optional[RefreshToken]:
        query = self.db.query(RefreshToken).filter(RefreshToken.token == token)
        if user_id is not None:
            query = query.filter(RefreshToken.user_id == str(user_id))
        return query.first()

    @staticmethod
    def is_live(record: RefreshToken, now: Optional[datetime] = None) -> bool:
        return not record.is_revoked and record.expires_at > (now or utcnow())

    def revoke(self, record: RefreshToken) -> None:
        if record.is_revoked:
            return
        record.is_revoked = True
        self.db.flush()

    def revoke_if_live(self, record: RefreshToken, now: Optional[datetime] = None) -> bool:
        """Atomically revoke ``record`` if it is still live.

        Returns True only for the caller whose UPDATE flipped the row, so two
        concurrent rotations of the same token cannot both proceed.
        """
        result = self.db.execute(
            update(RefreshToken)
            .where(
                RefreshToken.id == record.id,
                RefreshToken.is_revoked.is_(False),
                RefreshToken.expires_at > (now or utcnow()),
            )
            .values(is_revoked=True, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        won = result.rowcount == 1
        if won:
            set_committed_value(record, "is_revoked", True)
        return won

    def revoke_all(self, user_id: str) -> int:
        result = self.db.execute(
            update(RefreshToken)
            .where(
                RefreshToken.user_id == str(user_id),
                RefreshToken.is_revoked.is_(False),
            )
            .values(is_revoked=True, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
