"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import BigInteger, Boolean, Column, Integer, String, Text, false

from bookyoon_notifications.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for reservation notifications."""

    __tablename__ = "notification"
    # Identifiers are never handed out twice, even after a hard delete.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(
        BigInteger().with_variant(Integer(), "sqlite"),
        primary_key=True,
        autoincrement=True,
        index=True,
    )
    message = Column(Text, nullable=False)
    reservation_id = Column(BigInteger, nullable=True)
    user_login = Column(String(255), nullable=False)
    # Case-folded copy of ``user_login``; every per-user query matches on it.
    user_login_key = Column(String(1024), nullable=False, index=True)
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())
    # Column name kept from the legacy schema.
    read = Column("jhi_read", Boolean, nullable=False, default=False, server_default=false())


__all__ = ["NotificationModel"]
