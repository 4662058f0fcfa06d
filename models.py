from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class SessionLevel(Base):
    __tablename__ = "session_levels"
    __table_args__ = (sa.UniqueConstraint("session_id", "storage_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(64), index=True)
    # e.g. "mathhill-addition-level"
    storage_key: Mapped[str] = mapped_column(String(64))
    value: Mapped[str] = mapped_column(String(16))  # base-10 level string
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
