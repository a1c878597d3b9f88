"""
Payroll Core - Base Model

Column mixins shared by the settlement store tables:
- ``TimestampMixin`` for mutable state rows (employees)
- ``HistoryModel`` for append-only rows, which get a creation time only
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from payroll_core.database import Base


class TimestampMixin:
    """created_at / updated_at for rows changed by settlements."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class HistoryModel(Base):
    """
    Abstract base for append-only history rows.

    The primary key is supplied by the domain record so the same settlement
    cannot be stored twice.
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    recorded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
