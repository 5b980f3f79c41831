"""Inquiry model — stores contact form submissions."""

from datetime import date

from sqlalchemy import Boolean, Date, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nexus_site.models.base import Base, TimestampMixin, UUIDMixin


class Inquiry(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "inquiries"
    __table_args__ = (
        # One accepted inquiry per mobile per local calendar day
        UniqueConstraint("mobile", "created_day", name="uq_inquiries_mobile_day"),
        Index("ix_inquiries_mobile_created_at", "mobile", "created_at"),
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    mobile: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Local date of created_at, the day bucket for the unique constraint
    created_day: Mapped[date] = mapped_column(Date, nullable=False)

    def to_public_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "mobile": self.mobile,
            "email": self.email,
            "message": self.message,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
