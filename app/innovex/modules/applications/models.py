from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.innovex.models import Base


class Application(Base):
    """Internship or career application submitted from the public site."""

    __tablename__ = "applications"
    __table_args__ = (
        Index("idx_applications_kind", "kind"),
        Index("idx_applications_status", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    kind: Mapped[str] = mapped_column(String(32), nullable=False, default="internship")  # internship, career

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    college: Mapped[str] = mapped_column(String(255), nullable=False)
    year_of_study: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    portfolio_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    resume_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    cover_letter: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")  # pending, reviewed, accepted, rejected

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
