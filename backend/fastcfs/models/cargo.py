"""Cargo: one tracked shipment.

The tracking_number is generated once at creation (see
fastcfs.utils.numbering) and never changes afterwards.

Lifecycle:  received ⇄ in_transit ⇄ delayed ⇄ delivered
Any status may move to any other; there is no terminal state.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fastcfs.database import Base


class CargoStatus(str, enum.Enum):
    RECEIVED = "received"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    DELAYED = "delayed"


class Cargo(Base):
    __tablename__ = "cargo"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tracking_number: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )

    # ── Customer ─────────────────────────────────────────────
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    customer_phone: Mapped[str] = mapped_column(Text, nullable=False)
    sales_rep_name: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Cargo details ────────────────────────────────────────
    # Rich text (HTML) from the admin editor
    cargo_description: Mapped[str] = mapped_column(Text, nullable=False)
    origin: Mapped[str | None] = mapped_column(Text)
    destination: Mapped[str | None] = mapped_column(Text)
    weight: Mapped[str | None] = mapped_column(Text)
    dimensions: Mapped[str | None] = mapped_column(Text)

    # ── Status ───────────────────────────────────────────────
    # received | in_transit | delivered | delayed (enforced by the API layer)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=CargoStatus.RECEIVED.value, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
