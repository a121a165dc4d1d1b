"""CargoFlightSegment: one leg of a (possibly multi-leg) air shipment.

Segments are kept in insertion order; no chronological ordering between
legs is enforced.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fastcfs.database import Base


class CargoFlightSegment(Base):
    __tablename__ = "cargo_flight_segments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cargo_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cargo.id"), nullable=False, index=True
    )

    # ── Flight ───────────────────────────────────────────────
    flight_number: Mapped[str] = mapped_column(String(20), nullable=False)
    airline: Mapped[str | None] = mapped_column(Text)
    departure_airport: Mapped[str] = mapped_column(Text, nullable=False)
    arrival_airport: Mapped[str] = mapped_column(Text, nullable=False)
    departure_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    arrival_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # ── Load ─────────────────────────────────────────────────
    pieces: Mapped[str | None] = mapped_column(String(50))  # e.g. "4/4"
    weight: Mapped[str | None] = mapped_column(String(50))
    volume: Mapped[str | None] = mapped_column(String(50))

    # Planned | Booked | In Transit | Arrived ... (free text)
    status: Mapped[str] = mapped_column(String(50), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
