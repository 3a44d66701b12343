"""
Flight model - one document per flight.

The passenger list is embedded in the flight row as a JSON document, so a
flight and its passengers are always read and written together.

Design notes:
- flight_code is the public key, enforced unique at the database level
- version is bumped by SQLAlchemy on every UPDATE and checked in its
  WHERE clause, so a stale read-modify-write fails instead of overwriting
- passenger documents use the wire (camelCase) field names
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from flightroster.models.base import Base


FLIGHT_CODE_MAX_LENGTH = 32


class FlightCategory(str, Enum):
    """Loyalty tier of a passenger."""
    BLACK = 'Black'
    PLATINUM = 'Platinum'
    GOLD = 'Gold'
    NORMAL = 'Normal'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Flight(Base):
    """
    A flight and its embedded passenger list.

    Passengers keep their insertion order. Passenger ids are unique within
    a flight only; the repository enforces that before every write.
    """

    __tablename__ = 'flights'

    # Surrogate key so renaming a flight is a plain column update
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment='Surrogate key'
    )

    flight_code: Mapped[str] = mapped_column(
        String(FLIGHT_CODE_MAX_LENGTH),
        unique=True,
        nullable=False,
        index=True,
        comment='Public flight identifier (e.g., LAN123)'
    )

    passengers: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment='Ordered passenger documents'
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment='Optimistic concurrency counter'
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        comment='Record creation timestamp'
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        comment='Last update timestamp'
    )

    __mapper_args__ = {'version_id_col': version}

    def __repr__(self) -> str:
        return f'<Flight {self.flight_code} ({len(self.passengers or [])} passengers)>'

    def passenger_index(self, passenger_id: int) -> Optional[int]:
        """Position of the passenger with this id, or None."""
        for index, passenger in enumerate(self.passengers or []):
            if passenger.get('id') == passenger_id:
                return index
        return None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'flightCode': self.flight_code,
            'passengers': [dict(p) for p in self.passengers or []],
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
