"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and abstract base classes with the
primary key and timestamp columns shared by every billing table.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import DateTime, String, event
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

# Create declarative base
Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """
    Abstract base model with a string UUID primary key.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        nullable=False,
        comment="Primary key (UUID)"
    )

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Args:
            exclude: List of field names to exclude

        Returns:
            Dictionary representation of the model
        """
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            if column.name not in exclude:
                value = getattr(self, column.name)
                if hasattr(value, "isoformat"):
                    result[column.name] = value.isoformat()
                elif hasattr(value, "value"):
                    result[column.name] = value.value
                elif value is not None and not isinstance(value, (str, int, bool, float)):
                    result[column.name] = str(value)
                else:
                    result[column.name] = value

        return result

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampModel(BaseModel):
    """
    Base model with automatic timestamp tracking.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Record creation timestamp"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=func.now(),
        comment="Record last update timestamp"
    )


@event.listens_for(TimestampModel, 'before_update', propagate=True)
def receive_before_update(mapper, connection, target):
    """Update timestamp before update."""
    target.updated_at = utcnow()
