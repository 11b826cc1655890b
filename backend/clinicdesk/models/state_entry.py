from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from clinicdesk.db.base import Base


class StateEntry(Base):
    """
    One persisted collection of the application state.

    Each collection (medicines, sales, appointments, ...) is stored as a JSON
    document under its own key and loaded independently at startup, so a
    corrupt value only resets that one collection.
    """
    __tablename__ = "app_state"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
