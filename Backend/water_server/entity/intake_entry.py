from sqlalchemy import Column, DateTime, Index, Integer, String, CheckConstraint
import uuid
from water_server.db import Base

class IntakeEntry(Base):
    __tablename__ = 'water_entries'
    __table_args__ = (
        CheckConstraint('amount > 0', name='ck_water_entries_amount_positive'),
        Index('ix_water_entries_date_player', 'date_key', 'player'),
    )
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    player = Column(String, nullable=False, index=True)
    amount = Column(Integer, nullable=False)  # fluid ounces
    date_key = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    created_at = Column(DateTime(timezone=True), nullable=False)
