from sqlalchemy import Column, DateTime, Integer, String
import uuid
from water_server.db import Base

class WinnerRecord(Base):
    __tablename__ = 'daily_winners'
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    date_key = Column(String(10), unique=True, nullable=False)  # one winner per day
    winning_player = Column(String, nullable=False)
    winning_total = Column(Integer, nullable=False)
    computed_at = Column(DateTime(timezone=True), nullable=False)
