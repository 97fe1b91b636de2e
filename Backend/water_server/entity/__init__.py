# Import all models so they are registered with Base.metadata
from water_server.entity.intake_entry import IntakeEntry
from water_server.entity.winner_record import WinnerRecord

__all__ = ["IntakeEntry", "WinnerRecord"]
