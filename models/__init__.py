from .user import User
from .lab import Lab
from .lab_assignment import LabAssignment, LabSession
from .mark_ledger import MarkLedger, WeekEntry
__all__ = ["User", "Lab", "LabAssignment", "LabSession", "MarkLedger", "WeekEntry"]
