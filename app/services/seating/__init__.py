"""
Table ("mesa") availability and allocation for the front desk.

The database-backed workflow lives in app.services.seating.service.
"""
from .allocation import AllocationPolicy, SeatDecision, SeatOutcome
from .availability import OccupancySummary, free_tables, occupied_tables, occupancy_summary

__all__ = [
    "AllocationPolicy",
    "OccupancySummary",
    "SeatDecision",
    "SeatOutcome",
    "free_tables",
    "occupied_tables",
    "occupancy_summary",
]
