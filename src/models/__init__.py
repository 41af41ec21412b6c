"""Data models for the crew billing system.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- TechnicianShift: One technician assigned to one event
- ProductionEvent: Production event with its crew
- StaffMember: Staff directory record
- AppUser: Dashboard user account
"""

from src.models.base import BaseDataModel, generate_id
from src.models.event import PaymentType, ProductionEvent, Schedule, TechnicianShift
from src.models.staff import StaffMember
from src.models.user import AppUser, UserRole

__all__ = [
    "BaseDataModel",
    "generate_id",
    "PaymentType",
    "Schedule",
    "TechnicianShift",
    "ProductionEvent",
    "StaffMember",
    "AppUser",
    "UserRole",
]
