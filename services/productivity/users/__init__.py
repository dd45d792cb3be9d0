"""Users service native package exports."""

from services.productivity.users.component import SERVICE_COMPONENT_ID
from services.productivity.users.domain import NotificationPreferences, UserRecord
from services.productivity.users.implementation import DefaultUserService
from services.productivity.users.service import UserService, build_user_service

__all__ = [
    "DefaultUserService",
    "NotificationPreferences",
    "SERVICE_COMPONENT_ID",
    "UserRecord",
    "UserService",
    "build_user_service",
]
