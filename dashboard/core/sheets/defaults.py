"""
Sample rows used to seed an empty store.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

from dashboard.core import config


def _days_from_now(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def sample_rows(sheet: str) -> list[dict[str, Any]]:
    """Return the sample rows for a sheet (empty for unknown sheets)."""
    now = _days_from_now(0)

    if sheet == config.MEMBERS_SHEET:
        return [
            {
                "id": "1", "name": "John Admin", "email": "john@example.com",
                "roles": ["Administrator"], "units": ["1", "2"], "unit": "1",
                "status": "active", "createdAt": now,
            },
            {
                "id": "2", "name": "Sarah Manager", "email": "sarah@example.com",
                "roles": ["Manager"], "units": ["1"], "unit": "1",
                "status": "active", "createdAt": now,
            },
        ]

    if sheet == config.ORGANIZATION_UNITS_SHEET:
        return [
            {
                "id": "1", "name": "Operations Team", "type": "team",
                "description": "Main operations team", "members": 12, "createdAt": now,
            },
            {
                "id": "2", "name": "North Location", "type": "location",
                "description": "North branch operations", "address": "123 North St, City",
                "capacity": 50, "createdAt": now,
            },
            {
                "id": "3", "name": "Sales Department", "type": "department",
                "description": "Sales and business development", "members": 8, "createdAt": now,
            },
            {
                "id": "4", "name": "Supervisor", "type": "role",
                "description": "Team supervisors", "level": "Mid-management", "createdAt": now,
            },
        ]

    if sheet == config.USER_PROFILES_SHEET:
        return [
            {
                "id": "1", "name": "Jake Smith", "email": "jake.smith@example.com",
                "phone": "+1 (555) 123-4567", "businessName": "State Farm Co",
                "businessType": "Insurance", "website": "https://statefarm.example.com",
                "location": "123 Main St, Anytown, USA", "plan": "free", "role": "owner",
                "onboardingCompleted": False, "createdAt": now,
            },
        ]

    if sheet == config.ANNOUNCEMENTS_SHEET:
        return [
            {
                "id": "1", "title": "Welcome to our platform",
                "content": "Thank you for joining our platform. We are excited to have you on board!",
                "createdAt": _days_from_now(-7), "isActive": True, "type": "basic",
                "isPremium": False, "attachments": [],
            },
            {
                "id": "2", "title": "New features coming soon",
                "content": "We are working on exciting new features that will be released next month.",
                "createdAt": _days_from_now(-3), "isActive": True, "type": "scheduled",
                "scheduledFor": _days_from_now(14), "isPremium": False, "attachments": [],
            },
        ]

    if sheet == config.NOTIFICATIONS_SHEET:
        return [
            {
                "id": "1", "title": "New Team Member Added",
                "text": "John Doe has been added to the Marketing team.",
                "by": "Admin", "date": "2023-07-21", "isRead": False,
            },
            {
                "id": "2", "title": "Upcoming Maintenance",
                "text": "The system will be down for maintenance on Saturday from 2-4am.",
                "by": "System", "date": "2023-07-20", "isRead": False,
            },
            {
                "id": "3", "title": "New Feature Released",
                "text": "Check out our new dashboard with improved analytics!",
                "by": "Product Team", "date": "2023-07-19", "isRead": True,
            },
            {
                "id": "4", "title": "Your Report is Ready",
                "text": "The monthly sales report has been generated and is ready for review.",
                "by": "Reports Bot", "date": "2023-07-18", "isRead": True,
            },
            {
                "id": "5", "title": "Meeting Reminder",
                "text": "Don't forget about the team meeting tomorrow at 10am.",
                "by": "Calendar", "date": "2023-07-17", "isRead": True,
            },
        ]

    return []
