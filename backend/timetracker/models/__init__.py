"""
ORM models. Importing this package registers every table on Base.metadata.
"""

from timetracker.models.client import Client
from timetracker.models.project import Project
from timetracker.models.time_entry import TimeEntry
from timetracker.models.user import User

__all__ = ["Client", "Project", "TimeEntry", "User"]
