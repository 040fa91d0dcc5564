"""
Data records for the warehouse admin dashboard.
Records mirror what the external auth and data APIs return; nothing is persisted here.
"""

from .session import Session, SessionUser
from .navigation_entry import NavigationEntry

__all__ = [
    'Session',
    'SessionUser',
    'NavigationEntry',
]
