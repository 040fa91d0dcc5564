"""
Session records

SessionUser is the identity record handed back by the auth backend on login.
Session is the client-visible authentication state: the identity (if any) and
whether it is still being resolved.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

from flask_login import UserMixin


DEFAULT_EMAIL_DOMAIN = "nltech.vn"


@dataclass(frozen=True)
class SessionUser(UserMixin):
    id: int
    username: str
    email: str = ""
    role_id: str = ""
    fullname: Optional[str] = None
    avatar: Optional[str] = None
    role_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'SessionUser':
        """
        Build a user from an auth backend record.

        Unknown keys (isAuthenticated, timestamps, ...) are ignored.

        Raises:
            KeyError: if the record has no id or username
        """
        return cls(
            id=int(record['id']),
            username=str(record['username']),
            email=record.get('email') or "",
            role_id=str(record.get('role_id') or ""),
            fullname=record.get('fullname'),
            avatar=record.get('avatar'),
            role_name=record.get('role_name'),
        )

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)

    def get_id(self):
        return str(self.id)

    @property
    def display_name(self) -> str:
        return self.fullname or self.username or "Admin"

    @property
    def display_email(self) -> str:
        if self.email:
            return self.email
        return f"{self.username or 'admin'}@{DEFAULT_EMAIL_DOMAIN}"

    def __repr__(self):
        return f'<SessionUser {self.username}>'


@dataclass(frozen=True)
class Session:
    identity: Optional[SessionUser] = None
    loading: bool = True

    @classmethod
    def booting(cls) -> 'Session':
        """State at request start: nothing resolved yet"""
        return cls(identity=None, loading=True)

    @property
    def is_authenticated(self) -> bool:
        return not self.loading and self.identity is not None
