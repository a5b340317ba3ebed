"""SQLAlchemy ORM models for the account service.

All models are exported from this module for convenient imports:
    from account_service.models import User, PersonalAccessToken, LoginAttempt

- user.py: User
- personal_access_token.py: PersonalAccessToken (bearer tokens)
- login_attempt.py: LoginAttempt (audit log)
"""

from account_service.models.base import Base, TimestampMixin
from account_service.models.login_attempt import LoginAttempt
from account_service.models.personal_access_token import PersonalAccessToken
from account_service.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "PersonalAccessToken",
    "LoginAttempt",
]
