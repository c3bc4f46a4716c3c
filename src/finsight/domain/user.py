"""User profile domain service."""

from typing import Optional

from finsight.database.base import Database
from finsight.domain.entities import User
from finsight.domain.errors import ConflictError, ValidationError, duplicate_user


class UserService:
    """Service for managing user profiles."""

    def __init__(self, db: Database):
        self.db = db

    def create_user(self, user_id: str, name: str, email: Optional[str] = None) -> str:
        """Create a user profile.

        Args:
            user_id: External user identifier
            name: Display name
            email: Optional email address

        Returns:
            User ID

        Raises:
            ValidationError: If the ID or name is blank
            ConflictError: If the user already exists
        """
        if not user_id or not user_id.strip():
            raise ValidationError("User ID must not be empty")
        if not name or not name.strip():
            raise ValidationError("User name must not be empty")
        if self.db.get_user(user_id) is not None:
            raise ConflictError(duplicate_user(user_id))
        return self.db.create_user(user_id, name.strip(), email=email)

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get_user(user_id)
