"""
Service layer for user registration.

Free of SQL; it validates input and calls `UserRepo`.
"""

from typing import Any, Dict, Optional

from repo_users import UserRepo


class UserService:
    def __init__(self, repo: UserRepo):
        self.repo = repo

    def register(self, email: Optional[str], name: Optional[str] = None) -> Dict[str, Any]:
        """Create a user and return the stored row.

        Only presence of `email` is checked; format and uniqueness are left
        to the database.

        Raises:
        - `ValueError("email required")` when `email` is missing or empty
        """

        if not email:
            raise ValueError("email required")
        return self.repo.insert_user(email, name or None)
