"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from access-token claims and made available
    to route handlers via dependency injection. It is the minimal user info
    needed to authorize a request; anything else is loaded from the store.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    role: str = Field(default="user", description="User role (user or admin)")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra claims
    }

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
