import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UserPublic(BaseModel):
    """
    What:  The expanded form of an `owner` reference.
    Who:   Embedded in GET /products/{id} and GET /favorites responses.

    Deliberately excludes the bearer token.
    """
    id: uuid.UUID = Field(description="User identifier")
    email: str = Field(description="User email address")
    created_at: datetime = Field(description="When the user was created (UTC)")

    model_config = {"from_attributes": True}
