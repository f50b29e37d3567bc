# app/schemas/token.py
from pydantic import BaseModel, Field
from typing import Optional


class TokenPayload(BaseModel):
    # Tokens from the marketplace frontend carry the user id as 'userId';
    # standard JWTs carry it as 'sub'. Both map to 'sub'.
    sub: str = Field(alias="userId")
    email: Optional[str] = None
    role: str = "user"
    exp: Optional[int] = None  # Standard claim for expiration time

    model_config = {
        "populate_by_name": True,  # Allow populating by field name or alias
        "from_attributes": True,
    }
