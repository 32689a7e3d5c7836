from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from storefront.schemas.common import CamelModel


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    is_admin: bool
    created_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    email: Optional[EmailStr] = None
