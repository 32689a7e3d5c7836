from datetime import datetime
from typing import Optional

from storefront.schemas.common import CamelModel


class NotificationOut(CamelModel):
    id: int
    title: str
    message: str
    product_id: Optional[int] = None
    is_read: bool
    created_at: datetime
