from pydantic import BaseModel
from typing import Any, List, Optional, Union
from datetime import datetime


class LogResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    username: Optional[str] = None
    action: str
    resource: str
    status: str
    ip: Optional[str] = None
    ts: datetime
    meta: Optional[Any] = None

    class Config:
        from_attributes = True


class LogPage(BaseModel):
    items: List[LogResponse]
    total: int
    page: int
    page_size: int


# One status change of an order, read back from the audit trail
class StatusChangeOut(BaseModel):
    order_id: Union[int, str]
    store: str
    previous_status: Optional[str] = None
    new_status: Optional[str] = None
    notified: bool
    changed_by: Optional[str] = None
    ts: datetime
