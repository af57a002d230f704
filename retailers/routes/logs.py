from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.log import AuditAction, AuditResource, AuditStatus
from retailers.models.users import User
from retailers.schemas.log import LogPage, StatusChangeOut
from retailers.services.audit_log import order_status_trail, search_logs
from retailers.utils.tokenJWT import require_admin

router = APIRouter(prefix="/logs", tags=["Logs"])


# Audit entries, newest first (Admin only)
@router.get("", response_model=LogPage)
def get_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    action: Optional[AuditAction] = None,
    resource: Optional[AuditResource] = None,
    status: Optional[AuditStatus] = None,
    user_id: Optional[int] = None,
    date_from: Optional[date] = Query(None, description="First day, YYYY-MM-DD"),
    date_to: Optional[date] = Query(None, description="Last day, YYYY-MM-DD"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    items, total = search_logs(
        db,
        page=page,
        page_size=page_size,
        action=action,
        resource=resource,
        status=status,
        user_id=user_id,
        date_from=date_from,
        date_to=date_to,
    )
    return {"items": items, "total": total, "page": page, "page_size": page_size}


# Who changed an order's status and whether the customer was notified
@router.get("/orders/{order_id}", response_model=List[StatusChangeOut])
def get_order_status_trail(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return order_status_trail(db, order_id)
