"""Read side of the audit trail written by ``utils.audit.write_log``."""
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from retailers.models.log import AuditAction, AuditResource, AuditStatus, Log
from retailers.schemas.log import StatusChangeOut


def search_logs(
    db: Session,
    *,
    page: int = 1,
    page_size: int = 20,
    action: Optional[AuditAction] = None,
    resource: Optional[AuditResource] = None,
    status: Optional[AuditStatus] = None,
    user_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> Tuple[List[Log], int]:
    """One page of audit entries, newest first, and the total number matching."""
    query = db.query(Log)
    if action:
        query = query.filter(Log.action == action.value)
    if resource:
        query = query.filter(Log.resource == resource.value)
    if status:
        query = query.filter(Log.status == status.value)
    if user_id is not None:
        query = query.filter(Log.user_id == user_id)
    if date_from:
        query = query.filter(Log.ts >= datetime.combine(date_from, time.min))
    if date_to:
        # date_to is inclusive
        query = query.filter(Log.ts < datetime.combine(date_to + timedelta(days=1), time.min))

    total = query.count()
    items = (
        query.order_by(Log.ts.desc(), Log.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total


def order_status_trail(db: Session, order_id: str) -> List[StatusChangeOut]:
    """Status changes of one order, oldest first, from either order store.

    Storefront orders have integer ids and legacy orders uuid row keys, so the
    id recorded in the entry is compared as text.
    """
    entries = (
        db.query(Log)
        .filter(Log.action == AuditAction.ORDER_STATUS_CHANGE.value)
        .order_by(Log.ts, Log.id)
        .all()
    )
    return [
        StatusChangeOut(
            order_id=e.meta["order_id"],
            store="legacy" if e.resource == AuditResource.LEGACY_ORDERS.value else "sql",
            previous_status=e.meta.get("old"),
            new_status=e.meta.get("new"),
            notified=e.meta.get("notified", e.status == AuditStatus.SUCCESS.value),
            changed_by=e.username,
            ts=e.ts,
        )
        for e in entries
        if e.meta and str(e.meta.get("order_id")) == order_id
    ]
