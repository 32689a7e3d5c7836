from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storefront.db import get_db
from storefront.models.user import User
from storefront.schemas.common import dump, success
from storefront.schemas.notification_schema import NotificationOut
from storefront.security import get_current_user
from storefront.services.notification_service import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", summary="List notifications, newest first")
def list_notifications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    data = [
        dump(NotificationOut.model_validate(n))
        for n in NotificationService(db).list_for_user(user.id)
    ]
    return success({"notifications": data}, results=len(data))


@router.put("/read/{notification_id}", summary="Mark notification as read")
def mark_as_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    n = NotificationService(db).mark_as_read(user.id, notification_id)
    return success({"notification": dump(NotificationOut.model_validate(n))})


@router.delete("/clear", summary="Clear all notifications", status_code=204)
def clear_notifications(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    NotificationService(db).clear(user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
