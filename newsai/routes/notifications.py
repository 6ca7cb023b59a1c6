"""
Push notification routes: subscription storage and preferences.

Delivery is handled outside this service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from ..auth import SessionDep
from ..config import get_db
from ..database import Database
from ..exceptions import require_found, require_user
from ..schemas import (
    NotificationPreferences,
    PushSubscriptionRequest,
    PushSubscriptionResponse,
    UnsubscribeRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("/subscribe", status_code=201)
async def subscribe(
    payload: PushSubscriptionRequest,
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
) -> PushSubscriptionResponse:
    """Register a browser push subscription, replacing any for the same endpoint."""
    subscription = db.save_push_subscription(
        session.user_id, payload.endpoint, payload.keys.p256dh, payload.keys.auth
    )
    db.set_push_subscription(session.user_id, payload.model_dump(by_alias=True))
    return PushSubscriptionResponse.from_db(subscription)


@router.delete("/subscribe")
async def unsubscribe(
    payload: UnsubscribeRequest,
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    require_found(
        db.delete_push_subscription(session.user_id, payload.endpoint),
        "Subscription not found",
    )
    return {"message": "Unsubscribed successfully"}


@router.put("/preferences")
async def update_preferences(
    payload: NotificationPreferences,
    session: SessionDep,
    db: Annotated[Database, Depends(get_db)],
) -> dict:
    """Replace the user's notification flags; omitted flags reset to defaults."""
    user = require_user(
        db.update_notification_preferences(session.user_id, payload.model_dump(by_alias=True))
    )
    return {"preferences": NotificationPreferences.model_validate(user.notification_preferences)}
