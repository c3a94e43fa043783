"""
Focus time API: suggest long free blocks and protect them.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..schemas import FocusSuggestions, ProtectFocusResponse
from ..auth import get_current_user
from ..errors import DataAccessError
from ..services.scheduler_service import scheduler_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["focus"])

@router.get("/suggestions", response_model=FocusSuggestions)
def get_focus_suggestions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Free blocks of two hours or more over the coming week"""
    try:
        blocks = scheduler_service.list_focus_suggestions(current_user, db)
    except DataAccessError:
        logger.exception(f"Focus suggestions failed for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to find focus time suggestions"
        )

    return {
        "blocks": [
            {
                "start": block.start,
                "end": block.end,
                "duration": block.duration().total_seconds() / 3600,
            }
            for block in blocks
        ]
    }

@router.post("/protect", response_model=ProtectFocusResponse)
def protect_focus_time(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Book a two hour focus event at the start of every suggested block"""
    try:
        created = scheduler_service.protect_focus_time(current_user, db)
    except DataAccessError:
        logger.exception(f"Focus protection failed for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to protect focus time"
        )

    return {"success": True, "protected": len(created), "blocks": created}
