from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from academicflow.api.deps import get_current_user
from academicflow.core.logging import get_logger
from academicflow.db.session import get_db
from academicflow.models.entities import User
from academicflow.schemas.users import SelectRoleRequest, UserResponse

router = APIRouter()
logger = get_logger(__name__)


@router.get("/auth/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    return user


@router.post("/auth/select-role", response_model=UserResponse)
async def select_role(
    body: SelectRoleRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if body.role not in ("student", "faculty"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid role")

    user.role = body.role
    await db.commit()
    await db.refresh(user)
    logger.info("role_selected", user_id=user.id, role=user.role)
    return user
