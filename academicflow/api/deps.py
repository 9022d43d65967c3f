from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from academicflow.core.logging import get_logger
from academicflow.core.security import decode_access_token
from academicflow.db.session import get_db
from academicflow.models.entities import User
from academicflow.services.assistant import WritingAssistant
from academicflow.services.citations import CitationService
from academicflow.services.detector import DetectorService
from academicflow.services.llm import LLMClient, llm_client

logger = get_logger(__name__)


def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return authorization.split(" ", 1)[1]


def get_token_claims(token: str = Depends(get_bearer_token)) -> dict:
    return decode_access_token(token)


async def get_current_user(
    claims: dict = Depends(get_token_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await db.get(User, claims["sub"])
    if user is None:
        # First request from this identity: mirror the token's profile claims.
        user = User(
            id=claims["sub"],
            email=claims.get("email"),
            first_name=claims.get("given_name"),
            last_name=claims.get("family_name"),
            profile_image_url=claims.get("picture"),
            role=None,
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Another request synced this identity first, or the email belongs to another account.
            await db.rollback()
            user = await db.get(User, claims["sub"])
            if user is None:
                logger.warning("user_sync_conflict", user_id=claims["sub"])
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Account email already in use")
            return user
        await db.refresh(user)
        logger.info("user_synced", user_id=user.id)
    return user


def require_faculty(user: User = Depends(get_current_user)) -> User:
    if user.role != "faculty":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Faculty access required")
    return user


def get_llm_client() -> LLMClient:
    return llm_client


def get_detector(client: LLMClient = Depends(get_llm_client)) -> DetectorService:
    return DetectorService(client)


def get_citation_service(client: LLMClient = Depends(get_llm_client)) -> CitationService:
    return CitationService(client)


def get_writing_assistant(client: LLMClient = Depends(get_llm_client)) -> WritingAssistant:
    return WritingAssistant(client)
