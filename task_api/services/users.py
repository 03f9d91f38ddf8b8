import logging

from starlette.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from task_api.errors import DuplicateUsername, StoreUnavailable
from task_api.models.user import User
from task_api.utils.security import DUMMY_HASH, get_password_hash, verify_password

logger = logging.getLogger(__name__)


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    try:
        result = await db.execute(select(User).filter(User.username == username))
    except SQLAlchemyError as e:
        logger.error("User lookup failed: %s", e.__class__.__name__)
        raise StoreUnavailable() from e
    return result.scalars().first()


async def is_username_taken(db: AsyncSession, username: str) -> bool:
    """Advisory pre-check only; the unique index on users.username decides."""
    return await get_user_by_username(db, username) is not None


async def create_user(db: AsyncSession, username: str, password: str) -> User:
    # bcrypt is CPU-bound; keep it off the event loop
    hashed_password = await run_in_threadpool(get_password_hash, password)
    new_user = User(username=username, hashed_password=hashed_password)
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError as e:
        # A concurrent signup won the race past the pre-check
        await db.rollback()
        raise DuplicateUsername() from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to persist user: %s", e.__class__.__name__)
        raise StoreUnavailable() from e
    await db.refresh(new_user)
    return new_user


async def authenticate_user(db: AsyncSession, username: str, password: str) -> User | None:
    """Return the user when the password matches, otherwise None.

    bcrypt runs whether or not the username exists so the response time
    does not reveal which usernames are registered.
    """
    user = await get_user_by_username(db, username)
    if user is None:
        await run_in_threadpool(verify_password, password, DUMMY_HASH)
        return None
    if not await run_in_threadpool(verify_password, password, user.hashed_password):
        return None
    return user
