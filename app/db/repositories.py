from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.account import Account


# --- Account Repository ---


async def find_account_by_email(session: AsyncSession, email: str) -> Account | None:
    result = await session.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def find_account_by_id(session: AsyncSession, account_id: str) -> Account | None:
    result = await session.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def exists_active_account_by_email(session: AsyncSession, email: str) -> bool:
    result = await session.execute(
        select(Account.id).where(Account.email == email, Account.is_deleted.is_(False))
    )
    return result.scalar_one_or_none() is not None


async def save_account(session: AsyncSession, account: Account) -> Account:
    session.add(account)
    await session.flush()
    return account


async def update_subscription_mode(session: AsyncSession, account_id: str, mode: str) -> bool:
    result = await session.execute(
        update(Account).where(Account.id == account_id).values(subscription_mode=mode)
    )
    await session.commit()
    return result.rowcount > 0
