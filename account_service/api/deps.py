from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from account_service.db.session import get_session
from account_service.services.accounts import AccountService

def get_account_service(
    session: AsyncSession = Depends(get_session),
) -> AccountService:
    return AccountService(session)
