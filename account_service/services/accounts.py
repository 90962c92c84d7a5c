import logging
from typing import List, Optional
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from account_service.core.security import get_password_hash
from account_service.models.user import Account, UserRole, PROFILE_MODELS
from account_service.schemas.account import AccountRead

logger = logging.getLogger(__name__)

class AccountError(Exception):
    """Base class for account operations that storage refused or could not resolve."""

class AccountNotFoundError(AccountError):
    def __init__(self, email: str) -> None:
        super().__init__(f"No account found with email '{email}'")
        self.email = email

class AccountConflictError(AccountError):
    def __init__(self, email: str) -> None:
        super().__init__(f"An account with email '{email}' already exists")
        self.email = email

class AccountService:
    """
    Account CRUD over an injected AsyncSession.
    Every write commits (or rolls back) its own transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_accounts(self) -> List[Account]:
        result = await self.session.execute(select(Account).order_by(Account.id))
        return list(result.scalars().all())

    async def get_account(self, account_id: int) -> Optional[Account]:
        return await self.session.get(Account, account_id)

    async def find_by_email(self, email: str) -> Account:
        result = await self.session.execute(select(Account).where(Account.email == email))
        account = result.scalars().first()
        if not account:
            raise AccountNotFoundError(email)
        return account

    async def create_account(self, role: UserRole, username: str, email: str, password: str) -> Account:
        """Create an account together with the profile row of its role."""
        account = Account(
            username=username,
            email=email,
            role=role,
            hashed_password=get_password_hash(password),
        )
        try:
            self.session.add(account)
            await self.session.flush()  # Get ID
            self.session.add(PROFILE_MODELS[role](account_id=account.id))
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise AccountConflictError(email) from exc
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        await self.session.refresh(account)
        logger.info("Created account id=%s role=%s", account.id, role.value)
        return account

    async def update_password(self, email: str, password: str) -> Account:
        account = await self.find_by_email(email)
        account.hashed_password = get_password_hash(password)
        try:
            self.session.add(account)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        await self.session.refresh(account)
        logger.info("Updated password for account id=%s", account.id)
        return account

    async def delete_account(self, email: str) -> AccountRead:
        """
        Delete an account and its role profile in one transaction.
        Returns a snapshot of the account as it was before deletion.
        """
        account = await self.find_by_email(email)
        deleted = AccountRead.model_validate(account)
        try:
            # Profiles go first so the delete does not rely on the backend enforcing ON DELETE CASCADE
            for profile_model in PROFILE_MODELS.values():
                await self.session.execute(
                    delete(profile_model).where(profile_model.account_id == account.id)
                )
            await self.session.delete(account)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        logger.info("Deleted account id=%s", deleted.id)
        return deleted
