"""User repository for user-specific database operations."""

from decimal import Decimal

from sqlalchemy import select, update

from tonswap.models.user import User
from tonswap.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with user-specific queries.

    Provides lookups by email, username and referral code, plus the atomic
    counter update used by the referral ledger.

    Example:
        >>> repo = UserRepository(User, db)
        >>> user = await repo.get_by_referral_code("ABC-12345")
    """

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address.

        Args:
            email: The email address to search for

        Returns:
            User object if found, None otherwise
        """
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username.

        Args:
            username: The username to search for

        Returns:
            User object if found, None otherwise
        """
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_username_or_email(self, identifier: str) -> User | None:
        """Get user by username or email address.

        Tries username first, then falls back to email lookup if not found.
        Useful for login flows where users can authenticate with either.

        Args:
            identifier: Username or email address

        Returns:
            User object if found, None otherwise
        """
        user = await self.get_by_username(identifier)

        if not user:
            user = await self.get_by_email(identifier)

        return user

    async def get_by_referral_code(self, referral_code: str) -> User | None:
        """Get the user owning a referral code.

        Codes are matched exactly; ``"abc-12345"`` does not match ``"ABC-12345"``.

        Args:
            referral_code: Referral code carried by a swap

        Returns:
            User object if found, None otherwise

        Example:
            >>> user = await repo.get_by_referral_code("ABC-12345")
            >>> if user:
            ...     print(user.commission_rate)
        """
        result = await self.db.execute(select(User).where(User.referral_code == referral_code))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if email address is already registered."""
        user = await self.get_by_email(email)
        return user is not None

    async def exists_by_username(self, username: str) -> bool:
        """Check if username is already registered."""
        user = await self.get_by_username(username)
        return user is not None

    async def exists_by_referral_code(self, referral_code: str) -> bool:
        """Check if a referral code is already taken."""
        user = await self.get_by_referral_code(referral_code)
        return user is not None

    async def add_referral(self, user: User, commission: Decimal) -> User:
        """Count one referral and add its commission to the user's totals.

        Issued as a single ``UPDATE ... SET col = col + x`` so concurrent
        swaps with the same code never lose an increment.

        Args:
            user: The referring user
            commission: Commission earned for the referred swap

        Returns:
            The user refreshed with the new totals
        """
        await self.db.execute(
            update(User)
            .where(User.id == user.id)
            .values(
                referrals=User.referrals + 1,
                total_commission=User.total_commission + commission,
            )
            .execution_options(synchronize_session=False)
        )
        await self.db.refresh(user)
        return user
