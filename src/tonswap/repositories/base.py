"""Generic async CRUD shared by the model repositories."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tonswap.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


def _as_values(obj_in: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(obj_in, BaseModel):
        return obj_in.model_dump(exclude_unset=True)
    return dict(obj_in)


class BaseRepository(Generic[ModelType]):
    """CRUD for one model class over a caller-owned session.

    Methods flush but never commit; ``get_db`` or ``transactional`` decides
    when the unit of work ends.

        repo = WalletRepository(Wallet, db)
        wallet = await repo.get("uqbvw8z5")
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any) -> ModelType | None:
        """Look a record up by primary key."""
        return await self.db.get(self.model, id)

    async def get_multi(self, *, skip: int = 0, limit: int = 100) -> list[ModelType]:
        result = await self.db.execute(select(self.model).offset(skip).limit(limit))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())

    async def exists(self, id: Any) -> bool:
        return await self.get(id) is not None

    async def create(self, *, obj_in: BaseModel | dict[str, Any]) -> ModelType:
        """Insert a record built from a schema or a plain dict of column values."""
        db_obj = self.model(**_as_values(obj_in))
        self.db.add(db_obj)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        *,
        db_obj: ModelType,
        obj_in: BaseModel | dict[str, Any],
    ) -> ModelType:
        """Apply a partial update; fields left unset on a schema are not touched."""
        for field, value in _as_values(obj_in).items():
            setattr(db_obj, field, value)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj
