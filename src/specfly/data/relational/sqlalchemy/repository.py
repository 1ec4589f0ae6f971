# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Read-side repository that executes specifications on an ``AsyncSession``."""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast, get_args, get_origin

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from specfly.data.relational.sqlalchemy.criteria import SqlAlchemyCriteriaBuilder
from specfly.data.specification import Specification
from specfly.kernel.exceptions import ResourceNotFoundException

T = TypeVar("T")
ID = TypeVar("ID")


class SpecificationRepository(Generic[T, ID]):
    """Query a mapped entity with :class:`Specification` filters.

    The session is owned by the caller; this class never commits, flushes
    or closes it.

    Type Parameters:
        T: The entity type (any SQLAlchemy mapped class).
        ID: The primary key type (e.g. UUID, int, str).

    Usage::

        class UserRepository(SpecificationRepository[User, int]):
            pass

        repo = UserRepository(session=session)
        admins = await repo.find_all(Specifications.eq(User.role, "admin"))
    """

    _entity_type: type | None = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in getattr(cls, "__orig_bases__", []):
            if get_origin(base) is SpecificationRepository:
                args = get_args(base)
                if args and not isinstance(args[0], TypeVar):
                    cls._entity_type = args[0]
                break

    def __init__(
        self,
        model: type[T] | None = None,
        session: AsyncSession | None = None,
        builder: SqlAlchemyCriteriaBuilder | None = None,
    ) -> None:
        resolved = model or getattr(type(self), "_entity_type", None)
        if resolved is None:
            raise TypeError(
                f"{type(self).__name__} requires either SpecificationRepository[Entity, ID] "
                "declaration or explicit model argument"
            )
        self._model: type[T] = cast(type[T], resolved)
        self._session = session
        self._builder = builder or SqlAlchemyCriteriaBuilder()

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("No AsyncSession configured for this repository")
        return self._session

    def _select(self, spec: Specification[T] | None) -> Select[Any]:
        stmt = select(self._model)
        if spec is not None:
            stmt = self._builder.apply(spec, self._model, stmt)
        return stmt

    async def find_all(self, spec: Specification[T] | None = None) -> list[T]:
        """Return every entity matching *spec* (all entities when ``None``)."""
        result = await self._require_session().execute(self._select(spec))
        return list(result.scalars().all())

    async def find_one(self, spec: Specification[T]) -> T | None:
        """Return the single entity matching *spec*, or ``None``.

        Raises ``sqlalchemy.exc.MultipleResultsFound`` when more than one row matches.
        """
        result = await self._require_session().execute(self._select(spec))
        return result.scalars().one_or_none()

    async def count(self, spec: Specification[T] | None = None) -> int:
        """Count entities matching *spec* (all entities when ``None``)."""
        stmt = select(func.count()).select_from(self._select(spec).subquery())
        result = await self._require_session().execute(stmt)
        return result.scalar_one()

    async def exists(self, spec: Specification[T]) -> bool:
        return await self.count(spec) > 0

    async def find_by_id_or_none(self, id: ID) -> T | None:
        return await self._require_session().get(self._model, id)

    async def find_by_id_or_fail(self, id: ID) -> T:
        """Return the entity with primary key *id* or raise ResourceNotFoundException."""
        entity = await self.find_by_id_or_none(id)
        if entity is None:
            raise ResourceNotFoundException(
                f"{self._model.__name__} with id {id!r} not found",
                code="ENTITY_NOT_FOUND",
                context={"entity": self._model.__name__, "id": id},
            )
        return entity
