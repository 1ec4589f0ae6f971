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
"""Composable query predicates, independent of any query backend.

Inspired by Spring Data's ``Specification`` pattern.  A *Specification*
wraps a callable that receives an entity ``root`` and a
:class:`~specfly.data.ports.criteria.CriteriaBuilder`, and returns the
backend's condition node.  The same specification can therefore be
rendered as a SQLAlchemy WHERE clause or as a MongoDB filter document.

Example::

    active = Specification(lambda root, cb: cb.is_true(cb.path(root, "active")))
    admin  = Specification(lambda root, cb: cb.equal(cb.path(root, "role"), "admin"))

    active & admin   # active admins
    active | admin   # active OR admin
    ~active          # inactive
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from specfly.data.ports.criteria import CriteriaBuilder

T = TypeVar("T")

Predicate = Callable[[Any, CriteriaBuilder], Any]


class Specification(Generic[T]):
    """Immutable, composable boolean condition over entity type ``T``.

    Specifications can be combined using the standard Python operators:

    * ``spec_a & spec_b`` — both predicates must match (AND).
    * ``spec_a | spec_b`` — either predicate may match (OR).
    * ``~spec_a`` — negated predicate (NOT).

    Combining never mutates an operand; a new ``Specification`` is returned.
    """

    __slots__ = ("_predicate",)

    def __init__(self, predicate: Predicate) -> None:
        object.__setattr__(self, "_predicate", predicate)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def where(cls, predicate: Predicate) -> Specification[T]:
        """Alternate constructor that reads well at call sites."""
        return cls(predicate)

    def to_predicate(self, root: Any, builder: CriteriaBuilder) -> Any:
        """Render this specification as *builder*'s condition node for *root*."""
        return self._predicate(root, builder)

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def __and__(self, other: Specification[T]) -> Specification[T]:
        left, right = self._predicate, other._predicate
        return Specification(lambda root, cb: cb.and_(left(root, cb), right(root, cb)))

    def __or__(self, other: Specification[T]) -> Specification[T]:
        left, right = self._predicate, other._predicate
        return Specification(lambda root, cb: cb.or_(left(root, cb), right(root, cb)))

    def __invert__(self) -> Specification[T]:
        pred = self._predicate
        return Specification(lambda root, cb: cb.not_(pred(root, cb)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._predicate!r})"
