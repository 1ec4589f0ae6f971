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
"""SQLAlchemy rendering of specifications.

:class:`SqlAlchemyCriteriaBuilder` turns a backend-agnostic
:class:`~specfly.data.specification.Specification` into a SQLAlchemy
column expression suitable for ``Select.where()``.

Example::

    builder = SqlAlchemyCriteriaBuilder()
    stmt = builder.apply(Specifications.eq(User.role, "admin"), User, select(User))
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from sqlalchemy import ColumnElement, Enum, Select, String, and_, cast, false, func, not_, or_, true

from specfly.data.specification import Specification


class SqlAlchemyCriteriaBuilder:
    """CriteriaBuilder producing SQLAlchemy ``ColumnElement[bool]`` nodes.

    Attributes may be given as mapped attributes (``User.name``) or as
    attribute names resolved on the mapped class passed as ``root``.
    """

    def path(self, root: Any, attribute: Any) -> Any:
        if isinstance(attribute, str):
            if not hasattr(root, attribute):
                raise AttributeError(f"{getattr(root, '__name__', root)!s} has no attribute '{attribute}'")
            return getattr(root, attribute)
        return attribute

    def conjunction(self) -> ColumnElement[bool]:
        return true()

    def disjunction(self) -> ColumnElement[bool]:
        return false()

    def and_(self, left: Any, right: Any) -> ColumnElement[bool]:
        return and_(left, right)

    def or_(self, left: Any, right: Any) -> ColumnElement[bool]:
        return or_(left, right)

    def not_(self, clause: Any) -> ColumnElement[bool]:
        return not_(clause)

    def equal(self, expression: Any, value: Any) -> ColumnElement[bool]:
        return expression == value

    def not_equal(self, expression: Any, value: Any) -> ColumnElement[bool]:
        return expression != value

    def greater_than(self, expression: Any, value: Any) -> ColumnElement[bool]:
        return expression > value

    def greater_than_or_equal(self, expression: Any, value: Any) -> ColumnElement[bool]:
        return expression >= value

    def less_than(self, expression: Any, value: Any) -> ColumnElement[bool]:
        return expression < value

    def less_than_or_equal(self, expression: Any, value: Any) -> ColumnElement[bool]:
        return expression <= value

    def between(self, expression: Any, lower: Any, upper: Any) -> ColumnElement[bool]:
        return expression.between(lower, upper)

    def in_(self, expression: Any, values: Collection[Any]) -> ColumnElement[bool]:
        return expression.in_(list(values))

    def is_null(self, expression: Any) -> ColumnElement[bool]:
        return expression.is_(None)

    def is_not_null(self, expression: Any) -> ColumnElement[bool]:
        return expression.is_not(None)

    def is_true(self, expression: Any) -> ColumnElement[bool]:
        return expression == true()

    def is_false(self, expression: Any) -> ColumnElement[bool]:
        return expression == false()

    def as_string(self, expression: Any) -> Any:
        column_type = getattr(expression, "type", None)
        # Enum subclasses String but may be a native enum type.
        if isinstance(column_type, String) and not isinstance(column_type, Enum):
            return expression
        return cast(expression, String)

    def lower(self, expression: Any) -> Any:
        return func.lower(expression)

    def like(self, expression: Any, pattern: str) -> ColumnElement[bool]:
        return expression.like(pattern)

    # ------------------------------------------------------------------
    # Statement helpers
    # ------------------------------------------------------------------

    def build(self, spec: Specification[Any], root: Any) -> ColumnElement[bool]:
        """Render *spec* for the mapped class *root*."""
        return spec.to_predicate(root, self)

    def apply(self, spec: Specification[Any], root: Any, stmt: Select[Any]) -> Select[Any]:
        """Return *stmt* filtered by *spec*."""
        return stmt.where(self.build(spec, root))
