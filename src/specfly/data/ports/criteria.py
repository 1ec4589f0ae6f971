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
"""CriteriaBuilder protocol — port every query backend implements.

A :class:`~specfly.data.specification.Specification` never touches a
backend directly; it asks a ``CriteriaBuilder`` to resolve attribute paths
and to build boolean, comparison, membership and pattern nodes.  The node
type is whatever the backend uses to represent a condition (a SQLAlchemy
column expression, a MongoDB filter document, ...).
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CriteriaBuilder(Protocol):
    """Query-construction capabilities needed to compose specifications."""

    def path(self, root: Any, attribute: Any) -> Any:
        """Resolve *attribute* (a field name or backend attribute) on *root*."""
        ...

    # -- boolean nodes -------------------------------------------------

    def conjunction(self) -> Any:
        """Condition that is always true."""
        ...

    def disjunction(self) -> Any:
        """Condition that is always false."""
        ...

    def and_(self, left: Any, right: Any) -> Any: ...

    def or_(self, left: Any, right: Any) -> Any: ...

    def not_(self, clause: Any) -> Any: ...

    # -- comparison nodes ----------------------------------------------

    def equal(self, expression: Any, value: Any) -> Any: ...

    def not_equal(self, expression: Any, value: Any) -> Any: ...

    def greater_than(self, expression: Any, value: Any) -> Any: ...

    def greater_than_or_equal(self, expression: Any, value: Any) -> Any: ...

    def less_than(self, expression: Any, value: Any) -> Any: ...

    def less_than_or_equal(self, expression: Any, value: Any) -> Any: ...

    def between(self, expression: Any, lower: Any, upper: Any) -> Any:
        """Inclusive range on both bounds."""
        ...

    # -- membership / null / boolean -----------------------------------

    def in_(self, expression: Any, values: Collection[Any]) -> Any: ...

    def is_null(self, expression: Any) -> Any: ...

    def is_not_null(self, expression: Any) -> Any: ...

    def is_true(self, expression: Any) -> Any: ...

    def is_false(self, expression: Any) -> Any: ...

    # -- pattern matching ----------------------------------------------

    def as_string(self, expression: Any) -> Any:
        """Coerce *expression* to text; text expressions are returned unchanged."""
        ...

    def lower(self, expression: Any) -> Any: ...

    def like(self, expression: Any, pattern: str) -> Any:
        """SQL ``LIKE`` semantics: ``%`` matches any run, ``_`` one character."""
        ...
