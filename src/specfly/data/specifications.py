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
"""Fluent factory for type-safe query specifications.

:class:`Specifications` is a namespace of static factories, each returning
a new :class:`~specfly.data.specification.Specification`.  Attributes are
given either as field names (``"name"``) or as backend attribute objects
(``User.name`` for SQLAlchemy models).

Example::

    S = Specifications

    spec = S.and_(
        S.eq(User.role, "admin"),
        S.between(User.age, 18, 65),
        S.like(User.name, " ali "),
    )
    results = await repository.find_all(spec)
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, NoReturn, TypeVar

from specfly.data.specification import Specification

E = TypeVar("E")


class Specifications:
    """Static factories for single-attribute predicates and their composition.

    Not instantiable.
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError(f"{cls.__name__} is a namespace of static factories and cannot be instantiated")

    # ------------------------------------------------------------------
    # Identities and composition
    # ------------------------------------------------------------------

    @staticmethod
    def always() -> Specification[Any]:
        """Always-true predicate; identity for AND-composition."""
        return Specification(lambda root, cb: cb.conjunction())

    @staticmethod
    def never() -> Specification[Any]:
        """Always-false predicate; identity for OR-composition."""
        return Specification(lambda root, cb: cb.disjunction())

    @staticmethod
    def and_(first: Specification[E], *others: Specification[E]) -> Specification[E]:
        """Left-fold *first* and *others* with AND. Returns *first* itself when alone."""
        result = first
        for spec in others:
            result = result & spec
        return result

    @staticmethod
    def or_(first: Specification[E], *others: Specification[E]) -> Specification[E]:
        """Left-fold *first* and *others* with OR. Returns *first* itself when alone."""
        result = first
        for spec in others:
            result = result | spec
        return result

    @staticmethod
    def not_(spec: Specification[E]) -> Specification[E]:
        return ~spec

    # ------------------------------------------------------------------
    # Comparisons
    # ------------------------------------------------------------------

    @staticmethod
    def eq(attribute: Any, value: Any) -> Specification[Any]:
        return Specification(lambda root, cb: cb.equal(cb.path(root, attribute), value))

    @staticmethod
    def neq(attribute: Any, value: Any) -> Specification[Any]:
        return Specification(lambda root, cb: cb.not_equal(cb.path(root, attribute), value))

    @staticmethod
    def ge(attribute: Any, value: Any) -> Specification[Any]:
        """Strictly greater than *value*."""
        return Specification(lambda root, cb: cb.greater_than(cb.path(root, attribute), value))

    @staticmethod
    def geq(attribute: Any, value: Any) -> Specification[Any]:
        """Greater than or equal to *value*."""
        return Specification(lambda root, cb: cb.greater_than_or_equal(cb.path(root, attribute), value))

    @staticmethod
    def le(attribute: Any, value: Any) -> Specification[Any]:
        """Strictly less than *value*."""
        return Specification(lambda root, cb: cb.less_than(cb.path(root, attribute), value))

    @staticmethod
    def leq(attribute: Any, value: Any) -> Specification[Any]:
        """Less than or equal to *value*."""
        return Specification(lambda root, cb: cb.less_than_or_equal(cb.path(root, attribute), value))

    # ------------------------------------------------------------------
    # Ranges
    #
    # "exclusive" names the bound that is made strict.
    # ------------------------------------------------------------------

    @staticmethod
    def between(attribute: Any, lower: Any, upper: Any) -> Specification[Any]:
        """``lower <= attribute <= upper``."""
        return Specification(lambda root, cb: cb.between(cb.path(root, attribute), lower, upper))

    @staticmethod
    def exclusive_between(attribute: Any, lower: Any, upper: Any) -> Specification[Any]:
        """``lower < attribute < upper``."""
        return Specifications.and_(Specifications.ge(attribute, lower), Specifications.le(attribute, upper))

    @staticmethod
    def lower_exclusive_between(attribute: Any, lower: Any, upper: Any) -> Specification[Any]:
        """``lower < attribute <= upper``."""
        return Specifications.and_(Specifications.ge(attribute, lower), Specifications.leq(attribute, upper))

    @staticmethod
    def upper_exclusive_between(attribute: Any, lower: Any, upper: Any) -> Specification[Any]:
        """``lower <= attribute < upper``."""
        return Specifications.and_(Specifications.geq(attribute, lower), Specifications.le(attribute, upper))

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    @staticmethod
    def in_(attribute: Any, values: Collection[Any] | None) -> Specification[Any]:
        """Attribute is one of *values*.

        An empty or ``None`` collection matches nothing, whatever the
        backend does with an empty ``IN`` list.
        """
        if not values:
            return Specifications.never()
        members = list(values)
        return Specification(lambda root, cb: cb.in_(cb.path(root, attribute), members))

    @staticmethod
    def not_in(attribute: Any, values: Collection[Any] | None) -> Specification[Any]:
        """Negation of :meth:`in_`; an empty or ``None`` collection matches everything."""
        return Specifications.not_(Specifications.in_(attribute, values))

    # ------------------------------------------------------------------
    # Null and boolean checks
    # ------------------------------------------------------------------

    @staticmethod
    def is_null(attribute: Any) -> Specification[Any]:
        return Specification(lambda root, cb: cb.is_null(cb.path(root, attribute)))

    @staticmethod
    def not_null(attribute: Any) -> Specification[Any]:
        return Specification(lambda root, cb: cb.is_not_null(cb.path(root, attribute)))

    @staticmethod
    def is_true(attribute: Any) -> Specification[Any]:
        return Specification(lambda root, cb: cb.is_true(cb.path(root, attribute)))

    @staticmethod
    def is_false(attribute: Any) -> Specification[Any]:
        return Specification(lambda root, cb: cb.is_false(cb.path(root, attribute)))

    # ------------------------------------------------------------------
    # Pattern matching
    # ------------------------------------------------------------------

    @staticmethod
    def like(attribute: Any, keyword: str | None) -> Specification[Any]:
        """Case-insensitive substring match of *keyword* against *attribute*.

        The keyword is trimmed and lowercased.  A blank keyword yields
        :meth:`always`, i.e. no filtering at all.  Non-text attributes are
        compared through their string representation.
        """
        pattern = _pattern_keyword(keyword)
        if not pattern:
            return Specifications.always()
        return Specification(
            lambda root, cb: cb.like(cb.lower(cb.as_string(cb.path(root, attribute))), pattern)
        )

    @staticmethod
    def not_like(attribute: Any, keyword: str | None) -> Specification[Any]:
        return Specifications.not_(Specifications.like(attribute, keyword))


def _pattern_keyword(keyword: str | None) -> str:
    """Return ``%keyword%`` (trimmed, lowercased), or ``""`` for a blank keyword."""
    if keyword is None or not keyword.strip():
        return ""
    return f"%{keyword.strip().lower()}%"
