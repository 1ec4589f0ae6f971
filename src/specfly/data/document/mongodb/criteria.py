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
"""MongoDB rendering of specifications.

:class:`MongoCriteriaBuilder` turns a backend-agnostic
:class:`~specfly.data.specification.Specification` into a MongoDB filter
document that can be passed to ``collection.find()``.

Example::

    builder = MongoCriteriaBuilder()
    filter_doc = builder.build(Specifications.geq("age", 18) & Specifications.is_true("active"))
    # {"$and": [{"age": {"$gte": 18}}, {"active": True}]}
"""

from __future__ import annotations

import dataclasses
import re
import types
import typing
from collections.abc import Collection
from typing import Any

from specfly.data.specification import Specification

Document = dict[str, Any]


@dataclasses.dataclass(frozen=True)
class FieldPath:
    """A document field reference plus the transformations applied to it.

    ``text`` is ``None`` when the field type is unknown.
    """

    name: str
    text: bool | None = True
    coerced: bool = False
    lowered: bool = False


def _never() -> Document:
    return {"_id": {"$in": []}}


def _is_never(doc: Document) -> bool:
    return doc == _never()


class MongoCriteriaBuilder:
    """CriteriaBuilder producing MongoDB filter documents.

    ``{}`` is the always-true document and ``{"_id": {"$in": []}}`` the
    always-false one; the boolean nodes simplify around both.
    """

    def path(self, root: Any, attribute: Any) -> FieldPath:
        if isinstance(attribute, FieldPath):
            return attribute
        name = str(attribute)
        return FieldPath(name=name, text=_declares_text(root, name))

    # -- boolean nodes -------------------------------------------------

    def conjunction(self) -> Document:
        return {}

    def disjunction(self) -> Document:
        return _never()

    def and_(self, left: Document, right: Document) -> Document:
        if not left:
            return right
        if not right:
            return left
        if _is_never(left) or _is_never(right):
            return _never()
        return {"$and": [left, right]}

    def or_(self, left: Document, right: Document) -> Document:
        if not left or not right:
            return {}
        if _is_never(left):
            return right
        if _is_never(right):
            return left
        return {"$or": [left, right]}

    def not_(self, clause: Document) -> Document:
        if not clause:
            return _never()
        if _is_never(clause):
            return {}
        return {"$nor": [clause]}

    # -- comparison nodes ----------------------------------------------

    def equal(self, expression: FieldPath, value: Any) -> Document:
        return {expression.name: value}

    def not_equal(self, expression: FieldPath, value: Any) -> Document:
        return {expression.name: {"$ne": value}}

    def greater_than(self, expression: FieldPath, value: Any) -> Document:
        return {expression.name: {"$gt": value}}

    def greater_than_or_equal(self, expression: FieldPath, value: Any) -> Document:
        return {expression.name: {"$gte": value}}

    def less_than(self, expression: FieldPath, value: Any) -> Document:
        return {expression.name: {"$lt": value}}

    def less_than_or_equal(self, expression: FieldPath, value: Any) -> Document:
        return {expression.name: {"$lte": value}}

    def between(self, expression: FieldPath, lower: Any, upper: Any) -> Document:
        return {expression.name: {"$gte": lower, "$lte": upper}}

    # -- membership / null / boolean -----------------------------------

    def in_(self, expression: FieldPath, values: Collection[Any]) -> Document:
        return {expression.name: {"$in": list(values)}}

    def is_null(self, expression: FieldPath) -> Document:
        # Matches both explicit nulls and missing fields.
        return {expression.name: None}

    def is_not_null(self, expression: FieldPath) -> Document:
        return {expression.name: {"$ne": None}}

    def is_true(self, expression: FieldPath) -> Document:
        return {expression.name: True}

    def is_false(self, expression: FieldPath) -> Document:
        return {expression.name: False}

    # -- pattern matching ----------------------------------------------

    def as_string(self, expression: FieldPath) -> FieldPath:
        if expression.text is True:
            return expression
        return dataclasses.replace(expression, coerced=True)

    def lower(self, expression: FieldPath) -> FieldPath:
        return dataclasses.replace(expression, lowered=True)

    def like(self, expression: FieldPath, pattern: str) -> Document:
        regex = like_to_regex(pattern)
        options = "i" if expression.lowered else ""
        if expression.coerced:
            # $regexMatch rejects null input.
            value = {"$ifNull": [f"${expression.name}", ""]}
            match: Document = {"input": {"$toString": value}, "regex": regex}
            if options:
                match["options"] = options
            return {"$expr": {"$regexMatch": match}}
        condition: Document = {"$regex": regex}
        if options:
            condition["$options"] = options
        return {expression.name: condition}

    # ------------------------------------------------------------------

    def build(self, spec: Specification[Any], root: Any = None) -> Document:
        """Render *spec* as a filter document.

        *root* is an optional model class; its type hints tell which
        fields hold text.  Fields of unknown type are matched through their
        string form.
        """
        return spec.to_predicate(root, self)


def like_to_regex(pattern: str) -> str:
    """Translate an SQL ``LIKE`` pattern into an anchored regular expression.

    The wildcards also match line breaks, as ``LIKE`` does.
    """
    parts = []
    for ch in pattern:
        if ch == "%":
            parts.append(r"[\s\S]*")
        elif ch == "_":
            parts.append(r"[\s\S]")
        else:
            parts.append(re.escape(ch))
    return "^" + "".join(parts) + "$"


def _declares_text(root: Any, name: str) -> bool | None:
    """Whether *root* declares field *name* as ``str``; ``None`` when the type is unknown."""
    if root is None:
        return None
    try:
        hints = typing.get_type_hints(root)
    except (NameError, TypeError):
        return None
    hint = hints.get(name)
    if hint is None:
        return None
    if hint is str:
        return True
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        return str in typing.get_args(hint)
    return False
