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
"""Tests for MongoCriteriaBuilder — specifications as MongoDB filter documents."""

from __future__ import annotations

from dataclasses import dataclass

import mongomock
import pytest

from specfly.data.document.mongodb.criteria import MongoCriteriaBuilder, like_to_regex
from specfly.data.ports.criteria import CriteriaBuilder
from specfly.data.specification import Specification
from specfly.data.specifications import Specifications as S


@dataclass
class ProductDoc:
    name: str
    category: str | None
    price: int
    active: bool


ALL = ["Apple Pie", "Blue Cheese", "Green Pear", "Milk", "Red Apple"]

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def collection():
    client = mongomock.MongoClient()
    products = client["test_db"]["products"]
    products.insert_many(
        [
            {"name": "Red Apple", "category": "fruit", "price": 10, "active": True},
            {"name": "Green Pear", "category": "fruit", "price": 20, "active": True},
            {"name": "Blue Cheese", "category": "dairy", "price": 30, "active": False},
            {"name": "Apple Pie", "category": None, "price": 40, "active": False},
            {"name": "Milk", "category": "dairy", "price": 50, "active": True},
        ]
    )
    yield products
    client.close()


def _build(spec: Specification[ProductDoc]) -> dict:
    return MongoCriteriaBuilder().build(spec, ProductDoc)


def _names(collection, spec: Specification[ProductDoc]) -> list[str]:
    return sorted(doc["name"] for doc in collection.find(_build(spec)))


# ---------------------------------------------------------------------------
# Document shapes
# ---------------------------------------------------------------------------


class TestDocumentShapes:
    def test_implements_criteria_builder(self):
        assert isinstance(MongoCriteriaBuilder(), CriteriaBuilder)

    def test_identities(self):
        assert _build(S.always()) == {}
        assert _build(S.never()) == {"_id": {"$in": []}}

    def test_and_or_not(self):
        spec = S.or_(S.eq("category", "fruit") & S.ge("price", 10), ~S.is_true("active"))
        assert _build(spec) == {
            "$or": [
                {"$and": [{"category": "fruit"}, {"price": {"$gt": 10}}]},
                {"$nor": [{"active": True}]},
            ]
        }

    def test_identities_simplify(self):
        fruit = S.eq("category", "fruit")
        assert _build(S.always() & fruit) == {"category": "fruit"}
        assert _build(S.never() | fruit) == {"category": "fruit"}
        assert _build(S.always() | fruit) == {}
        assert _build(S.never() & fruit) == {"_id": {"$in": []}}
        assert _build(~S.always()) == {"_id": {"$in": []}}
        assert _build(~S.never()) == {}

    def test_range_documents(self):
        assert _build(S.between("price", 1, 5)) == {"price": {"$gte": 1, "$lte": 5}}
        assert _build(S.exclusive_between("price", 1, 5)) == {
            "$and": [{"price": {"$gt": 1}}, {"price": {"$lt": 5}}]
        }

    def test_like_on_text_field(self):
        assert _build(S.like("name", " Ap.ple ")) == {
            "name": {"$regex": r"^[\s\S]*ap\.ple[\s\S]*$", "$options": "i"}
        }

    def test_like_on_declared_non_text_field(self):
        assert _build(S.like("price", "5")) == {
            "$expr": {
                "$regexMatch": {
                    "input": {"$toString": {"$ifNull": ["$price", ""]}},
                    "regex": r"^[\s\S]*5[\s\S]*$",
                    "options": "i",
                }
            }
        }

    def test_like_without_root_matches_string_form(self):
        doc = MongoCriteriaBuilder().build(S.like("price", "5"))
        assert doc == {
            "$expr": {
                "$regexMatch": {
                    "input": {"$toString": {"$ifNull": ["$price", ""]}},
                    "regex": r"^[\s\S]*5[\s\S]*$",
                    "options": "i",
                }
            }
        }

    def test_like_to_regex(self):
        assert like_to_regex("%a_b%") == r"^[\s\S]*a[\s\S]b[\s\S]*$"
        assert like_to_regex("1+1") == r"^1\+1$"


# ---------------------------------------------------------------------------
# Execution against a document store
# ---------------------------------------------------------------------------


class TestExecution:
    def test_always_and_never(self, collection):
        assert _names(collection, S.always()) == ALL
        assert _names(collection, S.never()) == []

    def test_comparisons(self, collection):
        assert _names(collection, S.ge("price", 30)) == ["Apple Pie", "Milk"]
        assert _names(collection, S.leq("price", 20)) == ["Green Pear", "Red Apple"]
        assert _names(collection, S.neq("category", "fruit")) == ["Apple Pie", "Blue Cheese", "Milk"]

    def test_ranges(self, collection):
        assert _names(collection, S.between("price", 20, 40)) == ["Apple Pie", "Blue Cheese", "Green Pear"]
        assert _names(collection, S.exclusive_between("price", 20, 40)) == ["Blue Cheese"]
        assert _names(collection, S.upper_exclusive_between("price", 20, 40)) == ["Blue Cheese", "Green Pear"]

    def test_membership(self, collection):
        assert _names(collection, S.in_("category", ["fruit"])) == ["Green Pear", "Red Apple"]
        assert _names(collection, S.not_in("category", [])) == ALL
        assert _names(collection, S.in_("category", [])) == []

    def test_null_and_boolean(self, collection):
        assert _names(collection, S.is_null("category")) == ["Apple Pie"]
        assert _names(collection, S.is_false("active")) == ["Apple Pie", "Blue Cheese"]

    def test_like(self, collection):
        assert _names(collection, S.like("name", "APPLE")) == ["Apple Pie", "Red Apple"]
        assert _names(collection, S.not_like("name", "apple")) == ["Blue Cheese", "Green Pear", "Milk"]
        assert _names(collection, S.like("name", "   ")) == ALL

    def test_like_on_declared_non_text_field(self, collection):
        assert _names(collection, S.like("price", "5")) == ["Milk"]

    def test_like_without_root_matches_numbers_and_text(self, collection):
        def names(spec):
            return sorted(doc["name"] for doc in collection.find(MongoCriteriaBuilder().build(spec)))

        assert names(S.like("price", "3")) == ["Blue Cheese"]
        assert names(S.like("category", "DAIRY")) == ["Blue Cheese", "Milk"]
        assert names(S.not_like("price", "0")) == []

    def test_like_matches_across_line_breaks(self, collection):
        collection.insert_one({"name": "Gift\nBasket", "category": "gift", "price": 60, "active": True})
        assert _names(collection, S.like("name", "basket")) == ["Gift\nBasket"]
        assert _names(collection, S.like("name", "t_b")) == ["Gift\nBasket"]
        assert _names(collection, S.like("note", "basket")) == []

    def test_double_negation(self, collection):
        spec = S.is_true("active")
        assert _names(collection, ~~spec) == _names(collection, spec)
