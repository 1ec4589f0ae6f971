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
"""specfly Data — composable query specifications with pluggable backends.

The composition layer (:class:`Specification`, :class:`Specifications`) is
backend-agnostic; backends implement :class:`CriteriaBuilder`:

    - **Relational** (``specfly.data.relational.sqlalchemy``) — SQLAlchemy WHERE clauses.
    - **Document** (``specfly.data.document.mongodb``) — MongoDB filter documents.
"""

from specfly.data.document.mongodb import MongoCriteriaBuilder
from specfly.data.ports.criteria import CriteriaBuilder
from specfly.data.relational.sqlalchemy import SpecificationRepository, SqlAlchemyCriteriaBuilder
from specfly.data.specification import Specification
from specfly.data.specifications import Specifications

__all__ = [
    "CriteriaBuilder",
    "MongoCriteriaBuilder",
    "Specification",
    "SpecificationRepository",
    "Specifications",
    "SqlAlchemyCriteriaBuilder",
]
