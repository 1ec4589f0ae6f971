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
"""specfly — Specification builder and locale message resolver.

Two independent utilities:

- :mod:`specfly.data` — compose query predicates (``Specifications``) and
  render them through SQLAlchemy or MongoDB backends.
- :mod:`specfly.i18n` — resolve message codes against ordered catalogs
  with graceful fallback (``Translator``).
"""

__version__ = "0.1.0"
