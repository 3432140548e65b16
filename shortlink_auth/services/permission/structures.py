# Copyright Thales 2025
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


from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SchemaResource:
    """Raw bytes of one bundled schema definition and its path inside the bundle."""

    path: str
    data: bytes


@dataclass(frozen=True)
class SyncOutcome:
    """Result of applying a single definition."""

    path: str
    written_at: str | None = None


@dataclass
class SynchronizationResult:
    """Ordered outcomes of one synchronization run. Never persisted."""

    outcomes: list[SyncOutcome] = field(default_factory=list)

    @property
    def paths(self) -> list[str]:
        return [outcome.path for outcome in self.outcomes]

    @property
    def last_token(self) -> str | None:
        for outcome in reversed(self.outcomes):
            if outcome.written_at is not None:
                return outcome.written_at
        return None

    def __len__(self) -> int:
        return len(self.outcomes)
