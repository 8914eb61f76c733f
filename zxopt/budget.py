# zxopt - ZX-diagram simplification and circuit extraction
#         for quantum circuit optimization

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Cooperative cancellation for long-running simplification and extraction.

A :class:`Budget` is handed in by the caller and inspected between rewrite
applications and extraction steps. Nothing is ever pre-empted: an exhausted
budget only stops the work at the next check.
"""

import time
from typing import Optional

__all__ = ['Budget']


class Budget:
    """Step and wall-clock limits for a single diagram run.

    :param max_steps: Number of steps (rewrite applications, extraction
       iterations) that may be spent. ``None`` means unlimited.
    :param time_limit: Seconds from construction after which the budget is
       exhausted. ``None`` means no deadline.
    """

    def __init__(self, max_steps: Optional[int] = None, time_limit: Optional[float] = None) -> None:
        if max_steps is not None and max_steps < 0:
            raise ValueError("max_steps must be non-negative")
        self.max_steps = max_steps
        self.deadline = None if time_limit is None else time.monotonic() + time_limit
        self.steps = 0
        self._cancelled = False

    @classmethod
    def unlimited(cls) -> 'Budget':
        return cls()

    def cancel(self) -> None:
        """Exhausts the budget; the running operation stops at its next check."""
        self._cancelled = True

    def spend(self, n: int = 1) -> None:
        self.steps += n

    @property
    def remaining(self) -> Optional[int]:
        if self.max_steps is None:
            return None
        return max(0, self.max_steps - self.steps)

    @property
    def exhausted(self) -> bool:
        if self._cancelled:
            return True
        if self.max_steps is not None and self.steps >= self.max_steps:
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return True
        return False

    def __repr__(self) -> str:
        return "Budget(steps={}, max_steps={}, exhausted={})".format(
            self.steps, self.max_steps, self.exhausted)
