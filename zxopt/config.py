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

"""
Configuration of a simplification and extraction run.

All policy knobs are collected in an :class:`EngineConfig` value that is passed
explicitly to :func:`zxopt.simplify.reduce`, :func:`zxopt.extract.extract_circuit`
and the pipeline functions. Nothing is read from global state at call time.

:meth:`EngineConfig.from_env` is a convenience loader for scripts. It reads a
``.env`` file and the ``ZXOPT_*`` environment variables:

- ``ZXOPT_MODE``: ``full`` or ``bounded``
- ``ZXOPT_MAX_REWRITES``: rewrite count for bounded mode
- ``ZXOPT_RULE_ORDER``: comma separated rule names, e.g. ``spider,id,pivot,lcomp``
- ``ZXOPT_SEARCH_CAP``: extraction search cap
- ``ZXOPT_ALLOW_FALLBACK``: ``1``/``true`` to use the linear extraction fallback
- ``ZXOPT_TOLERANCE``: numeric tolerance of gate synthesis
- ``ZXOPT_TIME_LIMIT``: seconds per diagram

Precedence: explicit keyword > environment variable > default.
"""

import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv

__all__ = ['SimplifyMode', 'EngineConfig', 'RULE_NAMES', 'DEFAULT_RULE_ORDER']

RULE_NAMES: Tuple[str, ...] = ("hadamard", "spider", "id", "pivot", "lcomp")
DEFAULT_RULE_ORDER: Tuple[str, ...] = ("hadamard", "spider", "id", "pivot", "lcomp")

ENV_PREFIX = "ZXOPT_"


class SimplifyMode(str, Enum):
    FULL = "full"
    BOUNDED = "bounded"


def _parse_bool(value: str) -> bool:
    v = value.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Cannot interpret '{value}' as a boolean")


@dataclass(frozen=True)
class EngineConfig:
    """Explicit configuration value of the engine.

    :param mode: ``FULL`` reduces to a fixed point, ``BOUNDED`` stops after
       ``max_rewrites`` rule applications.
    :param max_rewrites: Rewrite budget in bounded mode.
    :param rule_order: Priority order of the rewrite rules. Every entry must be
       one of :data:`RULE_NAMES`.
    :param search_cap: Maximal number of frontier row combinations examined
       each time extraction gets stuck.
    :param allow_fallback: Use Gaussian elimination instead of raising
       :class:`~zxopt.errors.ExtractionIntractable` when the cap is exceeded.
       Off by default, so ``search_cap=0`` raises on the first stuck frontier.
    :param tolerance: Numeric tolerance of the gate synthesis adapter.
    :param time_limit: Optional wall-clock limit in seconds per diagram.
    """
    mode: SimplifyMode = SimplifyMode.FULL
    max_rewrites: Optional[int] = None
    rule_order: Tuple[str, ...] = DEFAULT_RULE_ORDER
    search_cap: int = 1 << 16
    allow_fallback: bool = False
    tolerance: float = 1e-9
    time_limit: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", SimplifyMode(self.mode))
        object.__setattr__(self, "rule_order", tuple(self.rule_order))
        unknown = [r for r in self.rule_order if r not in RULE_NAMES]
        if unknown:
            raise ValueError(f"Unknown rule(s) {unknown}. Available: {list(RULE_NAMES)}")
        if len(set(self.rule_order)) != len(self.rule_order):
            raise ValueError(f"Duplicate rule in rule_order {self.rule_order}")
        if self.mode == SimplifyMode.BOUNDED and self.max_rewrites is None:
            raise ValueError("Bounded simplification needs max_rewrites")
        if self.max_rewrites is not None and self.max_rewrites < 0:
            raise ValueError("max_rewrites must be non-negative")
        if self.search_cap < 0:
            raise ValueError("search_cap must be non-negative")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")

    @classmethod
    def full(cls, **kwargs: Any) -> 'EngineConfig':
        return cls(mode=SimplifyMode.FULL, **kwargs)

    @classmethod
    def bounded(cls, max_rewrites: int, **kwargs: Any) -> 'EngineConfig':
        return cls(mode=SimplifyMode.BOUNDED, max_rewrites=max_rewrites, **kwargs)

    def with_options(self, **kwargs: Any) -> 'EngineConfig':
        return replace(self, **kwargs)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides: Any) -> 'EngineConfig':
        """Builds a configuration from ``ZXOPT_*`` environment variables.

        Values from a ``.env`` file are loaded first but never override
        variables already present in the environment.
        """
        load_dotenv(dotenv_path)
        values: Dict[str, Any] = {}

        def env(name: str) -> Optional[str]:
            return os.environ.get(ENV_PREFIX + name)

        if env("MODE"):
            values["mode"] = SimplifyMode(env("MODE").strip().lower())
        if env("MAX_REWRITES"):
            values["max_rewrites"] = int(env("MAX_REWRITES"))
        if env("RULE_ORDER"):
            values["rule_order"] = tuple(
                r.strip().lower() for r in env("RULE_ORDER").split(",") if r.strip())
        if env("SEARCH_CAP"):
            values["search_cap"] = int(env("SEARCH_CAP"))
        if env("ALLOW_FALLBACK") is not None:
            values["allow_fallback"] = _parse_bool(env("ALLOW_FALLBACK"))
        if env("TOLERANCE"):
            values["tolerance"] = float(env("TOLERANCE"))
        if env("TIME_LIMIT"):
            values["time_limit"] = float(env("TIME_LIMIT"))

        values.update(overrides)
        return cls(**values)
