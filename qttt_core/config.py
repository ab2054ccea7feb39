from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUTHY = ('1', 'true', 'yes', 'on')


def _env_flag(env: Mapping[str, str], name: str, default: str = '0') -> bool:
    return env.get(name, default).strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


@dataclass(frozen=True)
class Settings:
    """Driver settings read from the environment. CLI flags take precedence."""
    log_level: str = 'WARNING'
    debug: bool = False
    seed: Optional[int] = None

    @property
    def effective_log_level(self) -> str:
        return 'DEBUG' if self.debug else self.log_level

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Reads:
        - QTTT_LOG_LEVEL: logging level name (default WARNING)
        - QTTT_DEBUG: 1/true/yes/on forces DEBUG logging
        - QTTT_SEED: integer seed for the random opponent
        """
        env = os.environ if env is None else env
        return cls(
            log_level=env.get('QTTT_LOG_LEVEL', 'WARNING').strip().upper() or 'WARNING',
            debug=_env_flag(env, 'QTTT_DEBUG'),
            seed=_env_int(env, 'QTTT_SEED'),
        )
