from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


# Accepted aliases -> canonical environment
ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "develop": Env.DEV,
    "testing": Env.TEST,
    "ci": Env.TEST,
    "preview": Env.TEST,
    "production": Env.PROD,
}


def parse_env(raw: str | None) -> Env | None:
    if not raw:
        return None
    value = raw.strip().lower()
    try:
        return Env(value)
    except ValueError:
        return ALIASES.get(value)


@cache
def get_env() -> Env:
    """
    Resolve the running environment once.

    Read from APP_ENV, defaulting to "local".
    Unknown values fall back to LOCAL with a warning.
    """
    raw = os.getenv("APP_ENV")
    env = parse_env(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized environment '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        env = Env.LOCAL
    return env


def is_prod(env: Env | None = None) -> bool:
    return (env or get_env()) is Env.PROD


def pick(*, prod, nonprod, dev=None, test=None, local=None, env: Env | None = None):
    """
    Choose a value for the active environment.

    Example:
        level = pick(prod="INFO", nonprod="DEBUG")
    """
    e = env or get_env()
    if e is Env.PROD:
        return prod
    overrides = {Env.DEV: dev, Env.TEST: test, Env.LOCAL: local}
    chosen = overrides.get(e)
    return nonprod if chosen is None else chosen
