#Environment-driven overrides for the policy objects.
#No business logic: only reads and parses variables.

from .env import env_float, env_int, env_int_tuple, load_environment, warn_unknown_overrides

__all__ = [
    "env_float",
    "env_int",
    "env_int_tuple",
    "load_environment",
    "warn_unknown_overrides",
]
