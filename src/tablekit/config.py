"""Environment-driven defaults for tables built by tablekit.

Values come from ``TABLEKIT_*`` environment variables. Numeric values are
clamped into the ranges the engine accepts; values that are not numbers
at all are a configuration error.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_ITEMS_PER_PAGE = "TABLEKIT_ITEMS_PER_PAGE"
ENV_PAGE_RANGE = "TABLEKIT_PAGE_RANGE"
ENV_SHOW_EDGE_BUTTONS = "TABLEKIT_SHOW_EDGE_BUTTONS"
ENV_LOG_LEVEL = "TABLEKIT_LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class TableDefaults:
    items_per_page: int = 10
    page_range: int = 2
    show_edge_buttons: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TableDefaults":
        """Load defaults from the environment.

        Args:
            environ: Mapping to read (default: os.environ).

        Returns:
            TableDefaults with unset variables left at their defaults.

        Raises:
            ValueError: If a variable holds a value of the wrong type.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            items_per_page=max(1, _read_int(env, ENV_ITEMS_PER_PAGE, defaults.items_per_page)),
            page_range=max(0, _read_int(env, ENV_PAGE_RANGE, defaults.page_range)),
            show_edge_buttons=_read_bool(env, ENV_SHOW_EDGE_BUTTONS, defaults.show_edge_buttons),
            log_level=(env.get(ENV_LOG_LEVEL) or defaults.log_level).strip().upper(),
        )


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'")


def _read_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (env.get(name) or "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw}'")
