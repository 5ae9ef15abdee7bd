"""Default terser configuration."""

import copy
from typing import Any, Dict


DEFAULT_CONFIG: Dict[str, Any] = {
    "compress": {
        "booleans_as_integers": True,
        "passes": 3,
    },
    "mangle": {
        "toplevel": True,
    },
    "ecma": 2020,
    "module": True,
}


def get_default_config() -> Dict[str, Any]:
    """Get a fresh copy of the default terser configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)
