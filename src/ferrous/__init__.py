"""ferrous: Rust-style Result and Option containers for Python.

Public API:
    - Result / Ok / Err: success-or-failure container
    - Option / Some / Nothing: optional-value container
    - Result.from_call / Result.from_async / from_awaitable: exception capture
    - Option.from_call / Option.from_async: ``None`` capture
    - Result.partition: split results into successes and failures
"""

from __future__ import annotations

import logging

from ferrous.awaitables import from_awaitable
from ferrous.config import Settings, get_settings, resolve_settings, settings_scope
from ferrous.errors import ConfigurationError, FerrousError, UnwrapError
from ferrous.option import Nothing, Option, Some, is_none_option, is_some_option
from ferrous.result import Err, Ok, Partition, Result, is_err_result, is_ok_result
from ferrous.sentinel import NONE, Absent

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("ferrous")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("ferrous").addHandler(logging.NullHandler())

__all__ = [
    "NONE",
    "Absent",
    "ConfigurationError",
    "Err",
    "FerrousError",
    "Nothing",
    "Ok",
    "Option",
    "Partition",
    "Result",
    "Settings",
    "Some",
    "UnwrapError",
    "from_awaitable",
    "get_settings",
    "is_err_result",
    "is_none_option",
    "is_ok_result",
    "is_some_option",
    "resolve_settings",
    "settings_scope",
]
