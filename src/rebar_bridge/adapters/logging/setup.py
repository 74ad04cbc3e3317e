"""lib_log_rich runtime setup shared by ``rebar-bridge`` and ``python -m rebar_bridge``.

Contents:
    * :class:`LoggingSection` - Validated view of the ``[lib_log_rich]`` section.
    * :func:`init_logging` - Start the runtime once per process.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from ... import __init__conf__


class LoggingSection(BaseModel):
    """The ``[lib_log_rich]`` configuration section.

    Keys other than ``service`` and ``environment`` are handed to
    ``RuntimeConfig`` untouched.

    Example:
        >>> LoggingSection(console_level="DEBUG").model_extra
        {'console_level': 'DEBUG'}
        >>> LoggingSection().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    section: object = config.get("lib_log_rich", default={})
    parsed = LoggingSection.model_validate(cast("dict[str, object]", section) if section else {})
    passthrough = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start lib_log_rich from *config* unless it is already running.

    The first call enables ``.env`` lookup for ``LOG_*`` variables, starts
    the runtime and bridges the standard :mod:`logging` tree into it, so the
    ``logging.getLogger(__name__)`` loggers used across the package end up in
    lib_log_rich. Later calls return immediately.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = ["LoggingSection", "init_logging"]
