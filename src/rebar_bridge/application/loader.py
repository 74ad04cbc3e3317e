"""Load the rebar configuration of one directory.

``rebar.config`` is read first; when ``rebar.config.script`` sits next to
it, the script is evaluated with ``CONFIG`` bound to the terms just read
and ``SCRIPT`` bound to its own file name. A script that succeeds replaces
the configuration. A script that fails is reported and ignored, so a
broken script never stops dependency translation for its directory.

Contents:
    * :func:`load_config` - Read, evaluate, and return a :class:`RawConfig`.
    * :func:`script_failure_lines` - Text of the diagnostic for a failed script.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..domain.errors import ScriptEvalError
from ..domain.terms import RawConfig
from .ports import EvaluateScript, IsRegularFile, ReadTerms

CONFIG_FILE_NAME = "rebar.config"
SCRIPT_FILE_NAME = "rebar.config.script"

logger = logging.getLogger(__name__)


def script_failure_lines(error: ScriptEvalError) -> list[str]:
    """Return the diagnostic shown when a configuration script fails.

    Example:
        >>> lines = script_failure_lines(ScriptEvalError("/p/rebar.config.script", "badarg"))
        >>> lines[0]
        'Error evaluating rebar config script /p/rebar.config.script: badarg'
        >>> len(lines)
        3
    """
    return [
        str(error),
        "You may solve this issue by adding rebar as a dependency to your project",
        "Any dependency defined in the script won't be available unless you add them to your Mix project",
    ]


def load_config(
    directory: str | Path,
    *,
    read_terms: ReadTerms,
    evaluate_script: EvaluateScript,
    is_regular_file: IsRegularFile,
    report: Callable[[str], None] | None = None,
) -> RawConfig:
    """Return the effective configuration of *directory*.

    Args:
        directory: Directory that may hold ``rebar.config`` and
            ``rebar.config.script``.
        read_terms: Reads and parses ``rebar.config``.
        evaluate_script: Evaluates ``rebar.config.script`` with the script's
            directory as working directory, leaving the caller's untouched.
        is_regular_file: Decides whether the script exists.
        report: Receives each line of the diagnostic when the script fails,
            in addition to the logged warning.

    Returns:
        The configuration tagged with *directory*. A missing
        ``rebar.config`` yields an empty configuration.

    Raises:
        ConfigParseError: When ``rebar.config`` exists but cannot be parsed.
    """
    directory = Path(directory)
    config_path = directory / CONFIG_FILE_NAME
    script_path = directory / SCRIPT_FILE_NAME

    try:
        config = RawConfig.from_terms(read_terms(config_path), directory=directory)
    except FileNotFoundError:
        logger.debug("No rebar config in %s", directory)
        config = RawConfig(directory=directory)

    if not is_regular_file(script_path):
        return config

    bindings = {"CONFIG": config.to_terms(), "SCRIPT": script_path.name}
    logger.debug("Evaluating rebar config script", extra={"path": str(script_path)})
    try:
        result = evaluate_script(script_path, bindings)
        if not isinstance(result, (list, tuple)):
            raise ScriptEvalError(script_path, f"script returned {result!r}, expected a list of terms")
    except ScriptEvalError as error:
        lines = script_failure_lines(error)
        logger.warning("\n".join(lines), extra={"path": str(script_path), "reason": error.reason})
        if report is not None:
            for line in lines:
                report(line)
        return config
    return RawConfig.from_terms(result, directory=directory)


__all__ = ["CONFIG_FILE_NAME", "SCRIPT_FILE_NAME", "load_config", "script_failure_lines"]
