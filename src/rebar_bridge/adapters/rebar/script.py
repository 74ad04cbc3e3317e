"""Evaluate ``rebar.config.script`` files with a real Erlang runtime.

The script is arbitrary Erlang code, so it is never interpreted here: an
``erl`` process is started in the script's directory, ``CONFIG`` and
``SCRIPT`` are bound through ``erl_eval``, ``file:script/2`` runs the
script, and the resulting term is printed back after a marker line and
parsed with :func:`parse_term`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ...domain.errors import ScriptEvalError, TermSyntaxError
from ...domain.term_syntax import format_term, parse_term
from ...domain.terms import Term

logger = logging.getLogger(__name__)

RESULT_MARKER = "==rebar_bridge:result=="

_EVAL_TEMPLATE = """\
Bs0 = erl_eval:new_bindings(),
Bs1 = erl_eval:add_binding('CONFIG', {config}, Bs0),
Bs2 = erl_eval:add_binding('SCRIPT', {script}, Bs1),
case file:script({script}, Bs2) of
    {{ok, Result}} ->
        io:format("~n{marker}~n~tp.~n", [Result]),
        halt(0);
    {{error, Reason}} ->
        io:format(standard_error, "~ts~n", [file:format_error(Reason)]),
        halt(1)
end."""


def build_eval_expression(bindings: Mapping[str, Term]) -> str:
    """Return the ``-eval`` expression that runs the script with *bindings*.

    Raises:
        TypeError: If a binding has no Erlang representation.

    Example:
        >>> expr = build_eval_expression({"CONFIG": [], "SCRIPT": "rebar.config.script"})
        >>> "add_binding('CONFIG', [], Bs0)" in expr
        True
        >>> 'file:script("rebar.config.script", Bs2)' in expr
        True
    """
    return _EVAL_TEMPLATE.format(
        config=format_term(bindings["CONFIG"]),
        script=format_term(bindings["SCRIPT"]),
        marker=RESULT_MARKER,
    )


def parse_script_output(stdout: str) -> Term:
    """Return the term printed after the result marker.

    Anything the script itself printed before the marker is ignored.

    Raises:
        ValueError: If the marker is missing.
        TermSyntaxError: If the printed term cannot be parsed.

    Example:
        >>> parse_script_output("noise\\n==rebar_bridge:result==\\n[{deps,[]}].\\n")
        [(Atom('deps'), [])]
    """
    _, marker, printed = stdout.rpartition(RESULT_MARKER)
    if not marker:
        raise ValueError("script produced no result")
    return parse_term(printed)


@dataclass(frozen=True, slots=True)
class ErlScriptEvaluator:
    """Evaluate configuration scripts through ``erl_command``.

    Instances satisfy the ``EvaluateScript`` port; the class itself is the
    factory the composition root hands the configured command to.
    """

    erl_command: str = "erl"

    def __call__(self, script: Path, bindings: Mapping[str, Term]) -> list[Term]:
        """Run *script* and return the configuration it evaluates to.

        Raises:
            ScriptEvalError: If ``erl`` is missing, the script fails, or its
                result is not a list of terms.
        """
        try:
            expression = build_eval_expression(bindings)
        except TypeError as exc:
            raise ScriptEvalError(script, f"cannot bind CONFIG: {exc}") from exc

        cmd = [self.erl_command, "-noshell", "-eval", expression, "-s", "erlang", "halt"]
        logger.debug("Running erl for config script", extra={"path": str(script), "erl": self.erl_command})
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                cwd=script.parent,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as exc:
            raise ScriptEvalError(script, f"{self.erl_command} executable not found") from exc
        except OSError as exc:
            raise ScriptEvalError(script, f"cannot start {self.erl_command}: {exc}") from exc

        if result.returncode != 0:
            reason = result.stderr.strip() or f"{self.erl_command} exited with status {result.returncode}"
            raise ScriptEvalError(script, reason)

        try:
            value = parse_script_output(result.stdout)
        except (ValueError, TermSyntaxError) as exc:
            raise ScriptEvalError(script, str(exc)) from exc
        if not isinstance(value, list):
            raise ScriptEvalError(script, f"script returned {format_term(value)}, expected a list of terms")
        return value


__all__ = ["ErlScriptEvaluator", "RESULT_MARKER", "build_eval_expression", "parse_script_output"]
