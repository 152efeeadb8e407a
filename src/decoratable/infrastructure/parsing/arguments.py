"""Literal evaluator for decorator argument text.

``@delay(3)`` or ``@throttle(seconds=0.25)`` carry their arguments as raw
text. The text is parsed as the argument list of a call and every argument
must be a literal (numbers, strings, bytes, tuples, lists, dicts, sets,
booleans, None). Names, calls, attribute access and comprehensions are
rejected: nothing is executed and no scope is visible.
"""

from __future__ import annotations

import ast
from typing import Any

from decoratable.domain.exceptions import ArgumentEvaluationError
from decoratable.domain.model.arguments import Arguments


def evaluate_arguments(text: str, reference_name: str = "<decorator>") -> Arguments:
    """Evaluate raw argument text into Arguments.

    Args:
        text: Text between the parentheses of a reference ("" for none)
        reference_name: Decorator name, used in error messages

    Returns:
        Evaluated positional and keyword arguments

    Raises:
        ArgumentEvaluationError: If the text is not a literal argument list
    """
    if not text.strip():
        return Arguments()

    try:
        tree = ast.parse(f"_({text})", mode="eval")
    except SyntaxError as exc:
        raise ArgumentEvaluationError(reference_name, text, exc.msg) from None

    call = tree.body
    if not isinstance(call, ast.Call):  # pragma: no cover - "_(...)" always parses to Call
        raise ArgumentEvaluationError(reference_name, text, "not an argument list")

    args: list[Any] = []
    for node in call.args:
        if isinstance(node, ast.Starred):
            raise ArgumentEvaluationError(reference_name, text, "unpacking is not allowed")
        args.append(_literal(node, reference_name, text))

    kwargs: dict[str, Any] = {}
    for keyword in call.keywords:
        if keyword.arg is None:
            raise ArgumentEvaluationError(reference_name, text, "unpacking is not allowed")
        kwargs[keyword.arg] = _literal(keyword.value, reference_name, text)

    return Arguments(args=tuple(args), kwargs=kwargs)


def _literal(node: ast.expr, reference_name: str, text: str) -> Any:
    """Evaluate one argument node as a literal."""
    try:
        return ast.literal_eval(node)
    except (ValueError, TypeError, SyntaxError, RecursionError) as exc:
        raise ArgumentEvaluationError(
            reference_name,
            text,
            f"{ast.unparse(node)} is not a literal ({exc})",
        ) from None
