"""mathconv -- left-to-right ``@VALUE`` formula converter."""

__version__ = "0.1.0"

from mathconv.converter import (  # noqa: E402
    UNSET,
    EvaluationOutcome,
    MathConverter,
    evaluate,
    try_evaluate,
)

__all__ = [
    "UNSET",
    "EvaluationOutcome",
    "MathConverter",
    "__version__",
    "evaluate",
    "try_evaluate",
]
