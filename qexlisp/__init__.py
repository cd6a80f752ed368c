"""Value types, environments and an evaluator for a small Lisp."""

__version__ = "0.0.1"
__all__ = ["values", "evaluator"]