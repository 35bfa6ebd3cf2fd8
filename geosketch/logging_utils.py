from __future__ import annotations

import dataclasses
import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .types import Point2D, Segment

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxlist = 8
_repr.maxtuple = 8


def _fmt_point(value: Sequence[float]) -> str:
    return f"({float(value[0]):.3g}, {float(value[1]):.3g})"


def _summarize_record(value: Any) -> str:
    """Compact one-line view of the editor's frozen records."""

    name = type(value).__name__
    kind = getattr(value, "kind", None)
    parts = [f"id={getattr(value, 'id', '?')}"]
    if kind is not None:
        parts.append(f"bbox=({value.x:.3g}, {value.y:.3g}, {value.width:.3g}, {value.height:.3g})")
        vertices = getattr(value, "vertices", None)
        if vertices is not None:
            parts.append("vertices=[" + ", ".join(_fmt_point(v) for v in vertices) + "]")
    elif hasattr(value, "position"):
        parts.append(f"label={value.label}")
        parts.append(f"at={_fmt_point(value.position)}")
    elif hasattr(value, "start_point"):
        parts.append(f"{_fmt_point(value.start_point)}->{_fmt_point(value.end_point)}")
    elif hasattr(value, "point") and hasattr(value, "type"):
        parts.append(f"type={value.type}")
        parts.append(f"at={_fmt_point(value.point)}")
    return f"{name}({', '.join(parts)})"


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    if isinstance(value, Point2D):
        return _fmt_point(value)
    if isinstance(value, Segment):
        return f"{_fmt_point(value.start)}->{_fmt_point(value.end)}"
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _summarize_record(value)

    if isinstance(value, (list, tuple)):
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append(f"... {len(value) - max_items} more")
                break
            items.append(_safe_repr(item))
        return f"{open_br}{', '.join(items)}{close_br}"

    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = []
    if args:
        parts.append("args=[" + ", ".join(_safe_repr(arg) for arg in args) + "]")
    if kwargs:
        parts.append("kwargs={" + ", ".join(f"{key}={_safe_repr(val)}" for key, val in kwargs.items()) + "}")
    return ", ".join(parts) if parts else "no-args"


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator tracing entry, exit and exceptions at DEBUG level."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        qualname = name or getattr(func, "__qualname__", func.__name__)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("Exception in %s", qualname)
                raise
            if log_result:
                logger.debug("Exiting %s -> %s", qualname, _safe_repr(result))
            else:
                logger.debug("Exiting %s", qualname)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def _wrap_class_methods(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr_name, attr_value in list(cls.__dict__.items()):
        if attr_name.startswith("_"):
            continue
        qualified = f"{cls.__name__}.{attr_name}"
        if attr_name in skip or qualified in skip:
            continue
        if isinstance(attr_value, staticmethod):
            wrapped = debug_log_call(logger, name=qualified)(attr_value.__func__)
            setattr(cls, attr_name, staticmethod(wrapped))
        elif inspect.isfunction(attr_value) and attr_value.__module__ == cls.__module__:
            setattr(cls, attr_name, debug_log_call(logger, name=qualified)(attr_value))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
    wrap_methods: bool = False,
) -> None:
    """Wrap the public functions defined in ``namespace`` with :func:`debug_log_call`.

    Call at the bottom of a module with ``apply_debug_logging(globals())``.
    Private helpers (leading underscore) are left alone so traces stay at the
    level of the module's public operations.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(module_name or __name__)
    skip_set: Set[str] = set(skip or ())

    for name, value in list(namespace.items()):
        if name.startswith("_") or name in skip_set:
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif wrap_methods and inspect.isclass(value) and value.__module__ == module_name:
            _wrap_class_methods(value, logger, skip_set)


__all__ = ["apply_debug_logging", "debug_log_call"]
