"""Find the ``App`` a ``module:attribute`` string points at."""

import importlib
import inspect
import os
from collections.abc import Callable

from paydesk.app import App
from paydesk.config import AppConfig


def resolve_app(import_string: str) -> App:
    """Import *import_string* and return the app it names.

    The attribute defaults to ``app``. A callable that is not an ``App``
    is treated as a factory; if it takes ``config`` it is given
    ``AppConfig.from_env(os.environ)``.

    Raises ``ModuleNotFoundError`` or ``AttributeError`` when the name
    does not resolve, and ``TypeError`` when it is neither an App nor a
    working factory.
    """
    module_name, _, attr = import_string.partition(":")
    target = getattr(importlib.import_module(module_name), attr or "app")

    if callable(target) and not isinstance(target, App):
        try:
            target = _build(target)
        except Exception as exc:
            msg = f"App factory {import_string!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(target, App):
        msg = f"{import_string!r} is a {type(target).__name__}, not a paydesk.App instance"
        raise TypeError(msg)
    return target


def _build(factory: Callable[..., object]) -> object:
    try:
        wants_config = "config" in inspect.signature(factory).parameters
    except (TypeError, ValueError):
        wants_config = False
    return factory(config=AppConfig.from_env(os.environ)) if wants_config else factory()
