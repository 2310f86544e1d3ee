"""Target resolution for the CLI: ``"module:attr"`` or ``"file.py:attr"`` to an App."""

import importlib
import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

from perch.app import App

DEFAULT_ATTRIBUTE = "app"


def _load_module(target: str) -> ModuleType:
    if target.endswith(".py"):
        path = Path(target).resolve()
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            msg = f"Cannot load {target!r} as a module"
            raise ModuleNotFoundError(msg)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    # Console scripts do not put the working directory on sys.path
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    return importlib.import_module(target)


def resolve_app(target: str) -> App:
    """Resolve *target* to a perch App.

    The module part is a dotted module name or a path to a ``.py``
    file; the attribute part defaults to ``app`` and may be dotted
    (``"service:api.app"``). A callable that is not already an App is
    treated as a factory and called with no arguments.

    Raises:
        ModuleNotFoundError: The module cannot be imported.
        AttributeError: The attribute does not exist.
        TypeError: The factory failed, or the result is not an App.
    """
    module_part, _, attr_path = target.partition(":")
    obj: object = _load_module(module_part)
    for name in (attr_path or DEFAULT_ATTRIBUTE).split("."):
        obj = getattr(obj, name)

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {target!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{target!r} resolved to {type(obj).__name__}, not a perch.App instance"
        raise TypeError(msg)
    return obj
