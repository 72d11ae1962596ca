"""Engine factory utilities.

Purpose
-------
Centralize vendor-agnostic creation of completion engines implementing the
``CompletionStream`` interface. Engine modules are imported lazily with
``importlib`` so importing the factory never pulls in a vendor SDK.

Failure semantics
-----------------
The factory performs no retries or fallbacks; it either returns an engine or
raises :class:`UnknownEngineError` with an actionable message.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type


class UnknownEngineError(Exception):
    """Raised when an engine cannot be resolved or initialized.

    Failure modes include an unregistered name, an engine module that cannot
    be imported, a missing engine class, and a constructor that rejects its
    arguments.
    """


def create(engine: str, **kwargs: Any) -> Any:
    """Shorthand for :meth:`EngineFactory.create`."""
    return EngineFactory.create(engine, **kwargs)


class EngineFactory:
    """Create completion engines from a canonical name (``"openai"``, ``"azure"``).

    Engines are built through their ``from_config`` classmethod, so keyword
    arguments are ``overrides`` (a config mapping) and ``logger``.
    """

    _ENGINES: Dict[str, Dict[str, str]] = {
        "openai": {"module": "completion_providers.openai.client", "class": "OpenAIEngine"},
        "azure": {"module": "completion_providers.azure.client", "class": "AzureEngine"},
    }

    @classmethod
    def create(cls, engine: str, **kwargs: Any) -> Any:
        """Create an engine instance.

        Parameters
        ----------
        engine:
            Canonical engine name (case-insensitive).
        **kwargs:
            Forwarded to the engine's ``from_config``.

        Raises
        ------
        UnknownEngineError
            If the name is unknown, the module fails to import, the class is
            missing, or construction fails.
        """
        name = (engine or "").lower().strip()
        entry = cls._ENGINES.get(name)
        if not entry:
            raise UnknownEngineError(f"Unknown engine '{engine}'")

        module_path, class_name = entry["module"], entry["class"]

        try:
            mod = import_module(module_path)
        except Exception as exc:  # pragma: no cover - import failure path
            raise UnknownEngineError(
                f"Failed to import module '{module_path}' for engine '{engine}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownEngineError(
                f"Engine class '{class_name}' not found in '{module_path}' for engine '{engine}'"
            ) from exc

        try:
            return klass.from_config(**kwargs)
        except TypeError as exc:
            raise UnknownEngineError(f"Invalid arguments for '{engine}' engine: {exc}") from exc
        except Exception as exc:
            raise UnknownEngineError(f"Failed to initialize engine '{engine}': {exc}") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical engine names in deterministic order."""
        return tuple(cls._ENGINES.keys())


__all__ = ["EngineFactory", "UnknownEngineError", "create"]
