# debug.py
from __future__ import annotations
import logging
from typing import ClassVar, Dict

LOGGER_NAME = "enigma"


class Debug:
    """Per-component debug switchboard on top of :mod:`logging`.

    Every instance shares one component map, so ``Debug().enable("stepping")``
    from the CLI turns on the stepping trace inside ``enigma.py`` too.
    """

    _root_configured: ClassVar[bool] = False
    _enabled: ClassVar[bool] = True
    _components: ClassVar[Dict[str, bool]] = {
        "keyboard":   False,
        "plugboard":  False,
        "rotor":      False,
        "reflector":  False,
        "stepping":   False,
        "encipher":   False,
    }

    def __init__(self) -> None:
        self.logger = logging.getLogger(LOGGER_NAME)

    # ── root handler setup ───────────────────────────────────────
    @classmethod
    def configure(cls, *, log_to: str | None = None, level: int = logging.DEBUG) -> None:
        """
        Attach handlers once. Only entry points call this; importing a
        module never touches the root logger.
        If `log_to` is given, messages also stream to that file.
        """
        if cls._root_configured:
            return

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        logging.basicConfig(
            level=level,
            format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )
        cls._root_configured = True

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.is_active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def is_active(self, component: str) -> bool:
        return Debug._enabled and Debug._components.get(component, False)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        Debug._components[component] = not Debug._components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug._enabled = state

    def reset(self) -> None:
        for c in Debug._components:
            Debug._components[c] = False
        Debug._enabled = True

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    @staticmethod
    def components() -> list[str]:
        return list(Debug._components)

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug enabled={Debug._enabled} active={active}>"
