"""Host action surface: menu entries with key bindings and enablement."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

_MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")
_MODIFIER_ALIASES = {"control": "ctrl", "option": "alt", "cmd": "meta", "command": "meta"}


def normalize_key_binding(binding: str) -> str:
    """Canonicalize ``"Shift-Ctrl-C"`` style tokens to ``"ctrl+shift+c"``."""
    parts = [part for part in re.split(r"[+\-]", binding.strip().lower()) if part]
    if not parts:
        return ""
    *modifiers, key = parts
    canonical = {_MODIFIER_ALIASES.get(mod, mod) for mod in modifiers}
    ordered = [mod for mod in _MODIFIER_ORDER if mod in canonical]
    ordered.extend(sorted(canonical.difference(_MODIFIER_ORDER)))
    return "+".join([*ordered, key])


def _always_enabled() -> bool:
    return True


@dataclass(frozen=True)
class Action:
    """One registrable action.

    ``menu_path`` is the popup-menu label path and ``group`` its menu
    section; ``key_bindings`` are accepted in any spelling understood by
    ``normalize_key_binding``.
    """

    name: str
    perform: Callable[[], object]
    menu_path: tuple[str, ...] = ()
    group: str = ""
    key_bindings: tuple[str, ...] = ()
    is_enabled: Callable[[], bool] = _always_enabled


class ActionRegistry:
    """Named actions plus a key-binding dispatch table."""

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}
        self._by_key: dict[str, str] = {}

    def add_action(self, action: Action) -> ActionRegistry:
        """Register ``action``, replacing any action with the same name or key."""
        self.remove_action(action.name)
        self._actions[action.name] = action
        for binding in action.key_bindings:
            key = normalize_key_binding(binding)
            if key:
                self._by_key[key] = action.name
        return self

    def remove_action(self, name: str) -> bool:
        if self._actions.pop(name, None) is None:
            return False
        self._by_key = {key: owner for key, owner in self._by_key.items() if owner != name}
        return True

    def actions(self) -> list[Action]:
        return list(self._actions.values())

    def get(self, name: str) -> Action | None:
        return self._actions.get(name)

    def invoke(self, name: str) -> bool | None:
        """Run action ``name`` if enabled.

        Returns ``None`` for unknown names, ``False`` when the action is
        disabled, ``True`` after it ran.
        """
        action = self._actions.get(name)
        if action is None:
            return None
        if not action.is_enabled():
            return False
        action.perform()
        return True

    def dispatch_key(self, binding: str) -> bool | None:
        """Invoke whichever action is bound to ``binding``."""
        name = self._by_key.get(normalize_key_binding(binding))
        if name is None:
            return None
        return self.invoke(name)


__all__ = ["Action", "ActionRegistry", "normalize_key_binding"]
