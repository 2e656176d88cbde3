"""Key-combo registry and the viewer's key bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .input import RESIZE_EVENT
from .viewport import Intent, ViewportController

QUIT_KEYS = ("q",)


@dataclass(frozen=True)
class KeyComboBinding:
    """Event tokens that all trigger one viewport action."""

    combos: tuple[str, ...]
    handler: Callable[[], bool]


def normalize_event_token(key: str) -> str:
    """Drop the ``:col:row`` suffix carried by mouse tokens."""
    if key.startswith("MOUSE_"):
        return key.split(":", 1)[0]
    return key


class KeyComboRegistry:
    """Dispatch table from normalized event tokens to binding handlers.

    Later bindings win when two bind the same token.
    """

    def __init__(self, *bindings: KeyComboBinding) -> None:
        self._handlers: dict[str, Callable[[], bool]] = {
            normalize_event_token(combo): binding.handler
            for binding in bindings
            for combo in binding.combos
        }

    def dispatch(self, key: str) -> bool:
        """Run the handler bound to ``key``; unbound tokens do nothing."""
        handler = self._handlers.get(normalize_event_token(key))
        if handler is None:
            return False
        return handler()


class ViewerKeyHandler:
    """Translate event tokens into viewport intents.

    ``handle`` returns whether the screen needs a full redraw; after a quit
    key ``should_quit`` is set instead.
    """

    def __init__(self, viewport: ViewportController) -> None:
        self.viewport = viewport
        self.should_quit = False
        self.registry = KeyComboRegistry(
            KeyComboBinding(QUIT_KEYS, self._quit),
            self._intent_binding(("h", "LEFT"), Intent.LEFT),
            self._intent_binding(("j", "DOWN", "MOUSE_WHEEL_DOWN"), Intent.DOWN),
            self._intent_binding(("k", "UP", "MOUSE_WHEEL_UP"), Intent.UP),
            self._intent_binding(("l", "RIGHT"), Intent.RIGHT),
            self._intent_binding(("0",), Intent.LINE_START),
            self._intent_binding(("$",), Intent.LINE_END),
            self._intent_binding(("g",), Intent.GOTO_START),
            self._intent_binding(("G",), Intent.GOTO_END),
            self._intent_binding((RESIZE_EVENT,), Intent.RESIZE),
        )

    def _intent_binding(self, combos: tuple[str, ...], intent: Intent) -> KeyComboBinding:
        return KeyComboBinding(combos, lambda: self.viewport.apply(intent))

    def _quit(self) -> bool:
        self.should_quit = True
        return False

    def handle(self, key: str) -> bool:
        return self.registry.dispatch(key)
