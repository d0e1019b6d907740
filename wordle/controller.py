"""
Turns key events into session transitions.
Physical keyboard, on-screen keyboard and test scripts all come through here;
whether an event is allowed is decided by the session, not by this class.
"""

from typing import Iterable

from .session import Session

BACKSPACE = "Backspace"
ENTER = "Enter"

# Names different keyboards use for the two control keys
_BACKSPACE_KEYS = {BACKSPACE, "⌫"}
_ENTER_KEYS = {ENTER, "Return", "Submit"}


class InputController:
    def __init__(self, session: Session) -> None:
        self.session = session

    def press(self, key: str) -> bool:
        """Returns True when the event changed the session."""
        if not isinstance(key, str):
            return False
        if key in _BACKSPACE_KEYS:
            return self.session.backspace()
        if key in _ENTER_KEYS:
            return self.session.submit()
        if len(key) == 1:
            return self.session.input_letter(key)
        # Shift, arrows, F-keys...
        return False

    def press_all(self, keys: Iterable[str]) -> int:
        changed = 0
        for key in keys:
            if self.press(key):
                changed += 1
        return changed

    def type_word(self, text: str, submit: bool = True) -> bool:
        """Type each character of `text`, then Enter. Returns whether the row got scored."""
        self.press_all(text)
        if not submit:
            return False
        return self.press(ENTER)
