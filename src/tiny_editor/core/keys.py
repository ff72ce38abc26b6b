"""Key events: literal input bytes and named keys."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    HOME = auto()
    END = auto()
    DELETE = auto()
    ESCAPE = auto()


MOVEMENT_KEYS = frozenset({
    Key.UP,
    Key.DOWN,
    Key.LEFT,
    Key.RIGHT,
    Key.PAGE_UP,
    Key.PAGE_DOWN,
    Key.HOME,
    Key.END,
})


@dataclass(frozen=True)
class KeyEvent:
    """Either a literal input byte or a named key."""
    key: Optional[Key] = None
    byte: Optional[int] = None

    @classmethod
    def literal(cls, byte: int) -> KeyEvent:
        return cls(byte=byte)

    @classmethod
    def named(cls, key: Key) -> KeyEvent:
        return cls(key=key)

    @property
    def is_byte(self) -> bool:
        return self.byte is not None

    @property
    def is_movement(self) -> bool:
        return self.key in MOVEMENT_KEYS

    @property
    def char(self) -> Optional[str]:
        """The literal byte as a one-character string."""
        if self.byte is None:
            return None
        return chr(self.byte)
