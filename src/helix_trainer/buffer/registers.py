"""Register storage for yanked text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

DEFAULT_REGISTER = '"'


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str
    type: str = "character"  # character or line


class RegisterBank:
    """Named registers; writes to a named register also fill the default one."""

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {}
        self.clear()

    def get(self, name: str = DEFAULT_REGISTER) -> RegisterValue:
        return self._registers.get(name, RegisterValue(text=""))

    def set(self, name: str, value: RegisterValue) -> None:
        self._registers[name] = value
        if name != DEFAULT_REGISTER:
            self._registers[DEFAULT_REGISTER] = value

    def is_empty(self, name: str = DEFAULT_REGISTER) -> bool:
        return not self.get(name).text

    def yank_to(
        self, name: str, text: str, *, register_type: str = "character"
    ) -> None:
        self.set(name, RegisterValue(text=text, type=register_type))

    def clear(self) -> None:
        self._registers.clear()
        self._registers[DEFAULT_REGISTER] = RegisterValue(text="")

    def serialize(self) -> Mapping[str, str]:
        return {name: value.text for name, value in self._registers.items()}
