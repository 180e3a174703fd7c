from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Redactor:
    enabled: bool = True
    _serial_map: dict[str, int] = field(default_factory=dict)
    _serial_counter: int = 0

    def redact_serial(self, serial: str | None) -> str:
        if serial is None:
            return ""
        if not self.enabled:
            return serial
        counter = self._serial_map.get(serial)
        if counter is None:
            self._serial_counter += 1
            counter = self._serial_counter
            self._serial_map[serial] = counter
        return f"xxxx{serial[-2:]}#{counter}" if len(serial) > 4 else f"#{counter}"

    def redact_path(self, path: str | None) -> str:
        if path is None:
            return ""
        if not self.enabled:
            return path
        user = Path.home().name
        if not user:
            return path
        return path.replace(f"/{user}/", "/<user>/").replace(f"\\{user}\\", "\\<user>\\")
