from __future__ import annotations

from typing import List


class CodeWriter:
    """Accumulates source lines with the current block indentation."""

    def __init__(self, indent_unit: str = "    "):
        self.indent_unit = indent_unit
        self._level = 0
        self._lines: List[str] = []

    def writeln(self, line: str = "") -> "CodeWriter":
        if line:
            self._lines.append(self.indent_unit * self._level + line)
        else:
            self._lines.append("")
        return self

    def write_block(self, text: str) -> "CodeWriter":
        """Write multi-line text, indenting every line not only the first one."""
        for line in text.split("\n"):
            self.writeln(line)
        return self

    def open_block(self, line: str) -> "CodeWriter":
        self.writeln(line)
        self._level += 1
        return self

    def close_block(self, line: str = "}") -> "CodeWriter":
        self._level = max(0, self._level - 1)
        return self.writeln(line)

    def text(self) -> str:
        return "\n".join(self._lines) + "\n"
