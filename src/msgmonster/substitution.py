from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Sequence

REPEAT_MARKER = "${...}"

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class Substitutor:
    """Replaces ${key} placeholders in template text.

    Placeholders whose key is missing from the mapping are kept verbatim so
    that a later pass can still resolve them.
    """

    def substitute(self, text: str, mapping: Mapping[str, str]) -> str:
        def _replace(match: re.Match) -> str:
            key = match.group(1)
            if key in mapping:
                return str(mapping[key])
            return match.group(0)

        return _PLACEHOLDER.sub(_replace, text)

    def expand_lines(
        self,
        text: str,
        items: Sequence[str],
        separator: str,
        marker: str = REPEAT_MARKER,
    ) -> Optional[str]:
        """Expand the line holding the repeat marker once per item.

        Each expansion keeps the indentation of the marker line. All
        expansions but the last one end with the separator, the last one ends
        with the text which followed the marker. Returns None when there are
        no items so that the caller can skip the whole section.
        """
        if not items:
            return None
        out = []
        for line in text.split("\n"):
            if marker not in line:
                out.append(line)
                continue
            indent = line[: len(line) - len(line.lstrip())]
            tail = line.split(marker, 1)[1]
            for i, item in enumerate(items):
                end = tail if i == len(items) - 1 else separator
                out.append(f"{indent}{item}{end}")
        return "\n".join(out)


class Substitutions:
    """Values of the definition wide placeholders.

    A new instance is created for every definition; the values are applied
    to the whole class text once all sections are rendered.
    """

    def __init__(self):
        self._values: Dict[str, str] = {}

    def put(self, key: str, value: str) -> "Substitutions":
        self._values[key] = value
        return self

    def derive(self, **local: str) -> Dict[str, str]:
        """Return a copy of the values extended with section local ones."""
        values = dict(self._values)
        values.update(local)
        return values

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)
