from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern


@dataclass
class DirectiveFile:
    """Line-preserving editor for `Key value` style files (sshd_config and friends).

    A key matches any line of the form `[ws][#][ws]Key<ws>...`, so commented
    defaults are reused in place. After `set`, exactly one line for the key
    remains: the first match is rewritten and later matches are removed.
    Lines that do not match are kept verbatim.
    """

    lines: List[str] = field(default_factory=list)
    trailing_newline: bool = True

    @classmethod
    def parse(cls, text: str) -> "DirectiveFile":
        return cls(lines=text.splitlines(), trailing_newline=text.endswith("\n") or not text)

    @staticmethod
    def _pattern(key: str, *, commented: bool = True) -> Pattern[str]:
        prefix = r"^\s*#?\s*" if commented else r"^\s*"
        return re.compile(prefix + re.escape(key) + r"(\s+|$)", re.IGNORECASE)

    def get(self, key: str) -> Optional[str]:
        """Return the value of the first active (uncommented) line for key."""
        pat = self._pattern(key, commented=False)
        for line in self.lines:
            if pat.match(line):
                parts = line.split(None, 1)
                return parts[1].strip() if len(parts) > 1 else ""
        return None

    def matching(self, key: str) -> List[int]:
        pat = self._pattern(key)
        return [i for i, line in enumerate(self.lines) if pat.match(line)]

    def set(self, key: str, value: str) -> bool:
        """Replace-or-append. Returns True if the rendered text changed."""

        before = list(self.lines)
        new_line = f"{key} {value}"
        idx = self.matching(key)
        if idx:
            first, rest = idx[0], set(idx[1:])
            self.lines[first] = new_line
            self.lines = [line for i, line in enumerate(self.lines) if i not in rest]
        else:
            if self.lines and self.lines[-1].strip():
                self.lines.append("")
            self.lines.append(new_line)
        return self.lines != before

    def render(self) -> str:
        text = "\n".join(self.lines)
        if self.trailing_newline and self.lines:
            text += "\n"
        return text
