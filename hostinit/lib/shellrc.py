from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

_PLUGINS_START = re.compile(r"^plugins=\(")
_COMMENT = re.compile(r"(^|\s)#.*$")


def set_assignment(text: str, name: str, value: str) -> str:
    """Set `name="value"` in a shell profile, replacing or appending.

    An existing `export name=...` keeps its `export`. Only one assignment survives.
    """

    pat = re.compile(r"^(export\s+)?" + re.escape(name) + "=")
    lines = text.splitlines()
    out: List[str] = []
    done = False
    for line in lines:
        m = pat.match(line)
        if m:
            if not done:
                out.append(f'{m.group(1) or ""}{name}="{value}"')
                done = True
            continue
        out.append(line)
    if not done:
        if out and out[-1].strip():
            out.append("")
        out.append(f'{name}="{value}"')
    return "\n".join(out) + "\n"


def _find_plugins(lines: List[str]) -> Optional[Tuple[int, int, List[str]]]:
    """Locate the first plugins=( ... ) block. Returns (start, end_inclusive, names)."""

    for start, line in enumerate(lines):
        if not _PLUGINS_START.match(line):
            continue
        # Comment text may contain parentheses; it is not part of the list.
        body = _COMMENT.sub("", line[len("plugins=(") :])
        end = start
        while ")" not in body and end + 1 < len(lines):
            end += 1
            body += " " + _COMMENT.sub("", lines[end])
        body = body.split(")", 1)[0]
        return start, end, body.split()
    return None


def read_plugins(text: str) -> Optional[List[str]]:
    found = _find_plugins(text.splitlines())
    return found[2] if found else None


def merge_plugins(text: str, required: Iterable[str], default: Iterable[str] = ("git",)) -> str:
    """Union the profile's plugin list with required, keeping existing order first."""

    default = list(default)
    lines = text.splitlines()
    found = _find_plugins(lines)
    if found is None:
        if lines and lines[-1].strip():
            lines.append("")
        lines.append(f"plugins=({' '.join(default)})")
        found = (len(lines) - 1, len(lines) - 1, list(default))

    start, end, current = found
    merged: List[str] = []
    for name in [*current, *required]:
        if name not in merged:
            merged.append(name)

    lines[start : end + 1] = [f"plugins=({' '.join(merged)})"]
    return "\n".join(lines) + "\n"
