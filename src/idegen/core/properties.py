"""Reading and writing ``.properties`` files.

Follows the escaping rules of the format IDEs expect: ``key=value`` lines,
``#``/``!`` comments, backslash line continuations, and ``\\uXXXX`` escapes
for characters outside Latin-1.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

_SEPARATORS = "=: \t\f"
_LOAD_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_DUMP_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f", "\\": "\\\\"}


def load_properties(source: str | Path) -> dict[str, str]:
    """Parse properties from a path or from already-read text."""
    text = source.read_text(encoding="latin-1") if isinstance(source, Path) else source
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_line(line)
        result[_unescape(key)] = _unescape(value)
    return result


def dump_properties(props: dict[str, str], comment: str | None = None) -> str:
    """Render properties as text, keys sorted."""
    lines: list[str] = []
    if comment:
        for part in comment.splitlines():
            lines.append(f"#{_escape(part, is_key=False, comment=True)}")
    lines.append(f"#{datetime.now().strftime('%a %b %d %H:%M:%S %Y')}")
    for key in sorted(props):
        lines.append(f"{_escape(key, is_key=True)}={_escape(props[key], is_key=False)}")
    return "\n".join(lines) + "\n"


def _logical_lines(text: str):
    pending = ""
    continuing = False
    for raw in text.splitlines():
        line = raw.lstrip(" \t\f")
        if not continuing and (not line or line[0] in "#!"):
            continue
        # An odd number of trailing backslashes continues the line
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continuing = True
            continue
        yield pending + line
        pending = ""
        continuing = False
    if continuing and pending:
        yield pending


def _split_line(line: str) -> tuple[str, str]:
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS:
            break
        i += 1
    key = line[:i]
    # skip whitespace, at most one '=' or ':', then whitespace again
    while i < n and line[i] in " \t\f":
        i += 1
    if i < n and line[i] in "=:":
        i += 1
    while i < n and line[i] in " \t\f":
        i += 1
    return key, line[i:]


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "\\" or i + 1 >= n:
            out.append(ch)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= n:
            out.append(chr(int(text[i + 2 : i + 6], 16)))
            i += 6
            continue
        out.append(_LOAD_ESCAPES.get(nxt, nxt))
        i += 2
    # \uXXXX escapes are UTF-16 code units; join surrogate pairs
    joined = "".join(out)
    return joined.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def _escape(text: str, is_key: bool, comment: bool = False) -> str:
    out: list[str] = []
    for index, ch in enumerate(text):
        if comment:
            out.append(ch if ord(ch) < 0x100 else _unicode_escape(ch))
            continue
        if ch in _DUMP_ESCAPES:
            out.append(_DUMP_ESCAPES[ch])
        elif ch == " " and (is_key or index == 0):
            out.append("\\ ")
        elif ch in "=:#!":
            out.append("\\" + ch)
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            out.append(_unicode_escape(ch))
        else:
            out.append(ch)
    return "".join(out)


def _unicode_escape(ch: str) -> str:
    """``\\uXXXX`` escape, as a surrogate pair above U+FFFF."""
    code = ord(ch)
    if code <= 0xFFFF:
        return f"\\u{code:04X}"
    code -= 0x10000
    return f"\\u{0xD800 + (code >> 10):04X}\\u{0xDC00 + (code & 0x3FF):04X}"
