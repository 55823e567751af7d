from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple


PAIRS = {")": "(", "]": "[", "}": "{"}
TAG_NAME_RE = re.compile(r"[A-Za-z][\w.\-]*")


class BalanceError(ValueError):
    pass


@dataclass
class SandboxResult:
    ok: bool
    error: Optional[str] = None


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def mask_literals(text: str) -> str:
    """
    Blank out comments and the insides of string literals.

    Newlines are kept so positions still map to the same line. Raises
    BalanceError for an unterminated string or block comment.
    """
    out: List[str] = []
    i, n = 0, len(text)

    def blank(chunk: str) -> str:
        return "".join("\n" if c == "\n" else " " for c in chunk)

    while i < n:
        ch = text[i]
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise BalanceError(f"Unterminated block comment at line {_line_of(text, i)}")
            out.append(blank(text[i : end + 2]))
            i = end + 2
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            end = n if end == -1 else end
            out.append(blank(text[i:end]))
            i = end
            continue
        if ch in "'\"`":
            j = i + 1
            while j < n:
                c = text[j]
                if c == "\\":
                    j += 2
                    continue
                if c == ch:
                    break
                if c == "\n" and ch != "`":
                    raise BalanceError(f"Unterminated string literal at line {_line_of(text, i)}")
                j += 1
            if j >= n:
                raise BalanceError(f"Unterminated string literal at line {_line_of(text, i)}")
            out.append(ch + blank(text[i + 1 : j]) + ch)
            i = j + 1
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def check_brackets(masked: str) -> None:
    stack: List[Tuple[str, int]] = []
    for i, ch in enumerate(masked):
        if ch in "([{":
            stack.append((ch, i))
        elif ch in PAIRS:
            if not stack:
                raise BalanceError(f"Unexpected '{ch}' at line {_line_of(masked, i)}")
            opener, pos = stack.pop()
            if opener != PAIRS[ch]:
                raise BalanceError(
                    f"'{ch}' at line {_line_of(masked, i)} closes '{opener}' "
                    f"opened at line {_line_of(masked, pos)}"
                )
    if stack:
        opener, pos = stack[-1]
        raise BalanceError(f"Unclosed '{opener}' opened at line {_line_of(masked, pos)}")


def _scan_tag_end(masked: str, start: int) -> int:
    """Index of the '>' closing the tag opened at `start`, skipping {...} attribute values."""
    depth = 0
    for j in range(start, len(masked)):
        c = masked[j]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == ">" and depth == 0:
            return j
    raise BalanceError(f"Unterminated tag at line {_line_of(masked, start)}")


def check_tags(masked: str) -> None:
    """JSX-style tag nesting: <a>..</a>, <a />, and fragments <>..</>."""
    stack: List[Tuple[str, int]] = []
    i, n = 0, len(masked)
    while i < n:
        if masked[i] != "<" or i + 1 >= n:
            i += 1
            continue
        nxt = masked[i + 1]

        if nxt == ">":
            stack.append(("", i))
            i += 2
            continue

        if nxt == "/":
            m = TAG_NAME_RE.match(masked, i + 2)
            name = m.group(0) if m else ""
            end = masked.find(">", i + 2)
            if end == -1 or masked[(m.end() if m else i + 2) : end].strip():
                raise BalanceError(f"Malformed closing tag at line {_line_of(masked, i)}")
            if not stack:
                raise BalanceError(f"Unexpected </{name}> at line {_line_of(masked, i)}")
            opened, pos = stack.pop()
            if opened != name:
                raise BalanceError(
                    f"</{name}> at line {_line_of(masked, i)} closes <{opened}> "
                    f"opened at line {_line_of(masked, pos)}"
                )
            i = end + 1
            continue

        m = TAG_NAME_RE.match(masked, i + 1)
        if not m:
            i += 1
            continue
        end = _scan_tag_end(masked, m.end())
        if masked[m.end() : end].rstrip().endswith("/"):
            i = end + 1
            continue
        stack.append((m.group(0), i))
        i = end + 1

    if stack:
        name, pos = stack[-1]
        raise BalanceError(f"Unclosed <{name}> opened at line {_line_of(masked, pos)}")


class Sandbox:
    """
    Structural check for generated text: brackets and JSX tags must nest.

    This is not a parser; it is the mechanical form of the guarantee that
    synthesized fragments are balanced.
    """

    def run_check(self, code: str, *, tags: bool = True) -> Optional[str]:
        try:
            masked = mask_literals(code)
            check_brackets(masked)
            if tags:
                check_tags(masked)
            return None
        except BalanceError as e:
            return f"BalanceError: {e}"

    def check(self, code: str, *, tags: bool = True) -> SandboxResult:
        error = self.run_check(code, tags=tags)
        return SandboxResult(ok=error is None, error=error)
