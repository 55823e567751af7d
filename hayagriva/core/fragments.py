"""
Composable text fragments for code synthesis.

Generated source is assembled from named sections (FragmentBuilder) whose
contents are written line by line through CodeWriter. Every opening brace or
tag CodeWriter emits comes from a context manager that also emits the
matching close, so nesting is balanced by construction and can be verified
afterwards with hayagriva.core.sandbox.
"""
from __future__ import annotations

import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Section:
    name: str
    text: str


class FragmentBuilder:
    """Ordered list of named text sections joined with a fixed separator."""

    def __init__(self, separator: str = "\n\n") -> None:
        self.separator = separator
        self._sections: List[Section] = []

    def add(self, name: str, text: str) -> "FragmentBuilder":
        if any(s.name == name for s in self._sections):
            raise ValueError(f"Duplicate section name: {name}")
        text = text.strip("\n")
        if text:
            self._sections.append(Section(name=name, text=text))
        return self

    @property
    def sections(self) -> Tuple[Section, ...]:
        return tuple(self._sections)

    def names(self) -> List[str]:
        return [s.name for s in self._sections]

    def get(self, name: str) -> Optional[str]:
        for s in self._sections:
            if s.name == name:
                return s.text
        return None

    def render(self) -> str:
        return self.separator.join(s.text for s in self._sections) + "\n"


class CodeWriter:
    def __init__(self, indent: str = "  ", depth: int = 0) -> None:
        self.indent = indent
        self._depth = depth
        self._lines: List[str] = []

    def line(self, text: str = "") -> "CodeWriter":
        self._lines.append(f"{self.indent * self._depth}{text}" if text else "")
        return self

    def lines(self, texts: Iterable[str]) -> "CodeWriter":
        for text in texts:
            self.line(text)
        return self

    def blank(self) -> "CodeWriter":
        if self._lines and self._lines[-1] != "":
            self._lines.append("")
        return self

    def extend(self, other: "CodeWriter") -> "CodeWriter":
        for text in other._lines:
            self._lines.append(f"{self.indent * self._depth}{text}" if text else "")
        return self

    @contextmanager
    def indented(self) -> Iterator["CodeWriter"]:
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1

    @contextmanager
    def block(self, opener: str, closer: str) -> Iterator["CodeWriter"]:
        self.line(opener)
        with self.indented():
            yield self
        self.line(closer)

    # -- JSX helpers -------------------------------------------------

    @contextmanager
    def element(self, tag: str, attrs: str = "") -> Iterator["CodeWriter"]:
        with self.block(f"<{tag}{_attrs(attrs)}>", f"</{tag}>"):
            yield self

    @contextmanager
    def fragment(self) -> Iterator["CodeWriter"]:
        with self.block("<>", "</>"):
            yield self

    @contextmanager
    def each(self, iterable: str, item: str) -> Iterator["CodeWriter"]:
        """`{items.map((item) => ( ... ))}`; the body must be one keyed element."""
        with self.block(f"{{{iterable}.map(({item}) => (", "))}"):
            yield self

    def ternary(
        self,
        condition: str,
        then: Callable[["CodeWriter"], None],
        otherwise: Callable[["CodeWriter"], None],
    ) -> "CodeWriter":
        self.line(f"{{{condition} ? (")
        with self.indented():
            then(self)
        self.line(") : (")
        with self.indented():
            otherwise(self)
        self.line(")}")
        return self

    def const_array(self, name: str, items: Sequence[object]) -> "CodeWriter":
        with self.block(f"const {name} = [", "];"):
            for item in items:
                self.line(f"{to_js(item)},")
        return self

    def leaf(self, tag: str, text: str = "", attrs: str = "") -> "CodeWriter":
        return self.line(f"<{tag}{_attrs(attrs)}>{text}</{tag}>")

    def void(self, tag: str, attrs: str = "") -> "CodeWriter":
        return self.line(f"<{tag}{_attrs(attrs)} />")

    # -- CSS helpers -------------------------------------------------

    def rule(self, selector: str, declarations: Mapping[str, str]) -> "CodeWriter":
        with self.block(f"{selector} {{", "}"):
            for prop, value in declarations.items():
                self.line(f"{prop}: {value};")
        return self

    def render(self) -> str:
        return "\n".join(self._lines)


def _attrs(attrs: str) -> str:
    return f" {attrs}" if attrs else ""


IMPORT_LINE_RE = re.compile(
    r"""^import\s+
    (?:(?P<default>[A-Za-z_$][\w$]*)\s*(?:,\s*)?)?
    (?:\{(?P<named>[^}]*)\}\s*)?
    (?:from\s+)?
    (?P<quote>['"])(?P<module>[^'"]+)(?P=quote)\s*;?$""",
    re.VERBOSE,
)


class ImportSet:
    """
    ES module imports merged per module path.

    Named imports for the same module are combined, duplicates are dropped and
    modules render in first-seen order, so the output depends only on the
    sequence of add() calls.
    """

    def __init__(self) -> None:
        self._order: List[str] = []
        self._default: Dict[str, str] = {}
        self._named: Dict[str, List[str]] = {}
        self._quote: Dict[str, str] = {}

    @classmethod
    def parse(cls, text: str) -> "ImportSet":
        """Read back import lines as render() writes them; blank lines are skipped."""
        imports = cls()
        for raw in text.splitlines():
            line = raw.strip()
            if not line:
                continue
            m = IMPORT_LINE_RE.match(line)
            if m is None:
                raise ValueError(f"Not an import statement: {line!r}")
            named = [n.strip() for n in (m.group("named") or "").split(",") if n.strip()]
            imports.add(m.group("module"), named, m.group("default"), m.group("quote"))
        return imports

    def add(
        self,
        module: str,
        names: Sequence[str] = (),
        default: Optional[str] = None,
        quote: str = "'",
    ) -> "ImportSet":
        if module not in self._named:
            self._order.append(module)
            self._named[module] = []
            self._quote[module] = quote
        if default and module not in self._default:
            self._default[module] = default
        for name in names:
            if name not in self._named[module]:
                self._named[module].append(name)
        return self

    def side_effect(self, module: str) -> "ImportSet":
        return self.add(module)

    def merge(self, other: "ImportSet") -> "ImportSet":
        for module in other._order:
            self.add(module, other._named[module], other._default.get(module), other._quote[module])
        return self

    def bound_names(self) -> List[str]:
        bound = list(self._default.values())
        for names in self._named.values():
            bound.extend(names)
        return bound

    def render(self) -> str:
        out: List[str] = []
        for module in self._order:
            q = self._quote[module]
            default = self._default.get(module)
            named = self._named[module]
            parts: List[str] = []
            if default:
                parts.append(default)
            if named:
                parts.append("{ " + ", ".join(named) + " }")
            if parts:
                out.append(f"import {', '.join(parts)} from {q}{module}{q};")
            else:
                out.append(f"import {q}{module}{q};")
        return "\n".join(out)


def js_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )
    return f"'{escaped}'"


def to_js(value: object) -> str:
    """Render plain Python data as a JavaScript literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return js_string(value)
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        return "{ " + ", ".join(f"{k}: {to_js(v)}" for k, v in value.items()) + " }"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_js(v) for v in value) + "]"
    raise TypeError(f"Cannot render {type(value).__name__} as a JavaScript literal")
