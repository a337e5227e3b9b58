"""Template rendering - replaces ``{{var}}`` placeholders in template text.

Resource-scoped values take precedence over environment values.

A placeholder may be preceded by a *prefix*: the contiguous run of
whitespace, ``-`` and ``#`` characters directly in front of ``{{``.  When a
value spans several lines, every continuation line is re-prefixed, so a
template line such as::

    - {{var}}

renders a two-line value as::

    - value line 1
    - value line 2

Comments (``# {{var}}``) and plain indentation behave the same way.  To
get a single multi-line string instead, use a YAML block marker::

    - |
        {{var}}

Substitution is a single pass: text produced by a replacement is never
scanned again, and there is no escape syntax for a literal ``{{...}}``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterator, NamedTuple, Optional

from resource_manifests.errors import MissingEnvironmentValue, MissingVariable
from resource_manifests.render.environment import EMPTY, Environment

if TYPE_CHECKING:
    from resource_manifests.render.resource import Resource

# ASCII whitespace only; ``str.isspace`` would also accept unicode spaces.
_WHITESPACE = frozenset(" \t\n\x0b\f\r")
_PREFIX_CHARS = _WHITESPACE | {"-", "#"}
_OPEN = "{{"
_CLOSE = "}}"


def _is_identifier_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "_-.")


# ── scanner ──────────────────────────────────────────────────────────


class Token(NamedTuple):
    """One scanned chunk: literal text, then an optional placeholder.

    ``identifier`` is ``None`` only for the trailing literal run.
    """

    literal: str
    prefix: str
    identifier: Optional[str]


def _match_placeholder(text: str, start: int) -> Optional[tuple]:
    """Parse ``{{ identifier }}`` at *start*; return ``(identifier, end)``."""
    pos = start + len(_OPEN)
    size = len(text)
    while pos < size and text[pos] in _WHITESPACE:
        pos += 1
    ident_start = pos
    while pos < size and _is_identifier_char(text[pos]):
        pos += 1
    if pos == ident_start:
        return None
    identifier = text[ident_start:pos]
    while pos < size and text[pos] in _WHITESPACE:
        pos += 1
    if not text.startswith(_CLOSE, pos):
        return None
    return identifier, pos + len(_CLOSE)


def scan(text: str) -> Iterator[Token]:
    """Split *text* into :class:`Token` s, left to right.

    The prefix never reaches back past the end of the previous
    placeholder, and an unparseable ``{{`` is kept as literal text.
    """
    pos = 0
    search = 0
    while True:
        open_at = text.find(_OPEN, search)
        if open_at < 0:
            break
        matched = _match_placeholder(text, open_at)
        if matched is None:
            # "{{{x}}}" must still find the placeholder one character later
            search = open_at + 1
            continue
        identifier, end = matched
        prefix_start = open_at
        while prefix_start > pos and text[prefix_start - 1] in _PREFIX_CHARS:
            prefix_start -= 1
        yield Token(text[pos:prefix_start], text[prefix_start:open_at], identifier)
        pos = search = end
    yield Token(text[pos:], "", None)


def indent_value(prefix: str, value: str) -> str:
    """Return ``prefix + value`` with every continuation line re-prefixed.

    A prefix that itself begins on an earlier line (for example
    ``"\\n  - "``) contributes only its last line to continuation lines.
    """
    line_prefix = prefix.rsplit("\n", 1)[-1]
    return prefix + value.replace("\n", "\n" + line_prefix)


# ── templates ────────────────────────────────────────────────────────


class Template(ABC):
    """Turns a Resource into a string.  Intended for generating K8s YAML."""

    @abstractmethod
    def render(self, resource: "Resource") -> str:
        """Render *resource*; raises on any unresolved placeholder."""


class SimpleTemplate(Template):
    """Replaces ``{{var}}`` in template text with the corresponding variable."""

    def __init__(self, env: Environment, template: str) -> None:
        self._env = env if env is not None else EMPTY
        self._template = template

    @property
    def text(self) -> str:
        return self._template

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, resource: "Resource") -> str:
        env = self._env
        out = []
        for token in scan(self._template):
            out.append(token.literal)
            if token.identifier is None:
                continue
            key = token.identifier
            try:
                value = resource.get_or_default(key, lambda: env.get(key))
            except MissingEnvironmentValue as exc:
                raise MissingVariable(resource.name, key) from exc
            if value is None:
                raise MissingVariable(resource.name, key)
            out.append(indent_value(token.prefix, value))
        return "".join(out)

    def __repr__(self) -> str:
        return f"SimpleTemplate(env={self._env!r}, chars={len(self._template)})"
