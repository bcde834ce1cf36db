"""Structural scanner for PHP source text.

The provider patcher never edits text it does not understand.  Every search
runs over a *masked* copy of the document: the contents of string literals,
heredocs and comments are blanked out (newlines kept), so the masked text has
exactly the same length and line layout as the original while braces,
signatures and ``use`` lines hidden inside literals or comments become
invisible.  Brace pairing is then a plain depth counter over the masked text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_HEREDOC_OPEN_RE = re.compile(r"<<<[ \t]*(['\"]?)([A-Za-z_]\w*)\1\r?\n")
_RETURN_TYPE_RE = re.compile(r"\s*(?::\s*\??[\w\\|]+\s*)?\{")


class ScanError(ValueError):
    """Raised when the document's literal or brace structure cannot be resolved."""

    def __init__(self, message: str, position: int) -> None:
        self.position = position
        super().__init__(f"{message} (offset {position})")


@dataclass(frozen=True)
class Region:
    """A brace-delimited function body located in a document."""

    name: str
    signature_start: int
    open_brace: int
    close_brace: int

    @property
    def body(self) -> slice:
        """Slice of the text strictly between the braces."""
        return slice(self.open_brace + 1, self.close_brace)


# ---------------------------------------------------------------------------
# Masking
# ---------------------------------------------------------------------------


def mask_non_code(text: str) -> str:
    """Blank out string literals, heredocs and comments in *text*.

    Delimiters of string literals are kept so the masked text still shows
    where a literal sits.  ``#[`` starts a PHP 8 attribute, not a comment.

    Raises:
        ScanError: On an unterminated literal, heredoc or block comment.
    """
    out = list(text)
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "'" or ch == '"':
            end = _string_end(text, i)
            _blank(out, i + 1, end)
            i = end + 1
        elif text.startswith("//", i) or (ch == "#" and not text.startswith("#[", i)):
            end = _line_end(text, i)
            _blank(out, i, end)
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ScanError("Unterminated block comment", i)
            _blank(out, i, end + 2)
            i = end + 2
        elif text.startswith("<<<", i):
            i = _mask_heredoc(text, out, i)
        else:
            i += 1
    return "".join(out)


def _blank(out: list[str], start: int, end: int) -> None:
    for j in range(start, end):
        if out[j] not in "\r\n":
            out[j] = " "


def _string_end(text: str, start: int) -> int:
    """Index of the quote closing the literal opened at *start*."""
    quote = text[start]
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i
        i += 1
    raise ScanError("Unterminated string literal", start)


def _line_end(text: str, start: int) -> int:
    end = text.find("\n", start)
    return len(text) if end == -1 else end


def _mask_heredoc(text: str, out: list[str], start: int) -> int:
    match = _HEREDOC_OPEN_RE.match(text, start)
    if match is None:
        return start + 3
    label = match.group(2)
    closing = re.compile(rf"^[ \t]*{re.escape(label)}\b", re.MULTILINE)
    close_match = closing.search(text, match.end())
    if close_match is None:
        raise ScanError(f"Unterminated heredoc '{label}'", start)
    _blank(out, match.end(), close_match.start())
    return close_match.end()


# ---------------------------------------------------------------------------
# Brace matching
# ---------------------------------------------------------------------------


def match_brace(masked: str, open_index: int) -> int:
    """Return the index of the ``}`` pairing the ``{`` at *open_index*.

    Nested pairs (closures, control blocks, arrays of closures) are skipped by
    counting depth, so the innermost ``}`` is never mistaken for the outer one.

    Raises:
        ScanError: When the block is never closed.
    """
    return _match_pair(masked, open_index, "{", "}")


def match_paren(masked: str, open_index: int) -> int:
    """Return the index of the ``)`` pairing the ``(`` at *open_index*."""
    return _match_pair(masked, open_index, "(", ")")


def _match_pair(masked: str, open_index: int, opening: str, closing: str) -> int:
    if masked[open_index] != opening:
        raise ValueError(f"No opening {opening!r} at offset {open_index}")
    depth = 0
    for i in range(open_index, len(masked)):
        ch = masked[i]
        if ch == opening:
            depth += 1
        elif ch == closing:
            depth -= 1
            if depth == 0:
                return i
    raise ScanError(f"Unbalanced {opening}{closing}: block is never closed", open_index)


def check_balanced(masked: str) -> None:
    """Raise unless every ``{`` in *masked* has a matching ``}``.

    Matching the registration body alone is not enough: a brace missing
    inside it would pair its opening brace with the class's closing one.
    """
    depth = 0
    for i, ch in enumerate(masked):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth < 0:
                raise ScanError("Unbalanced braces: unexpected '}'", i)
    if depth:
        raise ScanError(f"Unbalanced braces: {depth} block(s) never closed", len(masked))


def function_signature(name: str) -> re.Pattern[str]:
    """Pattern matching ``function <name>(``, up to the parameter list's ``(``."""
    return re.compile(rf"\bfunction\s+&?{re.escape(name)}\s*\(", re.IGNORECASE)


def find_function_body(masked: str, name: str) -> Optional[Region]:
    """Locate the body of the first function called *name* in *masked*.

    The parameter list is paired by depth, so defaults such as
    ``$a = array()`` do not end it early.  An optional return type
    (``: void``, ``: ?Foo``) may sit between the parameters and the brace;
    abstract declarations ending in ``;`` are skipped.

    Returns ``None`` if no such function is declared.

    Raises:
        ScanError: When the function is found but its parameters or body
            are unbalanced.
    """
    for match in function_signature(name).finditer(masked):
        close_paren = match_paren(masked, match.end() - 1)
        tail = _RETURN_TYPE_RE.match(masked, close_paren + 1)
        if tail is None:
            continue
        open_brace = tail.end() - 1
        return Region(
            name=name,
            signature_start=match.start(),
            open_brace=open_brace,
            close_brace=match_brace(masked, open_brace),
        )
    return None


def line_start(text: str, index: int) -> int:
    """Offset of the first character of the line containing *index*."""
    return text.rfind("\n", 0, index) + 1


def leading_whitespace(line: str) -> str:
    """The run of spaces and tabs a line starts with."""
    return line[: len(line) - len(line.lstrip(" \t"))]
