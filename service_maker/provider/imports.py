"""``use`` statement handling for provider documents."""

from __future__ import annotations

import re

from service_maker.scaffolder.models import short_name

from .scanner import line_start, mask_non_code

_NAMESPACE_RE = re.compile(r"^[ \t]*namespace\s+[\w\\]+\s*;", re.MULTILINE)
_IMPORT_RE = re.compile(r"^use\s+\\?[\w\\{}, ]+(?:\s+as\s+\w+)?\s*;", re.MULTILINE)
_CLASS_IMPORT_RE = re.compile(
    r"^use\s+(?!function\b|const\b)\\?([\w\\]+)(?:\s+as\s+(\w+))?\s*;",
    re.MULTILINE | re.IGNORECASE,
)
_DECLARATION_RE = re.compile(
    r"^[ \t]*(?:(?:abstract|final|readonly)\s+)*(?:class|interface|trait|enum)\s+\w+",
    re.MULTILINE,
)


class ImportAnchorError(ValueError):
    """Raised when a document offers no place to insert imports."""


class ImportConflictError(ValueError):
    """Raised when an import would reuse a name bound to another class."""

    def __init__(self, fqn: str, existing: str) -> None:
        self.fqn = fqn
        self.existing = existing
        super().__init__(
            f"Cannot import {fqn}: the name {short_name(fqn)} is already used by {existing}"
        )


def import_statement(fqn: str) -> str:
    """Canonical import form of *fqn*: ``use Vendor\\Type;``."""
    fqn = fqn.strip("\\")
    return f"use {fqn};"


def has_import(document: str, fqn: str) -> bool:
    """Whether *document* already imports exactly *fqn*."""
    fqn = fqn.strip("\\")
    return f"use {fqn};" in document or f"use \\{fqn};" in document


def missing_imports(document: str, fqns: list[str]) -> list[str]:
    """FQNs from *fqns* not yet imported, in order and without repeats."""
    missing: list[str] = []
    for fqn in fqns:
        fqn = fqn.strip("\\")
        if fqn not in missing and not has_import(document, fqn):
            missing.append(fqn)
    return missing


def imported_names(document: str) -> dict[str, str]:
    """Map every name the document's class imports bind to its FQN.

    Keys are lower-cased since PHP class names are case-insensitive; an
    ``as`` alias is the bound name when present.  Grouped imports and
    ``use function`` / ``use const`` lines are ignored.
    """
    masked = mask_non_code(document)
    header_end = _header_end(masked)
    names: dict[str, str] = {}
    for match in _CLASS_IMPORT_RE.finditer(masked, 0, header_end):
        fqn = match.group(1)
        alias = match.group(2) or short_name(fqn)
        names.setdefault(alias.lower(), fqn)
    return names


def detect_newline(document: str) -> str:
    return "\r\n" if "\r\n" in document else "\n"


def _header_end(masked: str) -> int:
    declaration = _DECLARATION_RE.search(masked)
    return declaration.start() if declaration else len(masked)


def insert_imports(document: str, fqns: list[str]) -> tuple[str, list[str]]:
    """Insert ``use`` lines for every FQN of *fqns* the document lacks.

    The new lines form one block placed right before the first top-level
    import, keeping the order of *fqns*.  A document without imports gets the
    block on the line after its namespace declaration, followed by a blank
    line unless one is already there.

    Returns:
        The updated document and the list of FQNs actually imported.

    Raises:
        ImportConflictError: If a new import's short name is already bound
            to a different class.
        ImportAnchorError: If the document has neither imports nor a
            namespace declaration.
    """
    names = imported_names(document)
    missing: list[str] = []
    for fqn in missing_imports(document, fqns):
        key = short_name(fqn).lower()
        bound = names.get(key)
        if bound is None:
            names[key] = fqn
            missing.append(fqn)
        elif bound.lower() != fqn.lower():
            raise ImportConflictError(fqn, bound)
    if not missing:
        return document, []

    newline = detect_newline(document)
    block = "".join(import_statement(fqn) + newline for fqn in missing)
    masked = mask_non_code(document)
    header_end = _header_end(masked)

    first_import = _IMPORT_RE.search(masked, 0, header_end)
    if first_import is not None:
        at = line_start(masked, first_import.start())
        return document[:at] + block + document[at:], missing

    namespace = _NAMESPACE_RE.search(masked, 0, header_end)
    if namespace is None:
        raise ImportAnchorError("No namespace declaration or import statement to anchor imports")

    eol = document.find("\n", namespace.end())
    if eol == -1:
        return document + newline + block, missing
    at = eol + 1
    if document[at:].startswith(("\n", "\r\n")):
        return document[:at] + block + document[at:], missing
    return document[:at] + block + newline + document[at:], missing
