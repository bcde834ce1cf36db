"""Provider patcher: registers generated classes in a service provider.

Given the text of a provider such as ``app/Providers/AppServiceProvider.php``
and a :class:`~service_maker.scaffolder.models.BindingSpec`, the patcher
returns the text with the missing ``use`` imports and one binding statement
added to the registration function (``register()`` by default).  It is a pure
function of its inputs: nothing is read or written here, and on failure the
caller's document is left as it was.

Quick usage::

    from service_maker.provider import ProviderPatcher
    from service_maker.scaffolder.models import BindingSpec

    spec = BindingSpec(implementation_fqn="App\\\\Services\\\\FooService")
    patched = ProviderPatcher().patch(provider_text, spec)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from service_maker.scaffolder.models import BindingSpec, PatchResult, short_name

from .bindings import DEFAULT_INDENT, binding_pattern, build_binding_statement
from .imports import (
    ImportAnchorError,
    ImportConflictError,
    detect_newline,
    imported_names,
    insert_imports,
)
from .scanner import (
    Region,
    ScanError,
    check_balanced,
    find_function_body,
    leading_whitespace,
    line_start,
    mask_non_code,
)

if TYPE_CHECKING:
    from service_maker.config import Config


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PatchError(Exception):
    """Base class for failures that leave the provider untouched."""


class RegionNotFoundError(PatchError):
    """Raised when the provider does not declare the registration function."""

    def __init__(self, function_name: str) -> None:
        self.function_name = function_name
        super().__init__(f"Could not find {function_name} method in the provider")


class MalformedDocumentError(PatchError):
    """Raised when the provider's structure cannot be resolved unambiguously."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.position = position
        super().__init__(message)


# ---------------------------------------------------------------------------
# Patcher
# ---------------------------------------------------------------------------


class ProviderPatcher:
    """Inserts imports and a binding statement into a provider document.

    Attributes:
        registration_function: Name of the function whose body receives the
            binding.
        default_indent: Indent used when the body has no statement to copy
            the indentation from.
        dedupe_bindings: When true, a registration of the same abstract type
            already present in the body suppresses the new statement.
    """

    def __init__(
        self,
        registration_function: str = "register",
        default_indent: str = DEFAULT_INDENT,
        dedupe_bindings: bool = True,
    ) -> None:
        self.registration_function = registration_function
        self.default_indent = default_indent
        self.dedupe_bindings = dedupe_bindings

    @classmethod
    def from_config(cls, config: Config) -> "ProviderPatcher":
        return cls(
            registration_function=config.registration_function,
            default_indent=config.indent,
            dedupe_bindings=config.dedupe_bindings,
        )

    # -- Public API --------------------------------------------------------

    def patch(self, document: str, spec: BindingSpec) -> str:
        """Return *document* with *spec* registered.

        Raises:
            RegionNotFoundError: The registration function is not declared.
            MalformedDocumentError: Literals, comments or braces are
                unbalanced, there is no place to put imports, or an import
                would reuse a name bound to another class.
        """
        return self.apply(document, spec).content

    def apply(self, document: str, spec: BindingSpec) -> PatchResult:
        """Like :meth:`patch`, also reporting what was added."""
        masked, region = self._scan(document)
        newline = detect_newline(document)

        content = document
        binding_added = False
        indent = self._detect_indent(document, region)
        statement = build_binding_statement(spec, indent, newline)

        already_bound = self._is_bound(document, masked, region, spec)
        if not (self.dedupe_bindings and already_bound):
            content = self._insert_statement(document, region, statement, newline)
            binding_added = True

        try:
            content, imports_added = insert_imports(content, spec.required_imports)
        except (ImportAnchorError, ImportConflictError) as exc:
            raise MalformedDocumentError(str(exc)) from exc
        except ScanError as exc:
            raise MalformedDocumentError(str(exc), exc.position) from exc

        return PatchResult(
            content=content,
            imports_added=imports_added,
            binding_added=binding_added,
            binding=statement.strip(),
        )

    # -- Internals ---------------------------------------------------------

    def _scan(self, document: str) -> tuple[str, Region]:
        try:
            masked = mask_non_code(document)
            check_balanced(masked)
            region = find_function_body(masked, self.registration_function)
        except ScanError as exc:
            raise MalformedDocumentError(str(exc), exc.position) from exc
        if region is None:
            raise RegionNotFoundError(self.registration_function)
        return masked, region

    def _is_bound(self, document: str, masked: str, region: Region, spec: BindingSpec) -> bool:
        """Whether the body already registers the binding's abstract type.

        A short-name registration only counts when that name is imported as
        exactly the abstract's FQN; otherwise it refers to another class.
        """
        abstract = spec.abstract_fqn
        bound = imported_names(document).get(short_name(abstract).lower())
        same_class = bound is not None and bound.lower() == abstract.lower()
        pattern = binding_pattern(spec, include_short_name=same_class)
        return pattern.search(masked[region.body]) is not None

    def _detect_indent(self, document: str, region: Region) -> str:
        """Indent of the first statement line inside the body, if any."""
        body_lines = document[region.body].split("\n")[1:]
        for line in body_lines:
            if line.strip():
                return leading_whitespace(line)
        return self.default_indent

    def _insert_statement(
        self, document: str, region: Region, statement: str, newline: str
    ) -> str:
        close = region.close_brace
        at = line_start(document, close)
        if not document[at:close].strip():
            # Closing brace sits on its own line.
            return document[:at] + statement + newline + document[at:]

        # Body shares a line with the closing brace: ``{}`` or ``{ foo(); }``.
        trimmed = close
        while trimmed > region.open_brace + 1 and document[trimmed - 1] in " \t":
            trimmed -= 1
        signature_line = document[line_start(document, region.signature_start):region.signature_start]
        closing_indent = leading_whitespace(signature_line)
        return (
            document[:trimmed]
            + newline
            + statement
            + newline
            + closing_indent
            + document[close:]
        )


def patch_provider(
    document: str,
    spec: BindingSpec,
    registration_function: str = "register",
    *,
    default_indent: str = DEFAULT_INDENT,
    dedupe_bindings: bool = True,
) -> str:
    """Functional form of :meth:`ProviderPatcher.patch`."""
    patcher = ProviderPatcher(
        registration_function=registration_function,
        default_indent=default_indent,
        dedupe_bindings=dedupe_bindings,
    )
    return patcher.patch(document, spec)
