"""Container binding statements for the provider's registration function."""

from __future__ import annotations

import re

from service_maker.scaffolder.models import BindingSpec, short_name

DEFAULT_INDENT = " " * 8


def build_binding_statement(
    spec: BindingSpec,
    indent: str = DEFAULT_INDENT,
    newline: str = "\n",
) -> str:
    """Render the ``$this->app->bind(...)`` statement registering *spec*.

    Three shapes are produced:

    * interface bound to implementation::

        $this->app->bind(FooServiceInterface::class, FooService::class);

    * implementation with a model dependency, built by a closure that asks
      the container for the model when it runs::

        $this->app->bind(FooRepository::class, function ($app) {
            return new FooRepository($app->make(\\App\\Models\\Foo::class));
        });

    * implementation without dependency::

        $this->app->bind(FooService::class);

    Every line is prefixed with *indent*; there is no trailing newline.
    """
    method = spec.mode.method
    impl = short_name(spec.implementation_fqn)

    if spec.interface_fqn:
        return f"{indent}$this->app->{method}({short_name(spec.interface_fqn)}::class, {impl}::class);"

    if spec.model_fqn:
        inner = indent + ("\t" if "\t" in indent else "    ")
        return newline.join([
            f"{indent}$this->app->{method}({impl}::class, function ($app) {{",
            f"{inner}return new {impl}($app->make(\\{spec.model_fqn}::class));",
            f"{indent}}});",
        ])

    return f"{indent}$this->app->{method}({impl}::class);"


def binding_pattern(spec: BindingSpec, include_short_name: bool = True) -> re.Pattern[str]:
    """Pattern matching any existing registration of the binding's abstract type.

    Both ``bind`` and ``singleton`` registrations count.  The abstract may be
    written as its (optionally rooted) FQN, or, when *include_short_name* is
    true, as its short name.
    """
    abstract = spec.abstract_fqn
    candidates = [abstract, "\\" + abstract]
    if include_short_name:
        candidates.append(short_name(abstract))
    names = "|".join(re.escape(n) for n in candidates)
    return re.compile(rf"->\s*(?:bind|singleton)\s*\(\s*(?:{names})::class\b")
