"""Service Maker commands.

Implements the four generators:

make:interface   -- empty interface under ``app/Interfaces``.
make:repository  -- model-backed CRUD repository, optional interface and binding.
make:service     -- service class, optional interface, model and binding.
make:trait       -- empty trait under ``app/Traits``.

Usage::

    python -m service_maker make:repository Admin/User --interface --bind
    python -m service_maker make:service Billing --model=Invoice --singleton
    python -m service_maker --app-path ./app make:trait HasUuid
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from service_maker.config import Config
from service_maker.provider import (
    MalformedDocumentError,
    ProviderFile,
    ProviderNotFoundError,
    ProviderPatcher,
    RegionNotFoundError,
)
from service_maker.scaffolder import (
    ArtifactExistsError,
    ArtifactGenerator,
    ArtifactKind,
    ArtifactTarget,
    ArtifactWriteError,
    ArtifactWriter,
    BindingMode,
    BindingSpec,
    GeneratedArtifact,
    InvalidNameError,
)
from service_maker.scaffolder.generator import split_name
from service_maker.scaffolder.templates import REPOSITORY_INTERFACE_TEMPLATE
from service_maker.utils import (
    print_error,
    print_files_table,
    print_info,
    print_success,
    print_warning,
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class ServiceMaker:
    """Runs the ``make:*`` commands against one Laravel application.

    Every command returns a process exit code: ``0`` on success, ``1`` when
    the requested artifact already exists, the name is invalid, the disk
    cannot be written, or the requested binding could not be registered.

    Attributes:
        config: Application layout and patcher settings.
        generator: Computes targets and renders stubs.
        writer: Persists rendered artifacts.
    """

    def __init__(
        self,
        config: Config,
        generator: Optional[ArtifactGenerator] = None,
        writer: Optional[ArtifactWriter] = None,
    ) -> None:
        self.config = config
        self.generator = generator or ArtifactGenerator(config)
        self.writer = writer or ArtifactWriter()

    # ------------------------------------------------------------------
    # make:interface / make:trait
    # ------------------------------------------------------------------

    def make_interface(self, name: str) -> int:
        """Create ``app/Interfaces/<dirs>/<Name>Interface.php``."""
        return self._make_simple(ArtifactKind.INTERFACE, name)

    def make_trait(self, name: str) -> int:
        """Create ``app/Traits/<dirs>/<Name>.php``."""
        return self._make_simple(ArtifactKind.TRAIT, name)

    def _make_simple(self, kind: ArtifactKind, name: str) -> int:
        try:
            artifact = self.generator.generate(kind, name)
            self.writer.write(artifact)
        except InvalidNameError as exc:
            print_error(str(exc))
            return 1
        except ArtifactExistsError:
            print_error(f"{kind.label} already exists!")
            return 1
        except ArtifactWriteError as exc:
            print_error(str(exc))
            return 1

        print_success(f"{kind.label} created successfully: {name}{kind.suffix}")
        return 0

    # ------------------------------------------------------------------
    # make:repository / make:service
    # ------------------------------------------------------------------

    def make_repository(
        self,
        name: str,
        model: Optional[str] = None,
        interface: bool = False,
        bind: bool = False,
        singleton: bool = False,
    ) -> int:
        """Create a CRUD repository backed by *model*.

        The model defaults to the repository's base name, so
        ``make:repository Admin/User`` works on ``App\\Models\\User``.
        """
        if not model:
            try:
                model = split_name(name)[1]
            except InvalidNameError as exc:
                print_error(str(exc))
                return 1
        return self._make_class(
            ArtifactKind.REPOSITORY,
            name,
            model=model,
            interface=interface,
            bind=bind,
            singleton=singleton,
        )

    def make_service(
        self,
        name: str,
        interface: bool = False,
        model: Optional[str] = None,
        bind: bool = False,
        singleton: bool = False,
    ) -> int:
        """Create a service class, optionally backed by *model*."""
        return self._make_class(
            ArtifactKind.SERVICE,
            name,
            model=model,
            interface=interface,
            bind=bind,
            singleton=singleton,
        )

    def _make_class(
        self,
        kind: ArtifactKind,
        name: str,
        *,
        model: Optional[str],
        interface: bool,
        bind: bool,
        singleton: bool,
    ) -> int:
        # Render everything first so a bad name or model writes nothing.
        try:
            target = self.generator.resolve(kind, name)
            if target.path.exists():
                print_error(f"{kind.label} already exists!")
                return 1

            interface_target: Optional[ArtifactTarget] = None
            interface_artifact: Optional[GeneratedArtifact] = None
            if interface:
                interface_target = self.generator.companion_interface(kind, name)
                if interface_target.path.exists():
                    print_warning(
                        f"Interface already exists! Reusing {interface_target.fqn}"
                    )
                else:
                    interface_artifact = self.generator.generate(
                        ArtifactKind.INTERFACE,
                        name,
                        target=interface_target,
                        template=REPOSITORY_INTERFACE_TEMPLATE
                        if kind is ArtifactKind.REPOSITORY
                        else None,
                    )

            artifact = self.generator.generate(
                kind, name, model=model, interface=interface_target, target=target
            )
        except InvalidNameError as exc:
            print_error(str(exc))
            return 1
        except ArtifactExistsError:
            print_error(f"{kind.label} already exists!")
            return 1

        written: dict[str, Path] = {}
        try:
            if interface_artifact is not None:
                written[interface_artifact.fqn] = self.writer.write(interface_artifact)
                print_success(
                    f"Interface created successfully: {name}{kind.suffix}Interface"
                )
            written[artifact.fqn] = self.writer.write(artifact)
        except ArtifactExistsError as exc:
            print_error(f"{exc.label} already exists!")
            return 1
        except ArtifactWriteError as exc:
            print_error(str(exc))
            return 1

        print_success(f"{kind.label} created successfully: {name}{kind.suffix}")
        if len(written) > 1:
            print_files_table(written)

        if bind or singleton:
            spec = BindingSpec(
                implementation_fqn=artifact.fqn,
                interface_fqn=interface_target.fqn if interface_target else None,
                mode=BindingMode.SINGLETON if singleton else BindingMode.TRANSIENT,
                model_fqn=self.generator.model_fqn(model) if model else None,
            )
            if not self.register_binding(kind, spec):
                return 1

        return 0

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def register_binding(self, kind: ArtifactKind, spec: BindingSpec) -> bool:
        """Register *spec* in the provider; return whether it succeeded.

        Structural problems with the provider are reported as warnings and
        leave it untouched. The generated files stay in place either way.
        """
        provider_name = self.config.provider_name
        provider_label = Path(provider_name).stem
        provider = ProviderFile(
            self.config.provider_path,
            ProviderPatcher.from_config(self.config),
            lock_timeout=self.config.lock_timeout,
        )

        try:
            result = provider.apply(spec)
        except ProviderNotFoundError:
            print_warning(f"{provider_name} not found!")
            return False
        except RegionNotFoundError:
            print_warning(
                f"Could not find {self.config.registration_function} method in {provider_label}!"
            )
            return False
        except MalformedDocumentError as exc:
            print_warning(f"Could not update {provider_label}: {exc}")
            return False
        except ArtifactWriteError as exc:
            print_error(str(exc))
            return False

        if not result.binding_added:
            print_warning(
                f"{kind.label} binding already registered in {provider_label}: {spec.describe()}"
            )
            return True

        print_success(
            f"{kind.label} binding added to {provider_label}: "
            f"{spec.describe()} as {spec.mode.value}"
        )
        for fqn in result.imports_added:
            print_info(f"  use {fqn};")
        return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Argument parser with one sub-command per generator."""
    parser = argparse.ArgumentParser(
        prog="service-maker",
        description="Generate Laravel interfaces, repositories, services and traits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  service-maker make:interface Payments/Gateway\n"
            "  service-maker make:repository User --interface --bind\n"
            "  service-maker make:service Billing --model=Invoice --singleton\n"
        ),
    )
    parser.add_argument(
        "--app-path",
        default=None,
        help="Laravel app directory (default: ./app or $SERVICE_MAKER_APP_PATH)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (see Config.save)",
    )

    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.required = True

    interface = commands.add_parser("make:interface", help="Create a new interface")
    interface.add_argument("name", help="The name of the interface")

    repository = commands.add_parser("make:repository", help="Create a new repository class")
    repository.add_argument("name", help="The name of the repository")
    repository.add_argument("--model", default=None, help="The model that the repository will use")
    repository.add_argument("-i", "--interface", action="store_true",
                            help="Create an interface for this repository")
    repository.add_argument("-b", "--bind", action="store_true",
                            help="Automatically bind the repository in the service provider")
    repository.add_argument("-s", "--singleton", action="store_true",
                            help="Register the repository as a singleton")

    service = commands.add_parser("make:service", help="Create a new service class")
    service.add_argument("name", help="The name of the service")
    service.add_argument("-i", "--interface", action="store_true",
                         help="Create an interface for this service")
    service.add_argument("-m", "--model", default=None, help="The model that the service will use")
    service.add_argument("-b", "--bind", action="store_true",
                         help="Automatically bind the service in the service provider")
    service.add_argument("-s", "--singleton", action="store_true",
                         help="Register the service as a singleton")

    trait = commands.add_parser("make:trait", help="Create a new trait")
    trait.add_argument("name", help="The name of the trait")

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``service-maker`` and ``python -m service_maker``."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(Path(args.config)) if args.config else Config.from_env()
        if args.app_path:
            config = config.model_copy(update={"app_path": Path(args.app_path)})
    except (OSError, ValueError, ValidationError) as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)

    maker = ServiceMaker(config)
    if args.command == "make:interface":
        code = maker.make_interface(args.name)
    elif args.command == "make:trait":
        code = maker.make_trait(args.name)
    elif args.command == "make:repository":
        code = maker.make_repository(
            args.name,
            model=args.model,
            interface=args.interface,
            bind=args.bind,
            singleton=args.singleton,
        )
    else:
        code = maker.make_service(
            args.name,
            interface=args.interface,
            model=args.model,
            bind=args.bind,
            singleton=args.singleton,
        )

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
