from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich import box

from .logging_config import get_logger
from .scaffold.core.config import ConfigError, ScaffoldConfig, load_config
from .scaffold.core.generator import (
    GeneratedFile,
    ScaffoldError,
    ScaffoldGenerator,
    resolve_migration_time,
)
from .scaffold.core.processor import TemplateProcessor
from .scaffold.core.schema import (
    ModelDefinition,
    ModelValidationError,
    collect_warnings,
    ensure_valid,
)
from .scaffold.core.templates import TemplateError, create_stub_loader
from .utils import ModelLoaderError, load_model_definition

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def _syntax_lexer(name: str) -> str:
    if name.startswith("frontend/") or name.endswith(".ts"):
        return "typescript"
    return "php"


class CLIHandler:
    """Handle command-line operations for scaffold generation."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def run(self, args: argparse.Namespace) -> int:
        """Dispatch a parsed command.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        handlers = {
            "render": self._handle_render,
            "scaffold": self._handle_scaffold,
            "names": self._handle_names,
            "stubs": self._handle_stubs,
        }
        handler = handlers.get(args.command)
        if handler is None:
            self.console.print(f"❌ [red]Unknown command: {args.command}[/red]")
            return 1

        try:
            return handler(args)
        except ModelValidationError as e:
            self.console.print("❌ [red]Invalid model definition:[/red]")
            for error in e.errors:
                self.console.print(f"  • {error}")
            return 1
        except (
            CLIError,
            ConfigError,
            ModelLoaderError,
            ScaffoldError,
            TemplateError,
            FileNotFoundError,
        ) as e:
            self.console.print(f"❌ [red]Error:[/red] {e}")
            logger.error("%s failed: %s", args.command, e)
            return 1

    # Shared helpers

    def _build_config(self, args: argparse.Namespace) -> ScaffoldConfig:
        overrides = {}
        if getattr(args, "relationship_naming", None):
            overrides["relationship_naming"] = args.relationship_naming
        if getattr(args, "project_path", None):
            overrides["project_path"] = args.project_path
        if getattr(args, "stubs_dir", None):
            overrides["stubs_directory"] = args.stubs_dir
            overrides["use_custom_stubs"] = True
        if getattr(args, "use_custom_stubs", False):
            overrides["use_custom_stubs"] = True

        config = load_config(custom_config=overrides, config_file=args.config)
        if config.use_custom_stubs and not config.project_path:
            config.project_path = str(Path.cwd())
        return config

    def _load_model(self, args: argparse.Namespace) -> ModelDefinition:
        if args.model and args.url:
            raise CLIError("Use either a model file or --url, not both")
        if not args.model and not args.url:
            raise CLIError("A model definition file or --url is required")

        model = load_model_definition(file_path=args.model, url=args.url)
        return ensure_valid(model)

    def _print_warnings(self, warnings: list[str]) -> None:
        for warning in warnings:
            self.console.print(f"⚠️  [yellow]{warning}[/yellow]")

    def _write_file(self, path: Path, content: str, force: bool) -> bool:
        if path.exists() and not force:
            self.console.print(f"[yellow]Skipped existing file:[/yellow] {path}")
            logger.warning("Not overwriting existing file: %s", path)
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write {path}: {e}") from e
        return True

    # Commands

    def _handle_render(self, args: argparse.Namespace) -> int:
        config = self._build_config(args)
        model = self._load_model(args)
        self._print_warnings(collect_warnings(model))
        processor = TemplateProcessor(config.naming_case, config.frontend_import_path)

        if args.template:
            template_path = Path(args.template)
            if not template_path.exists():
                raise CLIError(f"Template file not found: {template_path}")
            output = processor.process_template(
                template_path.read_text(encoding="utf-8"), model
            )
            lexer = _syntax_lexer(template_path.name)
        else:
            loader = create_stub_loader(config)
            output = loader.render_stub(args.stub, model, processor)
            lexer = _syntax_lexer(args.stub)

        if args.output:
            self._write_file(Path(args.output), output, force=True)
            self.console.print(f"✅ [green]Rendered to {args.output}[/green]")
        elif args.plain:
            self.console.print(output, markup=False, highlight=False, soft_wrap=True)
        else:
            self.console.print(Syntax(output, lexer, line_numbers=False))

        logger.info("Rendered template for %s", model.name)
        return 0

    def _handle_scaffold(self, args: argparse.Namespace) -> int:
        config = self._build_config(args)
        model = self._load_model(args)

        migration_time = resolve_migration_time(args.migration_date)
        generator = ScaffoldGenerator(config, clock=lambda: migration_time)

        if args.dry_run:
            self._print_warnings(collect_warnings(model))
            self._print_plan(generator, model)
            return 0

        result = generator.generate(model)
        self._print_warnings(result.warnings)

        if not args.output_dir:
            for generated in result.files:
                self._print_file(generated)
            return 0

        output_dir = Path(args.output_dir)
        written = 0
        for generated in result.files:
            if self._write_file(output_dir / generated.path, generated.content, args.force):
                written += 1
                self.console.print(f"  [green]✓[/green] {generated.path}")

        self.console.print(
            f"\n📦 Wrote {written} of {len(result.files)} file(s) to {output_dir}"
        )
        logger.info("Scaffold for %s written to %s", model.name, output_dir)
        return 0

    def _print_plan(self, generator: ScaffoldGenerator, model: ModelDefinition) -> None:
        table = Table(title=f"Scaffold plan for {model.name}", box=box.SIMPLE)
        table.add_column("Stub", style="cyan")
        table.add_column("Output path")
        table.add_column("Source", style="magenta")

        for target in generator.plan(model):
            source = "custom" if generator.loader.is_custom(target.stub) else "default"
            table.add_row(target.stub, generator.target_path(target, model), source)

        self.console.print(table)

    def _print_file(self, generated: GeneratedFile) -> None:
        self.console.print(
            Panel(
                Syntax(generated.content, _syntax_lexer(generated.stub)),
                title=generated.path,
                subtitle=generated.stub,
            )
        )

    def _handle_names(self, args: argparse.Namespace) -> int:
        model = ModelDefinition(name=args.name, table_name=args.table_name)
        processor = TemplateProcessor()

        table = Table(title=f"Naming tokens for {args.name}", box=box.SIMPLE)
        table.add_column("Token", style="cyan")
        table.add_column("Value", style="green")

        for token, value in processor.simple_variables(model).items():
            table.add_row(token, value)

        self.console.print(table)
        return 0

    def _handle_stubs(self, args: argparse.Namespace) -> int:
        config = self._build_config(args)
        loader = create_stub_loader(config)

        table = Table(title="Available stubs", box=box.SIMPLE)
        table.add_column("Stub", style="cyan")
        table.add_column("Source", style="magenta")

        for name in loader.list_stubs():
            table.add_row(name, "custom" if loader.is_custom(name) else "default")

        self.console.print(table)
        return 0
