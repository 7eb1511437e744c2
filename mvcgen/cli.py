"""
mvcgen CLI - Command-line interface for project generation

Usage:
    mvcgen [PROJECT_NAME] [-o OUTPUT_DIR] [-a ANSWERS_FILE] [--yes] [--dry-run]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from mvcgen import __version__
from mvcgen.config import ResolvedConfig
from mvcgen.generator import (
    GenerationResult,
    LocalFileSink,
    MemoryFileSink,
    generate_project,
)
from mvcgen.prompts import PresetPrompter, RichPrompter, load_answers
from mvcgen.resolver import ConfigResolver, Prompter

app = typer.Typer(
    name="mvcgen",
    help="Generate an MVC structure for your Node.js application",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("mvcgen")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"mvcgen {__version__}", highlight=False)
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _build_prompter(answers_file: Optional[Path], assume_defaults: bool) -> Prompter:
    preset = load_answers(answers_file) if answers_file else {}
    if assume_defaults:
        return PresetPrompter(preset)
    if preset:
        return PresetPrompter(preset, fallback=RichPrompter(console))
    return RichPrompter(console)


@app.command()
def create(
    project_name: Optional[str] = typer.Argument(
        None,
        help="Name of your project",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir", "-o",
        help="Directory in which the project folder is created",
        envvar="MVCGEN_OUTPUT_DIR",
        file_okay=False,
        resolve_path=True,
    ),
    answers_file: Optional[Path] = typer.Option(
        None,
        "--answers", "-a",
        help="YAML file with preset answers",
        envvar="MVCGEN_ANSWERS",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    assume_defaults: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Accept defaults for every question without a preset answer",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Generate into an existing non-empty directory",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be generated without writing files",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Generate an MVC structure for your Node.js application."""
    _configure_logging(verbose)

    try:
        prompter = _build_prompter(answers_file, assume_defaults)
        config = ConfigResolver(prompter).resolve(project_name)
    except (KeyboardInterrupt, EOFError):
        err_console.print("\n[yellow]Aborted[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        _report(e)
        raise typer.Exit(1)

    try:
        if dry_run:
            result = generate_project(
                config,
                output_dir,
                sink=MemoryFileSink(base=LocalFileSink()),
                overwrite=force,
            )
            console.print(f"\n[yellow]Dry run - would generate to: {result.root}[/yellow]\n")
            _show_preview(config, result)
            return

        result = generate_project(config, output_dir, overwrite=force)
    except Exception as e:
        _report(e)
        raise typer.Exit(1)

    console.print(f"\n[green]✨ MVC project structure created successfully![/green] ({len(result.files)} files)")
    _show_next_steps(result.root)


def _report(error: Exception) -> None:
    """Print one error line; tracebacks only in verbose mode."""
    logger.debug("Generation failed", exc_info=error)
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)


def _show_preview(config: ResolvedConfig, result: GenerationResult) -> None:
    """Show what would be generated."""
    console.print(config.to_yaml(), highlight=False)

    tree = Tree(f"[bold]{config.project_name}[/bold]")
    nodes: dict[str, Tree] = {}
    for directory in result.directories:
        parent, _, name = directory.rpartition("/")
        nodes[directory] = nodes.get(parent, tree).add(f"[blue]{name}/[/blue]")
    for generated in sorted(result.files, key=lambda f: f.path):
        parent, _, name = generated.path.rpartition("/")
        nodes.get(parent, tree).add(name)

    console.print(tree)


def _show_next_steps(project_dir: Path) -> None:
    """Show next steps."""
    steps = f"""
[bold]To get started:[/bold]
  cd {project_dir}
  npm install
  npm run dev

[bold yellow]Important next steps:[/bold yellow]
  1. Update the JWT_SECRET in .env with a secure key
  2. Complete the TODO items in userController.js
  3. Add your own models in the models directory
  4. Customize the views according to your needs
"""
    console.print(Panel(steps, title="Done"))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
