"""
mvcgen Generator - writes a resolved TemplateSet to disk

All content is rendered and every path checked before the first write, so a
broken template never leaves a half-written project behind. Files already
written are not rolled back if the filesystem fails midway.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from mvcgen.config import ResolvedConfig
from mvcgen.templates import TemplateLibrary, TemplateSet, build, safe_relative_path

logger = logging.getLogger(__name__)


class TargetExistsError(FileExistsError):
    """The project directory already exists and is not empty."""


# ═══════════════════════════════════════════════════════════════════════════
# FILE SINKS
# ═══════════════════════════════════════════════════════════════════════════


class FileSink(Protocol):
    def ensure_dir(self, path: Path) -> None: ...

    def write_file(self, path: Path, content: str) -> None: ...

    def list_dir(self, path: Path) -> list[str]: ...


class LocalFileSink:
    """Writes to the real filesystem. Rewriting identical content is a no-op."""

    def ensure_dir(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def write_file(self, path: Path, content: str) -> None:
        if path.is_file() and path.read_bytes() == content.encode("utf-8"):
            logger.debug("Unchanged %s", path)
            return
        path.write_text(content, encoding="utf-8")

    def list_dir(self, path: Path) -> list[str]:
        if not path.is_dir():
            return []
        return sorted(child.name for child in path.iterdir())


class MemoryFileSink:
    """
    Collects directories and files in memory (dry runs, tests).

    With a ``base`` sink, ``list_dir`` also reports what already exists
    there, so a dry run sees the same target conflicts as a real run.
    """

    def __init__(self, base: FileSink | None = None) -> None:
        self.base = base
        self.directories: set[Path] = set()
        self.files: dict[Path, str] = {}

    def ensure_dir(self, path: Path) -> None:
        self.directories.add(path)

    def write_file(self, path: Path, content: str) -> None:
        if path.parent not in self.directories:
            raise FileNotFoundError(f"Parent directory missing for {path}")
        self.files[path] = content

    def list_dir(self, path: Path) -> list[str]:
        children = {p.name for p in self.directories if p.parent == path}
        children |= {p.name for p in self.files if p.parent == path}
        if self.base is not None:
            children |= set(self.base.list_dir(path))
        return sorted(children)


# ═══════════════════════════════════════════════════════════════════════════
# GENERATED FILE TRACKING
# ═══════════════════════════════════════════════════════════════════════════


@dataclass
class GeneratedFile:
    """Represents a generated file."""

    path: str  # Relative path from project root
    content: str


@dataclass
class GenerationResult:
    """Result of project generation."""

    root: Path
    files: list[GeneratedFile] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# MATERIALIZER
# ═══════════════════════════════════════════════════════════════════════════


class ProjectMaterializer:
    """
    Creates the project tree for a TemplateSet.

    A non-empty target directory is rejected unless ``overwrite`` is set, in
    which case generated files replace existing ones and everything else in
    the directory is left alone.
    """

    def __init__(self, sink: FileSink | None = None, overwrite: bool = False):
        self.sink = sink or LocalFileSink()
        self.overwrite = overwrite

    def materialize(self, root: Path, template_set: TemplateSet) -> GenerationResult:
        rendered = template_set.render()
        for path in rendered:
            safe_relative_path(path)
        directories = template_set.required_directories()

        existing = self.sink.list_dir(root)
        if existing and not self.overwrite:
            raise TargetExistsError(
                f"Directory {root} already exists and is not empty"
            )

        result = GenerationResult(root=root, directories=directories)

        self.sink.ensure_dir(root)
        for directory in directories:
            self.sink.ensure_dir(root / directory)

        for path, content in rendered.items():
            self.sink.write_file(root / path, content)
            result.files.append(GeneratedFile(path=path, content=content))
            logger.debug("Wrote %s", path)

        logger.info("Generated %d files in %s", len(result.files), root)
        return result


# ═══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════


def generate_project(
    config: ResolvedConfig,
    output_dir: str | Path,
    *,
    sink: FileSink | None = None,
    overwrite: bool = False,
    library: TemplateLibrary | None = None,
) -> GenerationResult:
    """
    Generate an MVC project for a resolved config.

    Args:
        config: Resolved configuration
        output_dir: Parent directory; the project goes in ``output_dir/project_name``
        sink: Filesystem collaborator, defaults to the local filesystem
        overwrite: Allow generating into a non-empty directory
        library: Optional custom template library

    Returns:
        GenerationResult with the written files
    """
    template_set = build(config, library)
    root = Path(output_dir) / config.project_name
    materializer = ProjectMaterializer(sink, overwrite=overwrite)
    return materializer.materialize(root, template_set)
