"""
mvcgen Templates - maps a ResolvedConfig to the files of an MVC project

Static boilerplate and Jinja2 templates live in the package ``skeleton``
directory. ``build`` is pure: the same config always yields the same paths
and byte-identical content.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from mvcgen.config import ResolvedConfig, ViewEngine

Content = Union[str, dict[str, Any], Callable[[ResolvedConfig], str]]


class UnsafePathError(ValueError):
    """A template path that would escape the project root."""


def safe_relative_path(path: str) -> PurePosixPath:
    """Validate a posix-style relative path with no ``..`` segments."""
    if not path or "\\" in path:
        raise UnsafePathError(f"Invalid template path: {path!r}")
    posix = PurePosixPath(path)
    if not posix.parts:
        raise UnsafePathError(f"Invalid template path: {path!r}")
    if posix.is_absolute() or ".." in posix.parts or (posix.parts and ":" in posix.parts[0]):
        raise UnsafePathError(f"Template path escapes project root: {path!r}")
    return posix


# ═══════════════════════════════════════════════════════════════════════════
# TEMPLATE ENTRIES
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TemplateEntry:
    """One file of the generated project."""

    path: str  # Relative, posix-style
    content: Content

    def __post_init__(self) -> None:
        # "./a/b" and "a//b" are stored as "a/b"
        object.__setattr__(self, "path", str(safe_relative_path(self.path)))

    def render(self, config: ResolvedConfig) -> str:
        """Resolve literal, structured, or generated content to text."""
        content = self.content
        if isinstance(content, str):
            return content
        if isinstance(content, dict):
            return json.dumps(content, indent=2) + "\n"
        return content(config)


@dataclass(frozen=True)
class TemplateSet:
    """Directories and files resolved against one config."""

    config: ResolvedConfig
    directories: tuple[str, ...]
    entries: tuple[TemplateEntry, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for entry in self.entries:
            path = str(safe_relative_path(entry.path))
            if path in seen:
                raise ValueError(f"Duplicate template path: {path}")
            seen.add(path)
        for directory in self.directories:
            safe_relative_path(directory)

    def paths(self) -> list[str]:
        return [entry.path for entry in self.entries]

    def required_directories(self) -> list[str]:
        """Explicit directories plus every file's parents, parents first."""
        ordered: dict[str, None] = {}
        candidates = list(self.directories)
        candidates += [str(PurePosixPath(entry.path).parent) for entry in self.entries]
        for directory in candidates:
            parts = PurePosixPath(directory).parts
            for depth in range(1, len(parts) + 1):
                ordered.setdefault("/".join(parts[:depth]), None)
        return sorted(ordered, key=lambda d: d.count("/"))

    def render(self) -> dict[str, str]:
        """Resolve every entry's content, keyed by path."""
        return {entry.path: entry.render(self.config) for entry in self.entries}


# ═══════════════════════════════════════════════════════════════════════════
# TEMPLATE LIBRARY
# ═══════════════════════════════════════════════════════════════════════════


def create_jinja_env(templates_dir: Path) -> Environment:
    """Create Jinja2 environment for the skeleton templates."""

    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


class TemplateLibrary:
    """Looks up skeleton boilerplate: static text or rendered templates."""

    def __init__(self, templates_dir: Path | None = None):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "skeleton"

        self.templates_dir = templates_dir
        self.env = create_jinja_env(templates_dir)

    def text(self, name: str) -> str:
        return (self.templates_dir / name).read_text(encoding="utf-8")

    def render(self, name: str, config: ResolvedConfig) -> str:
        template = self.env.get_template(name)
        return template.render(config=config)

    def generator(self, name: str) -> Callable[[ResolvedConfig], str]:
        """Content function rendering ``name`` with the config."""
        return partial(self.render, name)


# ═══════════════════════════════════════════════════════════════════════════
# PROJECT LAYOUT
# ═══════════════════════════════════════════════════════════════════════════


DIRECTORIES: tuple[str, ...] = (
    "controllers",
    "models",
    "views",
    "views/layouts",
    "views/partials",
    "routes",
    "config",
    "middlewares",
    "public",
    "public/css",
    "public/js",
    "public/images",
    "utils",
    "services",
)

# Output path -> skeleton file copied verbatim
STATIC_FILES: tuple[tuple[str, str], ...] = (
    ("routes/index.js", "routes/index.js"),
    ("routes/users.js", "routes/users.js"),
    ("controllers/homeController.js", "controllers/homeController.js"),
    ("controllers/userController.js", "controllers/userController.js"),
    ("models/User.js", "models/User.js"),
    ("middlewares/auth.js", "middlewares/auth.js"),
    ("middlewares/validators.js", "middlewares/validators.js"),
    ("config/database.js", "config/database.js"),
    (".gitignore", "gitignore"),
    ("public/css/style.css", "public/css/style.css"),
)

# Output path -> Jinja2 template rendered with the config
RENDERED_FILES: tuple[tuple[str, str], ...] = (
    ("app.js", "app.js.j2"),
    (".env", "env.j2"),
)

# Only EJS gets starter views
EJS_VIEWS: tuple[str, ...] = (
    "views/layouts/main.ejs",
    "views/partials/header.ejs",
    "views/partials/footer.ejs",
    "views/index.ejs",
)

VIEW_ENGINE_VERSIONS: dict[ViewEngine, str] = {
    ViewEngine.EJS: "^3.1.9",
    ViewEngine.PUG: "^3.0.2",
    ViewEngine.HANDLEBARS: "^4.7.8",
}


def package_manifest(config: ResolvedConfig) -> dict[str, Any]:
    """package.json for the generated app."""
    engine = config.view_engine
    dependencies = {
        "express": "^4.18.2",
        "mongoose": "^8.0.0",
        "dotenv": "^16.3.1",
        engine.value: VIEW_ENGINE_VERSIONS[engine],
        "morgan": "^1.10.0",
        "cors": "^2.8.5",
        "helmet": "^7.1.0",
        "compression": "^1.7.4",
        "express-rate-limit": "^7.1.5",
        "express-validator": "^7.0.1",
        "jsonwebtoken": "^9.0.2",
        "bcryptjs": "^2.4.3",
    }
    return {
        "name": config.project_name,
        "version": "1.0.0",
        "description": "MVC Node.js application",
        "main": "app.js",
        "scripts": {
            "start": "node app.js",
            "dev": "nodemon app.js",
        },
        "dependencies": dependencies,
        "devDependencies": {
            "nodemon": "^3.0.1",
        },
    }


def build(config: ResolvedConfig, library: TemplateLibrary | None = None) -> TemplateSet:
    """Resolve the project's directories and files for ``config``."""
    library = library or TemplateLibrary()

    entries = [TemplateEntry("package.json", package_manifest(config))]
    entries += [
        TemplateEntry(path, library.generator(name)) for path, name in RENDERED_FILES
    ]
    entries += [
        TemplateEntry(path, library.text(name)) for path, name in STATIC_FILES
    ]

    if config.view_engine == ViewEngine.EJS:
        entries += [TemplateEntry(path, library.text(path)) for path in EJS_VIEWS]

    return TemplateSet(
        config=config,
        directories=DIRECTORIES,
        entries=tuple(entries),
    )
