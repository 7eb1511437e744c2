"""
mvcgen - Express + MongoDB MVC project generator

Asks a short conditional questionnaire, composes the MongoDB connection
URI, and writes a ready-to-run project skeleton.
"""

__version__ = "1.0.0"

from mvcgen.config import DatabaseMode, ResolvedConfig, ViewEngine, compose_mongo_uri
from mvcgen.generator import ProjectMaterializer, generate_project
from mvcgen.questions import QUESTIONS, QuestionSpec
from mvcgen.resolver import ConfigResolver
from mvcgen.templates import TemplateSet, build

__all__ = [
    "DatabaseMode",
    "ResolvedConfig",
    "ViewEngine",
    "compose_mongo_uri",
    "ProjectMaterializer",
    "generate_project",
    "QUESTIONS",
    "QuestionSpec",
    "ConfigResolver",
    "TemplateSet",
    "build",
]
