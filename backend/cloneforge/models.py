"""
Core records shared by the analyzer, the code generator and the pipeline.

WebsiteAnalysis is built once per URL and handed read-only to every
generator call, so it and its parts are frozen and use tuples.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


DEFAULT_FRAMEWORK_LABEL = "HTML/CSS/JS"


class ProjectStatus(str, Enum):
    PENDING = "PENDING"
    ANALYZING = "ANALYZING"
    ANALYZED = "ANALYZED"
    GENERATING = "GENERATING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class VersionStatus(str, Enum):
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class TechnologyStack:
    framework: str = DEFAULT_FRAMEWORK_LABEL
    language: str = "JavaScript"
    cms: Optional[str] = None
    build_tool: Optional[str] = None
    server: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SiteMetadata:
    fonts: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    frameworks: tuple[str, ...] = ()
    libraries: tuple[str, ...] = ()
    meta_tags: tuple[tuple[str, str], ...] = ()

    def to_dict(self) -> dict:
        return {
            "fonts": list(self.fonts),
            "colors": list(self.colors),
            "frameworks": list(self.frameworks),
            "libraries": list(self.libraries),
            "meta_tags": dict(self.meta_tags),
        }


@dataclass(frozen=True)
class WebsiteAnalysis:
    url: str
    title: str
    html: str
    css: str
    javascript: str
    description: Optional[str] = None
    images: tuple[str, ...] = ()
    links: tuple[str, ...] = ()
    screenshots: tuple[str, ...] = ()
    detected_technology: TechnologyStack = field(default_factory=TechnologyStack)
    metadata: SiteMetadata = field(default_factory=SiteMetadata)


@dataclass
class GeneratedFile:
    path: str
    content: str
    type: str = "file"  # "file" or "directory"

    def to_dict(self) -> dict:
        return {"path": self.path, "content": self.content, "type": self.type}


@dataclass
class CodeGenerationResult:
    files: list[GeneratedFile] = field(default_factory=list)
    instructions: str = ""
    dependencies: list[str] = field(default_factory=list)
    build_commands: list[str] = field(default_factory=list)

    def files_as_dicts(self) -> list[dict]:
        return [f.to_dict() for f in self.files]
