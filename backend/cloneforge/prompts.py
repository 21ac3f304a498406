"""Prompt construction for the model-backed framework targets."""

import json

from cloneforge.frameworks import FrameworkProfile
from cloneforge.models import WebsiteAnalysis


OUTPUT_FORMAT_RULES = """Provide the complete file structure with actual code content for each file. Format each file as:
```path/to/filename.ext
[file content]
```
Put the relative file path (with extension) directly after the opening backticks, with no language tag and no extra text on that line."""


def build_user_prompt(analysis: WebsiteAnalysis, profile: FrameworkProfile) -> str:
    """Deterministic: the same analysis and profile always yield the same prompt."""
    tech = analysis.detected_technology
    meta_tags = dict(analysis.metadata.meta_tags)
    requirements = "\n".join(
        f"{i}. {req}" for i, req in enumerate(profile.requirements, start=1)
    )

    return f"""{profile.task}

Website URL: {analysis.url}
Title: {analysis.title}
Description: {analysis.description or ""}

HTML Structure:
{analysis.html}

CSS Styles:
{analysis.css}

JavaScript:
{analysis.javascript}

Detected Technology: {tech.framework} ({tech.language})
Libraries: {", ".join(analysis.metadata.libraries)}
Meta Tags: {json.dumps(meta_tags, indent=2)}

Generate a {profile.display_name} application with:
{requirements}

{OUTPUT_FORMAT_RULES}
"""


def build_prompt(analysis: WebsiteAnalysis, profile: FrameworkProfile) -> tuple[str, str]:
    """Returns (system_instruction, user_prompt)."""
    return profile.system_prompt, build_user_prompt(analysis, profile)
