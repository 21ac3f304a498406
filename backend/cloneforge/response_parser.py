"""
Recovers a file tree from free-form model output.

The only structure we rely on is the fenced block whose opening fence
names the file:

    ```src/app/page.tsx
    ...content...
    ```

This is a small line tokenizer rather than one regex so that every
malformed case has a defined outcome:
  - fence with a language tag or nothing after it -> block skipped whole
  - fence never closed (truncated output)         -> block dropped
  - empty path / whitespace-only content          -> block dropped
Nothing here raises on bad input. Paths are not validated or de-duplicated.
"""

import re

from cloneforge.frameworks import get_profile
from cloneforge.models import CodeGenerationResult, GeneratedFile

FENCE = "```"
_PATH_TOKEN_RE = re.compile(r"^[\w./-]+$")


def is_path_token(token: str) -> bool:
    """A relative-looking path whose last segment carries an extension."""
    if not token or not _PATH_TOKEN_RE.match(token):
        return False
    name = token.rstrip("/").rsplit("/", 1)[-1]
    if "." not in name:
        return False
    return bool(name.rsplit(".", 1)[1])


def _is_fence(line: str) -> bool:
    return line.lstrip().startswith(FENCE)


def parse_file_blocks(text: str) -> list[GeneratedFile]:
    if not text:
        return []

    lines = text.replace("\r\n", "\n").split("\n")
    files: list[GeneratedFile] = []
    i = 0
    n = len(lines)

    while i < n:
        line = lines[i]
        if not _is_fence(line):
            i += 1
            continue

        token = line.strip()[len(FENCE):].strip()
        # Find the closing fence for this block
        j = i + 1
        while j < n and not _is_fence(lines[j]):
            j += 1

        if j >= n:
            if is_path_token(token):
                print(f"  [parser] Dropping unterminated block for {token}")
            break

        if is_path_token(token):
            content = "\n".join(lines[i + 1:j])
            if content.strip():
                files.append(GeneratedFile(path=token, content=content, type="file"))
        i = j + 1

    return files


def build_instructions(framework) -> str:
    profile = get_profile(framework)
    if not profile.uses_model:
        return "Static HTML/CSS/JS website ready to deploy. Open index.html in a web browser."
    return (
        f"Generated {profile.display_name} application with full website content "
        "and styling. Follow the build commands to run the project."
    )


def parse_ai_response(text: str, framework) -> CodeGenerationResult:
    profile = get_profile(framework)
    return CodeGenerationResult(
        files=parse_file_blocks(text or ""),
        instructions=build_instructions(profile.tag),
        dependencies=list(profile.dependencies),
        build_commands=list(profile.build_commands),
    )
