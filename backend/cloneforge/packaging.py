"""ZIP export of a generated version, plus a README with run instructions."""

import io
import posixpath
import re
import zipfile


def is_safe_path(path: str) -> bool:
    """Relative, no '..' segments, no drive letters. Model output is untrusted."""
    if not path or path.startswith(("/", "\\")):
        return False
    normalized = path.replace("\\", "/")
    if re.match(r"^[A-Za-z]:", normalized):
        return False
    return ".." not in normalized.split("/")


def collect_archive_files(files: list[dict]) -> dict[str, str]:
    """
    Map archive path -> content. Directory entries and unsafe paths are
    skipped; for duplicate paths the later entry wins.
    """
    entries: dict[str, str] = {}
    for f in files:
        if f.get("type", "file") != "file":
            continue
        path = f.get("path", "")
        normalized = posixpath.normpath(path.replace("\\", "/")) if path else ""
        if not is_safe_path(path) or normalized == ".":
            print(f"  [packaging] Skipping unsafe path: {path!r}")
            continue
        entries[normalized] = f.get("content", "")
    return entries


def build_readme(project: dict, version: dict) -> str:
    framework = version.get("framework", "")
    lines = [
        f"# {project.get('name', 'Website Clone')} - {framework} Version",
        "",
        f"Generated from: {project.get('original_url', '')}",
        f"Framework: {framework}",
        f"Generated on: {version.get('generated_at', '')}",
        "",
        "## Instructions",
        "",
    ]
    if version.get("instructions"):
        lines += [version["instructions"], ""]

    build_commands = version.get("build_commands") or []
    if build_commands:
        lines += ["```bash", *build_commands, "```", ""]
    else:
        lines += ["No build step required.", ""]

    dependencies = version.get("dependencies") or []
    if dependencies:
        lines += ["## Dependencies", "", *[f"- {dep}" for dep in dependencies], ""]
    return "\n".join(lines).strip() + "\n"


def archive_filename(project: dict, framework: str) -> str:
    name = re.sub(r"[^a-zA-Z0-9]", "_", project.get("name") or "project")
    return f"{name}_{framework}.zip"


def build_project_archive(project: dict, version: dict) -> bytes:
    entries = collect_archive_files(version.get("files") or [])
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for path, content in entries.items():
            zf.writestr(path, content)
        if "README.md" not in entries:
            zf.writestr("README.md", build_readme(project, version))
    return buf.getvalue()
