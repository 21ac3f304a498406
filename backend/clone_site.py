"""
Local script: clone one website to disk without the API or the database.

    python3 clone_site.py https://example.com
    python3 clone_site.py https://example.com NEXTJS VUE --out ./clones

Each framework lands in <out>/<FRAMEWORK>/ with a README.md.
"""

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from cloneforge.analyzer import WebsiteAnalyzer
from cloneforge.config import get_settings
from cloneforge.frameworks import coerce_framework
from cloneforge.generator import CodeGenerator
from cloneforge.packaging import build_readme, collect_archive_files


def write_version(out_dir: str, project: dict, version: dict) -> int:
    entries = collect_archive_files(version["files"])
    if "README.md" not in entries:
        entries["README.md"] = build_readme(project, version)
    for path, content in entries.items():
        target = os.path.join(out_dir, path)
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)
    return len(entries)


async def clone(url: str, frameworks: list, out: str) -> int:
    analyzer = WebsiteAnalyzer()
    generator = CodeGenerator()
    failures = 0
    try:
        analysis = await analyzer.analyze_website(url)
        print(f"Detected: {analysis.detected_technology.framework} ({analysis.title})")
        project = {"name": analysis.title or "Website Clone", "original_url": url}

        for framework in frameworks:
            try:
                result = await generator.generate_code(analysis, framework)
            except Exception as e:
                print(f"  {framework.value}: FAILED ({e})")
                failures += 1
                continue
            version = {
                "framework": framework.value,
                "files": result.files_as_dicts(),
                "instructions": result.instructions,
                "dependencies": result.dependencies,
                "build_commands": result.build_commands,
            }
            written = write_version(os.path.join(out, framework.value), project, version)
            print(f"  {framework.value}: {written} files -> {os.path.join(out, framework.value)}")
    finally:
        await analyzer.close_browser()
    return failures


def main():
    parser = argparse.ArgumentParser(description="Clone a website into framework projects")
    parser.add_argument("url")
    parser.add_argument("frameworks", nargs="*", help="e.g. NEXTJS REACT VUE")
    parser.add_argument("--out", default="clones")
    args = parser.parse_args()

    try:
        frameworks = [coerce_framework(f) for f in (args.frameworks or get_settings().default_frameworks)]
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(2)

    failures = asyncio.run(clone(args.url, frameworks, args.out))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
