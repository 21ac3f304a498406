"""Tests for ZIP export."""

import io
import zipfile

import pytest

from cloneforge.packaging import (
    archive_filename,
    build_project_archive,
    build_readme,
    collect_archive_files,
    is_safe_path,
)

PROJECT = {"id": "p1", "name": "Acme Clone!", "original_url": "https://acme.test"}


def _version(files, **extra):
    return {
        "framework": "REACT",
        "status": "COMPLETED",
        "files": files,
        "instructions": "Generated React application.",
        "dependencies": ["react", "react-dom"],
        "build_commands": ["npm install", "npm start"],
        "generated_at": "2026-01-01T12:00:00+00:00",
        **extra,
    }


def _names(payload):
    with zipfile.ZipFile(io.BytesIO(payload)) as zf:
        return sorted(zf.namelist()), {n: zf.read(n).decode() for n in zf.namelist()}


@pytest.mark.parametrize("path,safe", [
    ("index.html", True),
    ("src/App.jsx", True),
    ("./src/a.js", True),
    ("", False),
    ("/etc/passwd", False),
    ("\\windows\\x", False),
    ("C:/boot.ini", False),
    ("../evil.sh", False),
    ("src/../../evil.sh", False),
    ("src\\..\\evil.sh", False),
])
def test_is_safe_path(path, safe):
    assert is_safe_path(path) is safe


def test_collect_skips_unsafe_and_directories_last_duplicate_wins():
    files = [
        {"path": "a.txt", "content": "one", "type": "file"},
        {"path": "src", "content": "", "type": "directory"},
        {"path": "../evil.sh", "content": "rm -rf /", "type": "file"},
        {"path": "./a.txt", "content": "two", "type": "file"},
        {"path": ".", "content": "dot"},
    ]
    assert collect_archive_files(files) == {"a.txt": "two"}


def test_archive_contains_files_and_generated_readme():
    payload = build_project_archive(PROJECT, _version([
        {"path": "src/App.jsx", "content": "export default 1;", "type": "file"},
        {"path": "package.json", "content": "{}", "type": "file"},
    ]))
    names, contents = _names(payload)
    assert names == ["README.md", "package.json", "src/App.jsx"]
    assert contents["src/App.jsx"] == "export default 1;"
    readme = contents["README.md"]
    assert readme.startswith("# Acme Clone! - REACT Version")
    assert "Generated from: https://acme.test" in readme
    assert "npm install\nnpm start" in readme
    assert "- react-dom" in readme


def test_model_readme_is_kept():
    payload = build_project_archive(PROJECT, _version([
        {"path": "README.md", "content": "# Mine", "type": "file"},
    ]))
    names, contents = _names(payload)
    assert names == ["README.md"]
    assert contents["README.md"] == "# Mine"


def test_readme_for_static_target():
    readme = build_readme(PROJECT, _version([], framework="HTML_CSS_JS", build_commands=[], dependencies=[]))
    assert "No build step required." in readme
    assert "## Dependencies" not in readme


def test_archive_filename():
    assert archive_filename(PROJECT, "NEXTJS") == "Acme_Clone__NEXTJS.zip"
    assert archive_filename({}, "PHP") == "project_PHP.zip"


def test_clone_script_writes_safe_files(tmp_path):
    from clone_site import write_version

    version = _version([
        {"path": "src/App.jsx", "content": "export default 1;", "type": "file"},
        {"path": "../outside.txt", "content": "nope", "type": "file"},
    ])
    written = write_version(str(tmp_path / "REACT"), PROJECT, version)

    assert written == 2
    assert (tmp_path / "REACT" / "src" / "App.jsx").read_text() == "export default 1;"
    assert (tmp_path / "REACT" / "README.md").read_text().startswith("# Acme Clone!")
    assert not (tmp_path / "outside.txt").exists()
