"""Shared fixtures and fakes for cloneforge tests."""
import asyncio

import pytest

from cloneforge.models import SiteMetadata, TechnologyStack, WebsiteAnalysis


def run(coro):
    return asyncio.run(coro)


SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Acme</title>
  <meta name="description" content="Acme makes anvils">
  <meta property="og:title" content="Acme Anvils">
  <link href="https://fonts.googleapis.com/css2?family=Open+Sans:wght@400&display=swap" rel="stylesheet">
  <style>body { color: #111; }</style>
</head>
<body>
  <!-- hero -->
  <img src="/img/hero.png">
  <a href="/about">About</a>
  <script>console.log("hi"); // trace</script>
</body>
</html>"""


class FakeLLM:
    """Records calls; returns canned text or raises per call."""

    def __init__(self, responses=None, default=""):
        self.responses = list(responses or [])
        self.default = default
        self.calls = []

    async def generate(self, prompt, *, system="", temperature=0.3, max_output_tokens=8192):
        self.calls.append({
            "prompt": prompt,
            "system": system,
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
        })
        if self.responses:
            item = self.responses.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        return self.default


class FakeStore:
    """In-memory stand-in for cloneforge.database."""

    def __init__(self, fail_updates=False):
        self.project_updates = []
        self.versions = []
        self.fail_updates = fail_updates

    async def update_project(self, project_id, data):
        if self.fail_updates:
            raise RuntimeError("db down")
        self.project_updates.append((project_id, dict(data)))
        return {"id": project_id, **data}

    async def create_generated_version(self, data):
        self.versions.append(dict(data))
        return data

    @property
    def statuses(self):
        return [d["status"] for _, d in self.project_updates if "status" in d]


@pytest.fixture
def sample_analysis():
    return WebsiteAnalysis(
        url="https://acme.test",
        title="Acme",
        description="Acme makes anvils",
        html=SAMPLE_HTML,
        css="body { color: #111; }\n/* Computed Styles */\n{}",
        javascript='console.log("hi"); // trace',
        images=("/img/hero.png",),
        links=("/about",),
        screenshots=("data:image/png;base64,AAAA",),
        detected_technology=TechnologyStack(),
        metadata=SiteMetadata(
            fonts=("Open Sans",),
            libraries=("React",),
            meta_tags=(("description", "Acme makes anvils"), ("og:title", "Acme Anvils")),
        ),
    )
