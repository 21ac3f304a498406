"""
Code generator: turns a WebsiteAnalysis into a project skeleton for one
target framework.

Dispatch goes through a handler table keyed by Framework. Six targets
share the model path (prompt -> one model call -> fenced-block parse);
the static target skips the model and cleans the extracted content.
"""

import time

from cloneforge.config import get_settings
from cloneforge.frameworks import Framework, FrameworkProfile, coerce_framework, get_profile
from cloneforge.models import CodeGenerationResult, GeneratedFile, WebsiteAnalysis
from cloneforge.prompts import build_prompt
from cloneforge.response_parser import build_instructions, parse_ai_response
from cloneforge.sanitizer import cleanup_css, cleanup_html, cleanup_javascript


class CodeGenerator:
    def __init__(self, llm=None, settings=None):
        self._llm = llm
        self.settings = settings or get_settings()
        self._handlers = {tag: self._generate_with_model for tag in Framework}
        self._handlers[Framework.HTML_CSS_JS] = self._generate_static

    def _get_llm(self):
        if self._llm is None:
            from cloneforge.llm import create_llm_client
            self._llm = create_llm_client(self.settings)
        return self._llm

    def register(self, framework: Framework, handler):
        """Swap in a handler for one tag: async handler(analysis, profile)."""
        self._handlers[framework] = handler

    async def generate_code(self, analysis: WebsiteAnalysis, target_framework) -> CodeGenerationResult:
        framework = coerce_framework(target_framework)
        profile = get_profile(framework)
        return await self._handlers[framework](analysis, profile)

    async def _generate_with_model(self, analysis: WebsiteAnalysis,
                                   profile: FrameworkProfile) -> CodeGenerationResult:
        system, prompt = build_prompt(analysis, profile)
        llm = self._get_llm()
        t0 = time.time()
        print(f"  [generator] {profile.tag.value}: prompt {len(prompt)} chars, calling model...")

        raw = await llm.generate(
            prompt,
            system=system,
            temperature=self.settings.generation_temperature,
            max_output_tokens=self.settings.max_output_tokens,
        )

        result = parse_ai_response(raw, profile.tag)
        print(f"  [generator] {profile.tag.value}: {len(result.files)} files "
              f"in {time.time() - t0:.1f}s")
        if not result.files:
            print(f"  [generator] WARNING: no fenced files in {len(raw or '')} chars of "
                  f"{profile.tag.value} output")
        return result

    async def _generate_static(self, analysis: WebsiteAnalysis,
                               profile: FrameworkProfile) -> CodeGenerationResult:
        files = [
            GeneratedFile(path="index.html", content=cleanup_html(analysis.html)),
            GeneratedFile(path="style.css", content=cleanup_css(analysis.css)),
            GeneratedFile(path="script.js", content=cleanup_javascript(analysis.javascript)),
        ]
        return CodeGenerationResult(
            files=files,
            instructions=build_instructions(profile.tag),
            dependencies=[],
            build_commands=[],
        )


_generator = None


def get_code_generator() -> CodeGenerator:
    global _generator
    if _generator is None:
        _generator = CodeGenerator()
    return _generator
