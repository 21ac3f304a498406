"""
Project pipeline: one background run per submitted URL.

States:
  PENDING -> ANALYZING -> ANALYZED -> GENERATING -> COMPLETED
  (FAILED from ANALYZING or GENERATING on any unrecovered error)

Steps:
  [A] analyze the website (shared browser, one page)
  [B] persist extracted content
  [C] generate each target framework in order, one at a time;
      a failing framework is recorded FAILED and the run continues
  [D] mark COMPLETED
  finally: release the shared browser
"""

import asyncio
import json
import time

from cloneforge.config import get_settings
from cloneforge.frameworks import coerce_framework
from cloneforge.models import ProjectStatus, VersionStatus, WebsiteAnalysis
from cloneforge.progress import ProgressStore, progress_store as default_progress_store


def build_size(files: list[dict]) -> int:
    """UTF-8 byte length of the serialized file list."""
    return len(json.dumps(files).encode("utf-8"))


def analysis_to_project_fields(analysis: WebsiteAnalysis, limit: int) -> dict:
    return {
        "status": ProjectStatus.ANALYZED.value,
        "detected_technology": analysis.detected_technology.framework,
        "technology_stack": analysis.detected_technology.to_dict(),
        "site_metadata": analysis.metadata.to_dict(),
        "extracted_html": analysis.html[:limit],
        "extracted_css": analysis.css[:limit],
        "extracted_js": analysis.javascript[:limit],
        "screenshots": list(analysis.screenshots),
    }


class ProjectPipeline:
    def __init__(self, analyzer=None, generator=None, store=None,
                 progress: ProgressStore | None = None,
                 frameworks=None, settings=None):
        self.settings = settings or get_settings()
        if analyzer is None:
            from cloneforge.analyzer import website_analyzer
            analyzer = website_analyzer
        if generator is None:
            from cloneforge.generator import get_code_generator
            generator = get_code_generator()
        if store is None:
            from cloneforge import database
            store = database
        self.analyzer = analyzer
        self.generator = generator
        self.store = store
        self.progress = progress if progress is not None else default_progress_store
        self.frameworks = [
            coerce_framework(fw) for fw in (frameworks or self.settings.default_frameworks)
        ]

    async def run(self, project_id: str, url: str):
        start = time.time()

        def _log(msg):
            print(f"  [pipeline {project_id[:8]} {time.time() - start:.1f}s] {msg}")

        _log(f"=== START: {url} ===")
        try:
            # [A] analyze
            self.progress.update(
                project_id,
                status=ProjectStatus.ANALYZING.value,
                step="Starting Analysis",
                progress=15,
                message="Initializing website analysis...",
            )
            await self.store.update_project(project_id, {"status": ProjectStatus.ANALYZING.value})

            self.progress.update(
                project_id,
                step="Analyzing Website Structure",
                progress=25,
                message="Extracting HTML, CSS, and JavaScript...",
            )
            analysis = await self.analyzer.analyze_website(url)

            # [B] persist
            self.progress.update(
                project_id,
                step="Analysis Complete",
                progress=50,
                message="Website analysis completed successfully!",
            )
            await self.store.update_project(
                project_id,
                analysis_to_project_fields(analysis, self.settings.persisted_field_limit),
            )
            _log(f"Analyzed as {analysis.detected_technology.framework}")

            # [C] generate
            self.progress.update(
                project_id,
                status=ProjectStatus.GENERATING.value,
                step="Starting Code Generation",
                progress=60,
                message=f"Generating code for {len(self.frameworks)} frameworks...",
            )
            for i, framework in enumerate(self.frameworks):
                await self._generate_one(project_id, analysis, framework, i, _log)

            # [D] done
            self.progress.update(
                project_id,
                status=ProjectStatus.COMPLETED.value,
                step="All Done!",
                progress=100,
                message="Website successfully cloned and ready for download!",
            )
            await self.store.update_project(project_id, {"status": ProjectStatus.COMPLETED.value})
            _log("=== COMPLETED ===")

        except Exception as e:
            _log(f"FAILED: {e}")
            try:
                await self.store.update_project(project_id, {"status": ProjectStatus.FAILED.value})
            except Exception as db_err:
                _log(f"Could not persist FAILED status: {db_err}")
        finally:
            try:
                await self.analyzer.close_browser()
            except Exception as e:
                _log(f"Browser close failed: {e}")

    async def _generate_one(self, project_id, analysis, framework, index, _log):
        await self.store.update_project(project_id, {"status": ProjectStatus.GENERATING.value})
        self.progress.update(
            project_id,
            step=f"Generating {framework.value} Code",
            progress=60 + (index + 1) * 10,
            message=f"Creating {framework.value} version of the website...",
        )

        try:
            result = await self.generator.generate_code(analysis, framework)
        except Exception as e:
            _log(f"{framework.value} generation failed: {e}")
            await self.store.create_generated_version({
                "project_id": project_id,
                "framework": framework.value,
                "status": VersionStatus.FAILED.value,
                "files": [],
                "build_size": 0,
            })
            return

        files = result.files_as_dicts()
        await self.store.create_generated_version({
            "project_id": project_id,
            "framework": framework.value,
            "status": VersionStatus.COMPLETED.value,
            "files": files,
            "build_size": build_size(files),
            "instructions": result.instructions,
            "dependencies": result.dependencies,
            "build_commands": result.build_commands,
        })
        _log(f"{framework.value}: {len(files)} files stored")


# Strong refs so scheduled runs aren't garbage-collected mid-flight
_running_tasks: set = set()


def schedule_project_pipeline(project_id: str, url: str, delay: float | None = None,
                              pipeline: ProjectPipeline | None = None) -> asyncio.Task:
    """
    Start a pipeline run in the background after a short delay so the
    request that created the project can respond first.
    """
    if delay is None:
        delay = get_settings().pipeline_start_delay
    pipeline = pipeline or ProjectPipeline()

    async def _delayed():
        if delay:
            await asyncio.sleep(delay)
        await pipeline.run(project_id, url)

    task = asyncio.create_task(_delayed())
    _running_tasks.add(task)
    task.add_done_callback(_running_tasks.discard)
    return task
