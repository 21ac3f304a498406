from contextlib import asynccontextmanager
from datetime import date
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from cloneforge import __version__
from cloneforge.progress import progress_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown: make sure no Chromium outlives the server
    try:
        from cloneforge.analyzer import website_analyzer
        await website_analyzer.close_browser()
    except Exception as e:
        print(f"[shutdown] Browser close failed: {e}")


app = FastAPI(title="CloneForge API", lifespan=lifespan)
# One progress store per process, shared by pipelines and pollers
app.state.progress = progress_store

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class CreateProjectRequest(BaseModel):
    url: str
    name: str | None = None


def normalize_url(raw: str) -> str:
    """Prefix https:// when no scheme is given; reject anything without a host."""
    url = (raw or "").strip()
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or " " in parsed.netloc:
        raise HTTPException(status_code=400, detail="Invalid URL format")
    return url


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/")
def root():
    return {"message": "CloneForge backend is running"}


@app.get("/health")
async def health():
    from cloneforge.config import get_settings
    from cloneforge.database import is_configured

    settings = get_settings()
    ai_key = settings.gemini_api_key if settings.llm_provider == "gemini" else settings.anthropic_api_key
    return {
        "status": "ok",
        "version": __version__,
        "services": {
            "database": "configured" if is_configured() else "not_configured",
            "ai": "configured" if ai_key else "not_configured",
        },
    }


@app.post("/projects", status_code=201)
async def create_project_endpoint(body: CreateProjectRequest, request: Request):
    """Create a project and start analysis + generation in the background."""
    url = normalize_url(body.url)
    name = (body.name or "").strip() or f"Website Clone - {date.today().isoformat()}"

    try:
        from cloneforge.database import create_project
        project = await create_project({
            "name": name,
            "original_url": url,
            "status": "PENDING",
        })
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Could not create project: {e}")

    if not project.get("id"):
        raise HTTPException(status_code=500, detail="Could not create project")

    from cloneforge.pipeline import ProjectPipeline, schedule_project_pipeline
    schedule_project_pipeline(
        project["id"], url,
        pipeline=ProjectPipeline(progress=request.app.state.progress),
    )
    return {"project": project}


@app.get("/projects")
async def list_projects_endpoint(limit: int = 20):
    try:
        from cloneforge.database import list_projects
        projects = await list_projects(limit=min(limit, 50))
        return {"projects": projects}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/projects/{project_id}")
async def get_project_endpoint(project_id: str):
    try:
        from cloneforge.database import get_project
        project = await get_project(project_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"project": project}


@app.get("/projects/{project_id}/progress")
async def get_project_progress(project_id: str, request: Request):
    """Live progress when fresh, otherwise a snapshot derived from the stored status."""
    from cloneforge.progress import resolve_progress

    try:
        from cloneforge.database import get_project
        project = await get_project(project_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    live = request.app.state.progress.get(project_id)
    return {
        "project": {
            "id": project["id"],
            "status": project.get("status"),
            "name": project.get("name"),
            "original_url": project.get("original_url"),
            "detected_technology": project.get("detected_technology"),
            "created_at": project.get("created_at"),
            "updated_at": project.get("updated_at"),
            "screenshots": project.get("screenshots") or [],
            "generated_versions": [
                {
                    "id": v.get("id"),
                    "framework": v.get("framework"),
                    "status": v.get("status"),
                    "generated_at": v.get("generated_at"),
                }
                for v in project.get("generated_versions") or []
            ],
        },
        "progress": resolve_progress(live, project),
    }


@app.delete("/projects/{project_id}")
async def delete_project_endpoint(project_id: str, request: Request):
    try:
        from cloneforge.database import delete_project
        deleted = await delete_project(project_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    request.app.state.progress.discard(project_id)
    return {"status": "deleted"}


@app.get("/projects/{project_id}/download/{framework}")
async def download_project(project_id: str, framework: str):
    """ZIP of one completed generated version."""
    from cloneforge.exceptions import UnsupportedFrameworkError
    from cloneforge.frameworks import coerce_framework
    from cloneforge.packaging import archive_filename, build_project_archive

    try:
        tag = coerce_framework(framework)
    except UnsupportedFrameworkError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        from cloneforge.database import get_generated_version, get_project
        project = await get_project(project_id)
        version = await get_generated_version(project_id, tag.value) if project else None
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    if not version or version.get("status") != "COMPLETED":
        raise HTTPException(status_code=404, detail="Generated version not available")

    payload = build_project_archive(project, version)
    filename = archive_filename(project, tag.value)
    return Response(
        content=payload,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
