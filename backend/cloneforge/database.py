"""
Supabase client for project and generated-version records.

Tables:
  projects            : one row per submitted URL, carries pipeline status
  generated_versions  : one row per (project, framework) generation attempt

The supabase client is synchronous, so every call runs in a worker thread.
"""

import asyncio

from cloneforge.config import get_settings
from cloneforge.exceptions import ConfigError
from cloneforge.progress import utc_now

PROJECT_SUMMARY_COLUMNS = (
    "id, name, original_url, status, detected_technology, created_at, updated_at"
)

_client = None


def _get_client():
    """Get a Supabase client. Raises if credentials are missing."""
    global _client
    if _client is None:
        settings = get_settings()
        url = settings.supabase_url
        key = settings.supabase_key
        if not url or not key:
            raise ConfigError("SUPABASE_URL and SUPABASE_KEY must be set in .env")
        from supabase import create_client
        _client = create_client(url, key)
    return _client


def is_configured() -> bool:
    settings = get_settings()
    return bool(settings.supabase_url and settings.supabase_key)


async def create_project(data: dict) -> dict:
    """Insert a project record. Returns the inserted row."""
    def _insert():
        now = utc_now().isoformat()
        row = {"created_at": now, "updated_at": now, **data}
        result = _get_client().table("projects").insert(row).execute()
        return result.data[0] if result.data else {}
    return await asyncio.to_thread(_insert)


async def update_project(project_id: str, data: dict) -> dict:
    """Update a project record, bumping updated_at."""
    def _update():
        row = {**data, "updated_at": utc_now().isoformat()}
        result = _get_client().table("projects").update(row).eq("id", project_id).execute()
        return result.data[0] if result.data else {}
    return await asyncio.to_thread(_update)


async def get_project(project_id: str) -> dict | None:
    """Get a single project with all of its generated versions, newest first."""
    def _get():
        result = (
            _get_client().table("projects")
            .select("*, generated_versions(*)")
            .eq("id", project_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        project = result.data[0]
        versions = project.get("generated_versions") or []
        versions.sort(key=lambda v: v.get("generated_at") or "", reverse=True)
        project["generated_versions"] = versions
        return project
    return await asyncio.to_thread(_get)


async def list_projects(limit: int = 20) -> list:
    """Recent projects with the framework/status of each version."""
    def _list():
        result = (
            _get_client().table("projects")
            .select(f"{PROJECT_SUMMARY_COLUMNS}, generated_versions(framework, status)")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return result.data
    return await asyncio.to_thread(_list)


async def delete_project(project_id: str) -> bool:
    """Delete a project and its versions. Returns False when nothing matched."""
    def _delete():
        client = _get_client()
        client.table("generated_versions").delete().eq("project_id", project_id).execute()
        result = client.table("projects").delete().eq("id", project_id).execute()
        return bool(result.data)
    return await asyncio.to_thread(_delete)


async def create_generated_version(data: dict) -> dict:
    """Insert a generated_versions row. Returns the inserted row."""
    def _insert():
        row = {"generated_at": utc_now().isoformat(), **data}
        result = _get_client().table("generated_versions").insert(row).execute()
        return result.data[0] if result.data else {}
    return await asyncio.to_thread(_insert)


async def get_generated_version(project_id: str, framework: str) -> dict | None:
    """Latest version of one framework for a project."""
    def _get():
        result = (
            _get_client().table("generated_versions")
            .select("*")
            .eq("project_id", project_id)
            .eq("framework", framework)
            .order("generated_at", desc=True)
            .limit(1)
            .execute()
        )
        return result.data[0] if result.data else None
    return await asyncio.to_thread(_get)
