"""
commands/create.py — Scaffold a new Cordova project or register an existing one.

/create <Name> [id] [title]
  - runs `cordova create` under BASE_PROJECTS_DIR
  - picks Name2, Name3, … if the directory is already taken
  - registers the project as a workspace keyed by its slug

/open <path> [key]
  - checks the directory holds a config.xml, then registers it
"""

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import config
from cordova_project import CordovaProject
from cordova_runner import CordovaError, CordovaRunner
from commands.lifecycle import extract_error
from workspaces import WorkspaceRegistry


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


@dataclass
class CreateResult:
    message: str
    slug: str | None = None
    success: bool = False


def _unique_name(app_name: str) -> str:
    """If app_name dir already exists, append 2, 3, … until unique."""
    base_dir = Path(config.BASE_PROJECTS_DIR)
    if not (base_dir / app_name).exists():
        return app_name
    for i in range(2, 100):
        candidate = f"{app_name}{i}"
        if not (base_dir / candidate).exists():
            return candidate
    return f"{app_name}{int(time.time())}"


def _default_id(slug: str) -> Optional[str]:
    if not config.CORDOVA_ID_PREFIX:
        return None
    return f"{config.CORDOVA_ID_PREFIX}.{slug}"


async def create_cordova_project(
    tokens: list[str],
    registry: WorkspaceRegistry,
    runner: Optional[CordovaRunner] = None,
) -> CreateResult:
    if not tokens:
        return CreateResult(message="Usage: `/create <AppName> [id] [title]`")

    app_name = _unique_name(tokens[0])
    slug = slugify(app_name)
    if not slug:
        return CreateResult(message=f"❌ `{tokens[0]}` has no usable characters for a workspace name.")
    if registry.exists(slug):
        return CreateResult(message=f"❌ Workspace `{slug}` already exists.")

    app_id = tokens[1] if len(tokens) > 1 else _default_id(slug)
    title = " ".join(tokens[2:]) or None

    Path(config.BASE_PROJECTS_DIR).mkdir(parents=True, exist_ok=True)
    try:
        project = await CordovaProject.create(
            app_name, app_id, title, cwd=config.BASE_PROJECTS_DIR, runner=runner,
        )
    except CordovaError as e:
        detail = getattr(e, "output", "") or ""
        msg = f"❌ Could not create **{app_name}**: {e}"
        if detail.strip():
            msg += f"\n```\n{extract_error(detail, max_lines=20)}\n```"
        return CreateResult(message=msg)

    registry.add(slug, project.path)
    print(f"[create] {app_name} → {project.path} (workspace={slug})")
    return CreateResult(
        message=(
            f"✅ Created **{app_name}** → `{project.path}`\n"
            f"Workspace: `{slug}` · add a platform with `/platform add android`"
        ),
        slug=slug,
        success=True,
    )


async def open_cordova_project(
    path: Optional[str],
    key: Optional[str],
    registry: WorkspaceRegistry,
) -> CreateResult:
    if not path:
        return CreateResult(message="Usage: `/open <path> [key]`")

    directory = Path(path).expanduser().resolve()
    try:
        project = await CordovaProject.open(directory)
    except CordovaError as e:
        return CreateResult(message=f"❌ {e}")

    slug = slugify(key or directory.name)
    if not slug:
        return CreateResult(message="❌ Could not derive a workspace name; pass one: `/open <path> <key>`")
    existing = registry.get_path(slug)
    if existing and existing != project.path:
        return CreateResult(message=f"❌ Workspace `{slug}` already points at `{existing}`.")

    registry.add(slug, project.path)
    return CreateResult(
        message=f"✅ Opened **{slug}** → `{project.path}`",
        slug=slug,
        success=True,
    )
