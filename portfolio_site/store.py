"""
JSON content store: data/projects.json (list of projects) and data/site.json
(free-form site copy). Documents are read wholesale and written back whole;
last writer wins.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from .config import Workspace
from .models import Project, DuplicateSlugError

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# JSON persistence
# ---------------------------------------------------------------------------

def read_json(path: Path, fallback):
    if not path.exists():
        return fallback
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        log.warning(f"Could not read {path}: {e}")
        return fallback


def write_json(path: Path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def load_projects(ws: Workspace) -> list[Project]:
    raw = read_json(ws.projects_path, [])
    if not isinstance(raw, list):
        log.warning(f"{ws.projects_path} is not a JSON array, ignoring")
        return []
    return [Project.from_dict(p) for p in raw if isinstance(p, dict)]


def save_projects(ws: Workspace, projects: list[Project]):
    write_json(ws.projects_path, [p.to_dict() for p in projects])


def load_site(ws: Workspace) -> dict:
    site = read_json(ws.site_path, {})
    return site if isinstance(site, dict) else {}


def save_site(ws: Workspace, site: dict):
    write_json(ws.site_path, site)


# ---------------------------------------------------------------------------
# Slugs and project list operations
# ---------------------------------------------------------------------------

def slugify(text) -> str:
    s = str(text or "").lower().strip()
    s = re.sub(r"[^a-z0-9\s-]", "", s)
    s = re.sub(r"\s+", "-", s)
    return re.sub(r"-+", "-", s)


def find_project(projects: list[Project], slug: str) -> Optional[Project]:
    return next((p for p in projects if p.slug == slug), None)


def add_project(projects: list[Project], project: Project) -> list[Project]:
    if find_project(projects, project.slug):
        raise DuplicateSlugError(project.slug)
    projects.append(project)
    return projects


def replace_project(projects: list[Project], old_slug: str, project: Project) -> list[Project]:
    """Swap the entry keyed by old_slug for project, guarding slug renames."""
    if project.slug != old_slug and find_project(projects, project.slug):
        raise DuplicateSlugError(project.slug)
    for i, p in enumerate(projects):
        if p.slug == old_slug:
            projects[i] = project
            return projects
    raise KeyError(old_slug)


def delete_project(projects: list[Project], slug: str) -> list[Project]:
    """Drop the JSON entry only; poster and gallery files are left alone."""
    return [p for p in projects if p.slug != slug]


def merge_by_title(existing: list[Project], incoming: list[Project]) -> list[Project]:
    """Concatenate, dropping entries whose lower-cased title or slug was already seen."""
    merged = []
    titles = set()
    slugs = set()
    for project in list(existing) + list(incoming):
        key = (project.title or "").lower()
        if key in titles or (project.slug and project.slug in slugs):
            continue
        titles.add(key)
        slugs.add(project.slug)
        merged.append(project)
    return merged


def year_sort_key(project: Project) -> int:
    """Newest first when used with reverse=True; unparseable years sort last."""
    m = re.match(r"\s*(\d+)", str(project.year or ""))
    return int(m.group(1)) if m else 0
