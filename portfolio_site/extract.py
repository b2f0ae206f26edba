#!/usr/bin/env python3
"""
Rebuild data/projects.json and data/site.json from an exported static copy of
the site in docs/ (docs/projects/index.html, docs/projects/<slug>.html,
docs/about.html, docs/contact.html, docs/index.html).

The projects index embeds a JSON-like seed blob; when that cannot be parsed
every project page is scraped for the minimal fields instead.

Usage:
    portfolio-extract
"""

import json
import logging
import re
import sys
from typing import Optional

from bs4 import BeautifulSoup

from . import store
from .config import Workspace, setup_logging
from .models import Project

log = logging.getLogger(__name__)

SOCIAL_PROVIDERS = ("linkedin", "instagram", "imdb", "crew-united", "crewunited")
POSTER_SELECTOR = "img.w-full.h-full.object-cover"
META_SELECTOR = "div.text-muted"
CONTENT_SELECTOR = "div.mt-3.text-sm.whitespace-pre-wrap"
ABOUT_SELECTOR = "div.prose.prose-invert.max-w-none.whitespace-pre-wrap"
INTRO_SELECTOR = "p.p-responsive.text-muted.whitespace-pre-line"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def parse_seed_blob(html: str) -> Optional[list[dict]]:
    """Pull the `"projects":[...]` array out of the exported index page."""
    start = html.find('"projects":[')
    if start == -1:
        return None
    chunk = html[start:]
    end = chunk.find("]}]")
    if end == -1:
        return None
    json_like = "{" + chunk[:end + 1] + "}"
    normalized = re.sub(r'"?\$undefined"?', "null", json_like)
    normalized = re.sub(r",(\s*[}\]])", r"\1", normalized)
    try:
        parsed = json.loads(normalized)
    except json.JSONDecodeError as e:
        log.warning(f"  Seed blob is not valid JSON: {e}")
        return None
    return [
        {
            "title": p.get("title") or "",
            "slug": p.get("slug") or "",
            "role": p.get("role") or "",
            "year": p.get("year") or "",
            "poster": p.get("poster") or None,
            "videoUrl": p.get("videoUrl") or None,
            "images": p.get("images") if isinstance(p.get("images"), list) else [],
            "content": p.get("content") or "",
            "featured": bool(p.get("featured")),
        }
        for p in parsed.get("projects", [])
    ]


def extract_from_projects_index(ws: Workspace) -> Optional[list[Project]]:
    index_path = ws.docs_dir / "projects" / "index.html"
    if not index_path.exists():
        return None
    seed = parse_seed_blob(index_path.read_text(encoding="utf-8"))
    if seed is None:
        return None
    return [Project.from_dict(p) for p in seed]


def split_meta(meta: str) -> tuple[str, str]:
    """'Sound Designer • 2021' -> (role, year); anything else is all role."""
    parts = [s.strip() for s in meta.split("•")]
    if len(parts) == 2:
        return parts[0], parts[1]
    return meta.strip(), ""


def _content_text(node) -> str:
    for br in node.find_all("br"):
        br.replace_with("\n")
    text = node.get_text()
    return re.sub(r"\n+", "\n", text).strip()


def scrape_project_page(slug: str, html: str) -> Project:
    soup = _soup(html)
    h1 = soup.find("h1")
    meta_el = soup.select_one(META_SELECTOR)
    role, year = split_meta(meta_el.get_text()) if meta_el else ("", "")
    poster = soup.select_one(POSTER_SELECTOR)
    iframe = soup.find("iframe", src=True)
    content = soup.select_one(CONTENT_SELECTOR)
    return Project(
        title=h1.get_text(strip=True) if h1 else "",
        slug=slug,
        role=role,
        year=year,
        poster=poster.get("src") if poster else None,
        video_url=iframe["src"] if iframe else None,
        content=_content_text(content) if content else "",
    )


def scrape_project_pages(ws: Workspace) -> list[Project]:
    pages_dir = ws.docs_dir / "projects"
    return [
        scrape_project_page(page.stem, page.read_text(encoding="utf-8"))
        for page in sorted(pages_dir.glob("*.html"))
        if page.name != "index.html"
    ]


def merge_with_page_details(ws: Workspace, projects: list[Project]) -> list[Project]:
    """Fill gaps in seed data (poster, video, title, gallery) from each project page."""
    for project in projects:
        if not project.slug:
            continue
        page = ws.docs_dir / "projects" / f"{project.slug}.html"
        if not page.exists():
            continue
        soup = _soup(page.read_text(encoding="utf-8"))

        if not project.poster:
            img = soup.select_one(POSTER_SELECTOR)
            if img is not None:
                project.poster = img.get("src")
        if not project.video_url:
            iframe = soup.find("iframe", src=True)
            if iframe is not None:
                project.video_url = iframe["src"]
        if not project.title:
            h1 = soup.find("h1")
            if h1 is not None:
                project.title = h1.get_text(strip=True)
        if not project.images:
            gallery = [img["src"] for img in soup.find_all("img", src=True)
                       if img["src"].startswith("/galleries/")]
            if gallery:
                project.images = list(dict.fromkeys(gallery))  # dedupe preserving order
    return projects


# ---------------------------------------------------------------------------
# Site pages
# ---------------------------------------------------------------------------

def extract_about(html: str) -> str:
    node = _soup(html).select_one(ABOUT_SELECTOR)
    return node.get_text().replace("\xa0", " ").strip() if node else ""


def extract_contact(html: str) -> dict:
    user = re.search(r'"user":"([^"]+)"', html)
    domain = re.search(r'"domain":"([^"]+)"', html)
    user = user.group(1) if user else None
    domain = domain.group(1) if domain else None

    soup = _soup(html)
    links = {}
    for provider in SOCIAL_PROVIDERS:
        a = soup.find("a", attrs={"aria-label": provider}, href=True)
        if a is not None:
            links["crew-united" if provider == "crewunited" else provider] = a["href"]

    return {
        "email": f"{user}@{domain}" if user and domain else None,
        "emailUser": user,
        "emailDomain": domain,
        "links": links,
    }


def extract_home_intro(html: str) -> str:
    node = _soup(html).select_one(INTRO_SELECTOR)
    return node.get_text().strip() if node else ""


def extract_site(ws: Workspace) -> dict:
    site = {}
    about = ws.docs_dir / "about.html"
    contact = ws.docs_dir / "contact.html"
    home = ws.docs_dir / "index.html"
    if about.exists():
        site["aboutText"] = extract_about(about.read_text(encoding="utf-8"))
    if contact.exists():
        site["contact"] = extract_contact(contact.read_text(encoding="utf-8"))
    if home.exists():
        site["homeIntro"] = extract_home_intro(home.read_text(encoding="utf-8"))
    return site


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def run(ws: Workspace) -> tuple[list[Project], dict]:
    projects = extract_from_projects_index(ws)
    if projects is None:
        log.info("No usable seed data, scraping project pages...")
        projects = scrape_project_pages(ws)
    projects = merge_with_page_details(ws, projects)
    # Newest first; stable, so unknown years keep their order at the end
    projects.sort(key=store.year_sort_key, reverse=True)

    store.save_projects(ws, projects)
    log.info(f"Wrote {len(projects)} projects to {ws.projects_path}")

    # Existing keys (Sonidata support/privacy) survive unless re-extracted
    site = {**store.load_site(ws), **extract_site(ws)}
    store.save_site(ws, site)
    log.info(f"Wrote site info to {ws.site_path}")
    return projects, site


def main():
    ws = Workspace.from_env()
    setup_logging(ws)
    if not (ws.docs_dir / "projects").is_dir():
        log.error(f"Cannot find {ws.docs_dir / 'projects'}. Run from a checkout with docs exported.")
        sys.exit(1)
    run(ws)


if __name__ == "__main__":
    main()
