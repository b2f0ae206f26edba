#!/usr/bin/env python3
"""
Filmography scraper: pulls credits from an IMDb and/or Crew United profile,
keeps a timestamped backup of what was scraped and merges new titles into
data/projects.json (existing entries win, matched by lower-cased title).

Usage:
    portfolio-scrape
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import requests
from bs4 import BeautifulSoup

from . import config, store
from .config import Workspace, setup_logging
from .models import Project
from .prompts import Cancelled, ask_text

log = logging.getLogger(__name__)

DEFAULT_ROLE = "Sound Designer"
DEFAULT_YEAR = "Unknown"
IGNORED_TITLES = {"Known For", "Filmography"}
YEAR_RE = re.compile(r"(\d{4})")


@dataclass(frozen=True)
class SelectorMap:
    title: str
    role: str
    year: str


SELECTOR_MAPS = {
    "imdb": SelectorMap(
        title='.titleColumn a, .cli-title a, h1[data-testid="hero-title-block__title"]',
        role='.secondaryColumn, .cli-title-metadata, [data-testid="title-pc-principal-credit"]',
        year='.titleColumn .secondaryText, .cli-title-metadata, [data-testid="title-details-releasedate"]',
    ),
    "crewunited": SelectorMap(
        title=".project-title, h1.title, .film-title",
        role=".credit-role, .role, .function",
        year=".year, .date, .production-year",
    ),
}


# ---------------------------------------------------------------------------
# Scraping
# ---------------------------------------------------------------------------

def fetch_html(url: str, session: Optional[requests.Session] = None) -> str:
    http = session or requests
    resp = http.get(url, timeout=config.SCRAPE_TIMEOUT, headers={
        "User-Agent": config.SCRAPE_USER_AGENT,
    })
    resp.raise_for_status()
    return resp.text


def parse_credits(html: str, selectors: SelectorMap) -> list[dict]:
    """Extract {title, role, year} entries; role and year are searched near each title."""
    soup = BeautifulSoup(html, "html.parser")
    credits = []
    for element in soup.select(selectors.title):
        title = element.get_text(strip=True)
        if not title or title in IGNORED_TITLES:
            continue

        role = ""
        year = ""
        container = element.parent.parent if element.parent is not None else None
        if container is not None:
            role_el = container.select_one(selectors.role)
            if role_el is not None:
                role = role_el.get_text(strip=True)
            year_el = container.select_one(selectors.year)
            if year_el is not None:
                m = YEAR_RE.search(year_el.get_text(strip=True))
                if m:
                    year = m.group(1)

        credits.append({
            "title": title,
            "role": role or DEFAULT_ROLE,
            "year": year or DEFAULT_YEAR,
        })
    return credits


def scrape_site(url: str, selectors: SelectorMap,
                session: Optional[requests.Session] = None) -> list[dict]:
    """Best effort: any network or parse failure yields an empty list."""
    log.info(f"Scraping: {url}")
    try:
        html = fetch_html(url, session)
        return parse_credits(html, selectors)
    except requests.RequestException as e:
        log.error(f"Error scraping {url}: {e}")
        return []
    except Exception as e:
        log.error(f"Error parsing {url}: {e}")
        return []


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def credits_to_projects(credits: list[dict]) -> list[Project]:
    return [
        Project(title=c["title"], slug=store.slugify(c["title"]),
                role=c.get("role", ""), year=c.get("year", ""))
        for c in credits
    ]


def write_backup(ws: Workspace, source: str, credits: list[dict],
                 now: Optional[datetime] = None):
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    path = ws.scrapes_dir / f"{source}-{stamp}" / "projects.json"
    store.write_json(path, [{**c, "slug": store.slugify(c["title"])} for c in credits])
    log.info(f"  Backup written to {path}")
    return path


def merge_into_store(ws: Workspace, credits: list[dict]) -> tuple[int, int]:
    """Merge scraped credits into projects.json. Returns (added, total)."""
    existing = store.load_projects(ws)
    merged = store.merge_by_title(existing, credits_to_projects(credits))
    store.save_projects(ws, merged)
    return len(merged) - len(existing), len(merged)


def main():
    ws = Workspace.from_env()
    setup_logging(ws)
    log.info("=== Portfolio Project Scraper ===")

    try:
        urls = {
            "imdb": ask_text("Enter your IMDb profile URL (or press Enter to skip)"),
            "crewunited": ask_text("Enter your Crew United profile URL (or press Enter to skip)"),
        }
    except Cancelled:
        return

    all_credits = []
    with requests.Session() as session:
        for source, url in urls.items():
            if not url:
                continue
            credits = scrape_site(url, SELECTOR_MAPS[source], session)
            log.info(f"Found {len(credits)} projects from {source}")
            if credits:
                write_backup(ws, source, credits)
            all_credits.extend(credits)

    if not all_credits:
        log.info("No projects found. You can add projects with portfolio-content later.")
        return

    added, total = merge_into_store(ws, all_credits)
    log.info(f"Updated {ws.projects_path} with {added} new project(s), {total} total.")
    for c in all_credits:
        log.info(f"- {c['title']} ({c['year']}) - {c['role']}")


if __name__ == "__main__":
    main()
