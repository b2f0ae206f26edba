#!/usr/bin/env python3
"""Generate the static portfolio site from data/projects.json and data/site.json."""

import logging
import re
import shutil
import sys
from datetime import datetime
from pathlib import Path

import yaml
from bs4 import BeautifulSoup
from jinja2 import Environment, DictLoader

from . import config, media, store
from .config import Workspace, setup_logging
from .models import MediaKind, PortfolioError, Project
from .templates import STYLE, TEMPLATES

log = logging.getLogger(__name__)

HOME_FEATURED_COUNT = 2
UNKNOWN_YEAR = "Unknown"
YEAR_RE = re.compile(r"\d{4}")
SAFE_SLUG_RE = re.compile(r"^[A-Za-z0-9._-]+$")
# Privacy policy, also kept at the URL the app store listings link to
PRIVACY_PATHS = ("sonidata-privacy", "metasound-privacy")
FAQ_NAV_ITEM = {"id": "faq", "title": "FAQ", "icon": "💬"}

SOCIALS = [
    # (key in contact.links, aria label, link text)
    ("linkedin", "linkedin", "LinkedIn"),
    ("instagram", "instagram", "Instagram"),
    ("imdb", "imdb", "IMDb"),
    ("crew-united", "crew united", "Crew United"),
]

DEFAULT_SUPPORT = {
    "title": "Sonidata",
    "subtitle": "Pro Field Recording.\nSimplified.",
    "email": "sonidata.info@gmail.com",
    "faqs": [],
    "docs": [],
}


# ---------------------------------------------------------------------------
# Page data helpers
# ---------------------------------------------------------------------------

def anchor_id(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")


def collect_roles(projects: list[Project]) -> list[str]:
    """Distinct roles in order of first appearance."""
    return list(dict.fromkeys(r for p in projects for r in p.roles))


def filter_by_role(projects: list[Project], role: str) -> list[Project]:
    if not role:
        return list(projects)
    return [p for p in projects if role in p.roles]


def group_by_year(projects: list[Project]) -> dict:
    groups = {}
    for p in projects:
        year = str(p.year or "")
        key = year if YEAR_RE.search(year) else UNKNOWN_YEAR
        groups.setdefault(key, []).append(p)
    return groups


def sorted_years(groups: dict) -> list[str]:
    dated = sorted(
        (y for y in groups if y != UNKNOWN_YEAR),
        key=lambda y: int(YEAR_RE.search(y).group(0)),
        reverse=True,
    )
    return dated + ([UNKNOWN_YEAR] if UNKNOWN_YEAR in groups else [])


def year_rows(projects: list[Project]) -> list[tuple[str, list[Project]]]:
    """
    Lay projects out in rows: each year with two or more projects gets its own
    row, the sparse years are folded into one "2019 • 2017" row, Unknown last.
    """
    groups = group_by_year(projects)
    years = [y for y in sorted_years(groups) if y != UNKNOWN_YEAR]
    strong = [y for y in years if len(groups[y]) >= 2]
    weak = [y for y in years if len(groups[y]) < 2]

    rows = [(y, groups[y]) for y in strong]
    if weak:
        rows.append((" • ".join(weak), [p for y in weak for p in groups[y]]))
    if UNKNOWN_YEAR in groups:
        rows.append((UNKNOWN_YEAR, groups[UNKNOWN_YEAR]))
    return rows


def featured_projects(projects: list[Project], count: int = HOME_FEATURED_COUNT) -> list[Project]:
    flagged = [p for p in projects if p.featured]
    return (flagged or projects)[:count]


def contact_email(contact: dict) -> str:
    if contact.get("email"):
        return contact["email"]
    if contact.get("emailUser") and contact.get("emailDomain"):
        return f"{contact['emailUser']}@{contact['emailDomain']}"
    return ""


def social_links(contact: dict) -> list[dict]:
    links = contact.get("links") or {}
    return [
        {"key": key, "href": links[key], "aria": aria, "label": label}
        for key, aria, label in SOCIALS
        if links.get(key)
    ]


def clean_embed_html(html: str) -> tuple[str, bool]:
    """Strip <script> tags from pasted embed HTML; report whether Instagram's embed.js is needed."""
    needs_instagram = bool(
        media.INSTAGRAM_RE.search(html)
        or re.search(r"class=[\"']instagram-media[\"']", html, re.IGNORECASE)
    )
    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script"):
        script.decompose()
    return str(soup), needs_instagram


def support_data(site: dict) -> dict:
    support = {**DEFAULT_SUPPORT, **(site.get("sonidataSupport") or {})}
    support["subtitle"] = (support.get("subtitle") or "").replace("\\n", "\n")
    if not isinstance(support.get("faqs"), list):
        support["faqs"] = []
    if not isinstance(support.get("docs"), list):
        support["docs"] = []
    return support


def doc_nav_items(docs: list[dict]) -> list[dict]:
    items = [{"id": d.get("id"), "title": d.get("title", ""), "icon": d.get("icon", "")}
             for d in docs if d.get("id")]
    return items + [FAQ_NAV_ITEM]


def neighbours(items: list[dict], current: str) -> tuple:
    ids = [i["id"] for i in items]
    idx = ids.index(current)
    prev_item = items[idx - 1] if idx > 0 else None
    next_item = items[idx + 1] if idx < len(items) - 1 else None
    return prev_item, next_item


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def create_env() -> Environment:
    env = Environment(loader=DictLoader(TEMPLATES), autoescape=True,
                      trim_blocks=True, lstrip_blocks=True)
    env.filters["anchor"] = anchor_id
    return env


class SiteBuilder:
    def __init__(self, ws: Workspace, projects: list[Project], site: dict):
        self.ws = ws
        self.out = ws.output
        self.projects = [p for p in projects if p.slug]
        self.site = site
        self.env = create_env()
        contact = site.get("contact") or {}
        self.common = {
            "owner": config.SITE_OWNER,
            "base_url": config.SITE_BASE_URL.rstrip("/"),
            "style": STYLE,
            "year": datetime.now().year,
            "contact_links": contact.get("links") or {},
            "footer_links": [(k, label) for k, _, label in SOCIALS[:2]
                             if (contact.get("links") or {}).get(k)],
        }
        self.written = []

    def render(self, rel_dir: str, template: str, page_title: str = "", **ctx):
        html = self.env.get_template(template).render(
            page_title=page_title, path=f"/{rel_dir}/" if rel_dir else "/",
            **self.common, **ctx,
        )
        target = self.out / rel_dir / "index.html" if rel_dir else self.out / "index.html"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        self.written.append(target)
        return target

    def build_home(self):
        self.render("", "home.html",
                    intro=self.site.get("homeIntro") or "",
                    featured=featured_projects(self.projects))

    def build_projects(self):
        roles = collect_roles(self.projects)
        layouts = [("", year_rows(self.projects))]
        layouts += [(role, year_rows(filter_by_role(self.projects, role))) for role in roles]
        self.render("projects", "projects.html", "Projects", roles=roles, layouts=layouts)

        for project in self.projects:
            if not SAFE_SLUG_RE.match(project.slug) or project.slug in (".", ".."):
                log.warning(f"  Skipping project with unsafe slug: {project.slug!r}")
                continue
            kind = media.media_kind(project.video_url)
            embed_html, needs_instagram = "", False
            if kind == MediaKind.EMBED:
                embed_html, needs_instagram = clean_embed_html(project.video_url)
            self.render(f"projects/{project.slug}", "project.html",
                        f"{project.title} – Projects",
                        project=project, media=kind.value,
                        embed_html=embed_html, needs_instagram=needs_instagram)

    def build_about(self):
        self.render("about", "about.html", "About", about_text=self.site.get("aboutText") or "")

    def build_contact(self):
        contact = self.site.get("contact") or {}
        self.render("contact", "contact.html", "Contact",
                    email=contact_email(contact), socials=social_links(contact))

    def build_support(self):
        support = support_data(self.site)
        docs = []
        for doc in support["docs"]:
            if not doc.get("id"):
                continue
            if not SAFE_SLUG_RE.match(str(doc["id"])):
                log.warning(f"  Skipping doc with unsafe id: {doc['id']!r}")
                continue
            docs.append(doc)
        nav_items = doc_nav_items(docs)
        base = dict(support=support, docs=docs, faqs=support["faqs"], nav_items=nav_items)

        self.render("sonidata-support", "support.html", f"{support['title']} Support", **base)

        for doc in docs:
            blocks = doc.get("content") or []
            headings = [b.get("text", "") for b in blocks if b.get("type") == "heading"]
            prev_item, next_item = neighbours(nav_items, doc["id"])
            self.render(f"sonidata-support/{doc['id']}", "doc.html", doc.get("title", ""),
                        current=doc["id"], heading=doc.get("title", ""), icon=doc.get("icon", ""),
                        blocks=blocks, headings=headings,
                        prev_item=prev_item, next_item=next_item, **base)

        prev_item, next_item = neighbours(nav_items, "faq")
        self.render("sonidata-support/faq", "doc.html", "FAQ",
                    current="faq", heading="Frequently Asked Questions", icon=FAQ_NAV_ITEM["icon"],
                    blocks=[], headings=[], prev_item=prev_item, next_item=next_item, **base)

    def build_privacy(self):
        privacy = {"lastUpdated": "", "email": DEFAULT_SUPPORT["email"],
                   **(self.site.get("sonidataPrivacy") or {})}
        for rel_dir in PRIVACY_PATHS:
            self.render(rel_dir, "privacy.html", "Sonidata Privacy Policy", privacy=privacy)

    def copy_public(self):
        if not self.ws.public_dir.is_dir():
            log.warning(f"  No public/ directory at {self.ws.public_dir}, skipping assets")
            return
        shutil.copytree(self.ws.public_dir, self.out, dirs_exist_ok=True)
        log.info(f"  Copied assets from {self.ws.public_dir}")

    def write_render_yaml(self):
        render = {
            "services": [{
                "type": "web",
                "name": store.slugify(config.SITE_OWNER) + "-portfolio",
                "runtime": "static",
                "staticPublishPath": "./",
                "headers": [{"path": "/*", "name": "Cache-Control", "value": "public, max-age=3600"}],
            }]
        }
        (self.out / "render.yaml").write_text(yaml.safe_dump(render, sort_keys=False), encoding="utf-8")

    def clean_output(self):
        """Remove the previous build so deleted projects and docs leave no stale pages."""
        if not self.out.exists():
            return
        out = self.out.resolve()
        root = self.ws.root.resolve()
        protected = {root, self.ws.data_dir.resolve(), self.ws.public_dir.resolve()}
        if out in protected or out in root.parents:
            raise PortfolioError(f"Refusing to clear output directory {self.out}")
        shutil.rmtree(self.out)
        log.info(f"  Cleared previous build at {self.out}")

    def build(self) -> Path:
        self.clean_output()
        self.out.mkdir(parents=True, exist_ok=True)
        self.copy_public()
        self.build_home()
        self.build_projects()
        self.build_about()
        self.build_contact()
        self.build_support()
        self.build_privacy()
        self.write_render_yaml()
        log.info(f"Portfolio site generated at {self.out} ({len(self.written)} pages)")
        return self.out


def build_site(ws: Workspace) -> Path:
    return SiteBuilder(ws, store.load_projects(ws), store.load_site(ws)).build()


def main():
    ws = Workspace.from_env()
    setup_logging(ws)
    try:
        out = build_site(ws)
    except PortfolioError as e:
        log.error(str(e))
        sys.exit(1)
    projects = store.load_projects(ws)
    log.info(f"  {len(projects)} projects, {len(collect_roles(projects))} roles")
    log.info(f"  Posters available for {sum(1 for p in projects if p.poster)} projects")
    log.info(f"Open {out / 'index.html'}")


if __name__ == "__main__":
    main()
