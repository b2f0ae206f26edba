#!/usr/bin/env python3
"""
Terminal Content Manager
========================
Add/edit/delete projects in data/projects.json and edit the site copy in
data/site.json (home intro, about, contact, Sonidata support and privacy).
Prompts are non-destructive: press Enter to keep existing values.

Usage:
    portfolio-content
"""

import logging
from pathlib import Path

from . import media, store
from .config import Workspace, setup_logging
from .models import Project, PathKind
from .prompts import (
    Cancelled, ask_text, ask_confirm, ask_select, ask_autocomplete,
    ask_multiline, ask_description,
)

log = logging.getLogger(__name__)

MAX_GALLERY_SLOTS = 10
DEFAULT_SONIDATA_EMAIL = "sonidata.info@gmail.com"


# ---------------------------------------------------------------------------
# Shared prompt flows
# ---------------------------------------------------------------------------

def _resolve_folder(ws: Workspace, value: str) -> Path:
    p = Path(media.strip_quotes(value))
    return p if p.is_absolute() else ws.root / p


def prompt_gallery_folder(ws: Workspace, slug: str) -> list[str]:
    def validate(v):
        if not v:
            return "Required"
        folder = _resolve_folder(ws, v)
        if not folder.exists():
            return "Folder not found"
        if not folder.is_dir():
            return "Not a directory"
        return True

    folder = _resolve_folder(ws, ask_text("Path to folder containing images", validate=validate))
    files = media.list_folder_images(folder)
    log.info(f"Found {len(files)} image(s) in folder.")
    images = []
    for i, path in enumerate(files):
        log.info(f"Processing {i + 1}/{len(files)}: {path.name}...")
        images.append(media.normalize_gallery_image(ws, slug, str(path), i))
    log.info(f"Processed {len(images)} image(s).")
    return images


def prompt_gallery_one_by_one(ws: Workspace, slug: str) -> list[str]:
    images = []
    for i in range(MAX_GALLERY_SLOTS):
        img = ask_text(f"Gallery image {i + 1} (public path or file path, blank to finish)")
        if not img:
            break
        images.append(media.normalize_gallery_image(ws, slug, img, i))
    return images


def prompt_gallery_slots(ws: Workspace, slug: str, current: list[str]) -> list[str]:
    """Walk the first gallery slots offering keep / replace / remove for each."""
    result = []
    for i in range(MAX_GALLERY_SLOTS):
        cur = current[i] if i < len(current) else ""
        action = ask_select(f"Image {i + 1}: {cur or '<empty>'}", [
            ("Keep" if cur else "Skip", "keep"),
            ("Replace/Add", "set"),
            ("Remove" if cur else "Remove (n/a)", "remove"),
        ])
        if action == "keep":
            if cur:
                result.append(cur)
        elif action == "set":
            img = ask_text("Enter image (public path or file path)", cur)
            if img and img != cur:
                result.append(media.normalize_gallery_image(ws, slug, img, i))
            elif cur:
                result.append(cur)
    return result + current[MAX_GALLERY_SLOTS:]


def prompt_embed_html(initial: str = "") -> str:
    print("Paste your EMBED HTML below (type ::done on its own line to finish).")
    return ask_multiline(initial)


def prompt_featured_media_for_add(ws: Workspace, slug: str) -> str:
    mode = ask_select("Featured media input", [
        ("URL or file path", "url"),
        ("Embed HTML (paste)", "embed"),
        ("Skip", "skip"),
    ])
    if mode == "url":
        txt = ask_text("Featured URL / video URL or file path (optional)")
        return media.normalize_video(ws, slug, txt) if txt else ""
    if mode == "embed":
        return prompt_embed_html()
    return ""


def prompt_featured_media_for_edit(ws: Workspace, slug: str, current: str) -> str:
    current = current or ""
    is_embed = "<" in current
    mode = ask_select(f"Featured media ({'current set' if current else 'empty'})", [
        ("Keep current", "keep"),
        ("Replace with URL or file path", "url"),
        ("Replace with Embed HTML (paste)", "embed"),
        ("Clear" if current else "Clear (n/a)", "clear"),
    ])
    if mode == "clear":
        return ""
    if mode == "url":
        txt = ask_text("Featured URL / video URL or file path", "" if is_embed else current)
        return media.normalize_video(ws, slug, txt) if txt else ""
    if mode == "embed":
        return prompt_embed_html(current if is_embed else "")
    return current


def pick_project(projects: list[Project]):
    if not projects:
        return None
    choices = [(f"{p.title} ({p.year})" if p.year else p.title, p.slug) for p in projects]
    slug = ask_autocomplete("Select project", choices)
    return store.find_project(projects, slug) if slug else None


# ---------------------------------------------------------------------------
# Project actions
# ---------------------------------------------------------------------------

def add_project(ws: Workspace):
    projects = store.load_projects(ws)

    title = ask_text("Title", validate=lambda v: True if v else "Required")
    slug = ask_text("Slug", store.slugify(title)) or store.slugify(title)
    if store.find_project(projects, slug):
        log.error(f"A project with slug '{slug}' already exists.")
        return
    role = ask_text("Role (e.g., Sound Designer)")
    category = ask_text("Category (optional)")
    year = ask_text("Year (optional)")
    featured = ask_confirm("Feature on homepage?", False)

    def validate_poster(v):
        if not v:
            return True
        kind, _ = media.classify_path(ws, v)
        if kind in (PathKind.PUBLIC, PathKind.FILE):
            return True
        return "Not found: provide a public path under public/ or a valid file path"

    poster = ask_text("Poster path (public path like /posters/omni.jpg OR a file path)",
                      validate=validate_poster)

    image_mode = ask_select("Gallery images input", [
        ("Add images one by one", "individual"),
        ("Import all from a folder", "folder"),
        ("Skip", "skip"),
    ])
    images = []
    if image_mode == "folder":
        images = prompt_gallery_folder(ws, slug)
    elif image_mode == "individual":
        images = prompt_gallery_one_by_one(ws, slug)

    featured_media = prompt_featured_media_for_add(ws, slug)
    content = ask_description("")

    project = Project(
        title=title,
        slug=slug,
        role=role,
        category=category,
        year=year,
        poster=media.normalize_poster(ws, slug, poster) if poster else "",
        featured=featured,
        images=images,
        video_url=featured_media,
        content=content,
    )

    store.add_project(projects, project)
    store.save_projects(ws, projects)
    log.info(f"Saved new project '{project.title}' ({project.slug}).")


def edit_project(ws: Workspace):
    projects = store.load_projects(ws)
    project = pick_project(projects)
    if not project:
        log.info("No project selected.")
        return
    old_slug = project.slug

    updated = Project.from_dict(project.to_dict())
    updated.title = ask_text("Title", updated.title)
    updated.slug = ask_text("Slug", updated.slug)
    updated.role = ask_text("Role", updated.role or "")
    updated.category = ask_text("Category", updated.category or "")
    updated.year = ask_text("Year", str(updated.year or ""))
    updated.featured = ask_confirm("Feature on homepage?", bool(updated.featured))

    poster = ask_text("Poster path (public or file path)", updated.poster or "")
    if poster != (updated.poster or ""):
        updated.poster = media.normalize_poster(ws, updated.slug, poster) if poster else ""

    image_mode = ask_select("Gallery images", [
        ("Keep current images", "keep"),
        ("Replace all with folder import", "folder"),
        ("Edit images individually", "individual"),
        ("Clear all images", "clear"),
    ])
    if image_mode == "folder":
        updated.images = prompt_gallery_folder(ws, updated.slug)
    elif image_mode == "individual":
        updated.images = prompt_gallery_slots(ws, updated.slug, list(updated.images))
    elif image_mode == "clear":
        updated.images = []

    updated.video_url = prompt_featured_media_for_edit(ws, updated.slug, updated.video_url)

    if ask_confirm("Edit description?", False):
        updated.content = ask_description(updated.content or "")

    store.replace_project(projects, old_slug, updated)
    store.save_projects(ws, projects)
    log.info(f"Saved changes to '{updated.title}' ({updated.slug}).")


def delete_project(ws: Workspace):
    projects = store.load_projects(ws)
    if not projects:
        log.info("No projects to delete.")
        return
    project = pick_project(projects)
    if not project:
        log.info("No project selected.")
        return
    if not ask_confirm(f"Delete project '{project.title}' ({project.slug})? "
                       f"(JSON entry only; files untouched)", False):
        log.info("Cancelled.")
        return
    store.save_projects(ws, store.delete_project(projects, project.slug))
    log.info(f"Deleted project '{project.title}'.")


def import_video(ws: Workspace):
    projects = store.load_projects(ws)
    project = pick_project(projects)
    if not project:
        log.info("No project selected.")
        return
    src = ask_text("Path to video file (.mp4/.webm/.ogg) or existing public path (/videos/...)",
                   validate=lambda v: True if v else "Required")
    project.video_url = media.normalize_video(ws, project.slug, src)
    store.save_projects(ws, projects)
    log.info(f"Imported video to '{project.video_url}' and updated project '{project.title}'.")


# ---------------------------------------------------------------------------
# Site copy actions
# ---------------------------------------------------------------------------

def edit_about(ws: Workspace):
    site = store.load_site(ws)
    site["aboutText"] = ask_multiline(site.get("aboutText", ""))
    store.save_site(ws, site)
    log.info("Saved about text.")


def edit_home_intro(ws: Workspace):
    site = store.load_site(ws)
    site["homeIntro"] = ask_multiline(site.get("homeIntro", ""))
    store.save_site(ws, site)
    log.info("Saved home intro.")


def edit_contact(ws: Workspace):
    site = store.load_site(ws)
    site["contact"] = c = site.get("contact") or {}

    c["emailUser"] = ask_text("Email user (before @)", c.get("emailUser") or "")
    c["emailDomain"] = ask_text("Email domain (after @)", c.get("emailDomain") or "")
    if c["emailUser"] and c["emailDomain"]:
        c["email"] = f"{c['emailUser']}@{c['emailDomain']}"
    else:
        c["email"] = c.get("email") or ""

    links = c.get("links") or {}
    c["links"] = {
        "linkedin": ask_text("LinkedIn URL", links.get("linkedin", "")),
        "instagram": ask_text("Instagram URL", links.get("instagram", "")),
        "imdb": ask_text("IMDb URL", links.get("imdb", "")),
        "crew-united": ask_text("Crew United URL", links.get("crew-united", "")),
    }

    store.save_site(ws, site)
    log.info("Saved contact info.")


def edit_faqs(faqs: list[dict]) -> list[dict]:
    faqs = list(faqs)
    while True:
        choices = [("Add FAQ", "add")]
        if faqs:
            choices.append(("Edit/Delete FAQ", "edit"))
        choices.append(("Back", "back"))
        action = ask_select(f"Sonidata FAQs ({len(faqs)})", choices)

        if action == "back":
            return faqs
        if action == "add":
            question = ask_text("Question")
            answer = ask_text("Answer")
            if question and answer:
                faqs.append({"question": question, "answer": answer})
            continue

        idx = ask_select("Select FAQ to edit", [(f["question"], i) for i, f in enumerate(faqs)])
        sub = ask_select("Action", [("Edit", "edit"), ("Delete", "delete"), ("Cancel", "cancel")])
        if sub == "edit":
            question = ask_text("Question", faqs[idx].get("question", ""))
            answer = ask_text("Answer", faqs[idx].get("answer", ""))
            if question and answer:
                faqs[idx] = {**faqs[idx], "question": question, "answer": answer}
        elif sub == "delete":
            faqs.pop(idx)


def edit_sonidata_support(ws: Workspace):
    site = store.load_site(ws)
    site["sonidataSupport"] = s = site.get("sonidataSupport") or {}

    s["title"] = ask_text("Title", s.get("title") or "Sonidata")
    s["subtitle"] = ask_text("Subtitle (use \\n for newline)", s.get("subtitle") or "")
    s["email"] = ask_text("Support Email", s.get("email") or DEFAULT_SONIDATA_EMAIL)
    s["faqs"] = edit_faqs(s.get("faqs") if isinstance(s.get("faqs"), list) else [])

    store.save_site(ws, site)
    log.info("Saved Sonidata Support page info.")


def edit_sonidata_privacy(ws: Workspace):
    site = store.load_site(ws)
    site["sonidataPrivacy"] = p = site.get("sonidataPrivacy") or {}

    p["lastUpdated"] = ask_text("Last Updated Date (e.g., February 2026)", p.get("lastUpdated") or "")
    p["email"] = ask_text("Contact Email", p.get("email") or DEFAULT_SONIDATA_EMAIL)

    store.save_site(ws, site)
    log.info("Saved Sonidata Privacy page info.")


# ---------------------------------------------------------------------------
# Main menu
# ---------------------------------------------------------------------------

MENU = [
    ("Add project", add_project),
    ("Edit project", edit_project),
    ("Delete project", delete_project),
    ("Edit About page", edit_about),
    ("Edit Home intro", edit_home_intro),
    ("Edit Contact page", edit_contact),
    ("Edit Sonidata Support page", edit_sonidata_support),
    ("Edit Sonidata Privacy page", edit_sonidata_privacy),
    ("Import video to a project", import_video),
    ("Exit", None),
]


def main_menu(ws: Workspace):
    while True:
        try:
            action = ask_select("Content Manager", MENU)
        except Cancelled:
            return
        if action is None:
            return
        try:
            action(ws)
        except Cancelled:
            log.info("Cancelled.")
        except Exception as e:
            log.error(f"Error: {e}")
        print("\n—")


def main():
    ws = Workspace.from_env()
    setup_logging(ws)
    main_menu(ws)


if __name__ == "__main__":
    main()
