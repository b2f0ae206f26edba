#!/usr/bin/env python3
"""
Apply a curated patch file to data/projects.json.

A patch file is YAML keyed by project slug:

    prefix: lucy-beech
    projects:
      out-of-body-film-art-installation:
        poster: /posters/out-of-body-poster.jpg
        images: [/galleries/out-of-body-film-art-installation/still-01.jpg]
        role: Sound Designer, Mixer, Composer
        synopsis_from: out-of-body
        year: "2024"

`synopsis_from` names an entry of the latest scrape backup whose directory
starts with `prefix`; its synopsis becomes the project content. `year` only
fills an empty year.

Usage:
    portfolio-patch patches/lucy-beech.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from . import store
from .config import Workspace, setup_logging
from .models import PatchError, Project

log = logging.getLogger(__name__)


def load_patch_file(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise PatchError(f"Cannot read patch file {path}: {e}")
    if not isinstance(data, dict) or not isinstance(data.get("projects"), dict):
        raise PatchError(f"{path} has no 'projects' mapping")
    return data


def latest_backup(ws: Workspace, prefix: str) -> Path:
    entries = sorted(p for p in ws.scrapes_dir.glob(f"{prefix}-*") if p.is_dir()) \
        if ws.scrapes_dir.is_dir() else []
    if not entries or not (entries[-1] / "projects.json").exists():
        raise PatchError(f"No {prefix} scrape backup found under {ws.scrapes_dir}.")
    return entries[-1] / "projects.json"


def synopsis_lookup(entries: list[dict]) -> dict:
    return {e.get("slug"): e.get("synopsis") or e.get("rawSynopsis") or "" for e in entries}


def apply_patch(projects: list[Project], updates: dict, synopses: Optional[dict] = None) -> int:
    synopses = synopses or {}
    changed = 0
    for project in projects:
        u = updates.get(project.slug)
        if not u:
            continue
        if u.get("poster"):
            project.poster = u["poster"]
        if u.get("images"):
            project.images = list(u["images"])
        if u.get("role"):
            project.role = u["role"]
        content = u.get("content") or synopses.get(u.get("synopsis_from"), "")
        if content:
            project.content = content
        if u.get("year") and not str(project.year or "").strip():
            project.year = str(u["year"])
        changed += 1
    return changed


def run(ws: Workspace, patch_path: Path, prefix: Optional[str] = None) -> int:
    patch = load_patch_file(patch_path)
    prefix = prefix or patch.get("prefix")

    synopses = {}
    if prefix:
        backup = latest_backup(ws, prefix)
        log.info(f"Using scrape backup {backup}")
        synopses = synopsis_lookup(store.read_json(backup, []))

    projects = store.load_projects(ws)
    changed = apply_patch(projects, patch["projects"], synopses)
    store.save_projects(ws, projects)
    log.info(f"Patched {changed} project entries from {patch_path.name}.")
    return changed


def main(argv=None):
    parser = argparse.ArgumentParser(description="Apply a YAML patch to projects.json")
    parser.add_argument("patch", type=Path, help="patch file (YAML)")
    parser.add_argument("--prefix", help="scrape backup prefix, overrides the file's 'prefix'")
    args = parser.parse_args(argv)

    ws = Workspace.from_env()
    setup_logging(ws)
    try:
        run(ws, args.patch, args.prefix)
    except PatchError as e:
        log.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
