"""Data models shared by the content tools and the site builder."""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class PortfolioError(Exception):
    pass


class DuplicateSlugError(PortfolioError):
    def __init__(self, slug: str):
        super().__init__(f"A project with slug '{slug}' already exists.")
        self.slug = slug


class PatchError(PortfolioError):
    pass


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PathKind(str, Enum):
    NONE = "none"
    PUBLIC = "public"    # exists under public/, addressed as /foo/bar.jpg
    FILE = "file"        # exists somewhere on disk
    MISSING = "missing"


class MediaKind(str, Enum):
    NONE = "none"
    URL = "url"              # embeddable player URL (YouTube, Vimeo, ...)
    VIDEO_FILE = "video"     # self-hosted file under /videos
    INSTAGRAM = "instagram"  # instagram permalink, rendered as a link card
    EMBED = "embed"          # raw embed HTML pasted by the owner


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

# JSON key -> dataclass field
_JSON_KEYS = {"videoUrl": "video_url"}


@dataclass
class Project:
    title: str
    slug: str
    role: str = ""
    category: str = ""
    year: str = ""
    poster: Optional[str] = ""
    featured: bool = False
    images: list = field(default_factory=list)
    video_url: Optional[str] = ""
    content: str = ""
    extra: dict = field(default_factory=dict)  # unknown keys, kept on round-trip

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        known = {}
        extra = {}
        for key, value in data.items():
            name = _JSON_KEYS.get(key, key)
            if name in cls.__dataclass_fields__ and name != "extra":
                known[name] = value
            else:
                extra[key] = value
        known.setdefault("title", "")
        known.setdefault("slug", "")
        if not isinstance(known.get("images"), list):
            known["images"] = []
        return cls(extra=extra, **known)

    def to_dict(self) -> dict:
        data = asdict(self)
        extra = data.pop("extra")
        out = {}
        for key, value in data.items():
            if key == "video_url":
                key = "videoUrl"
            out[key] = value
        out.update(extra)
        return out

    @property
    def roles(self) -> list[str]:
        return [r.strip() for r in (self.role or "").split(",") if r.strip()]

    @property
    def meta_line(self) -> str:
        return " • ".join(str(x) for x in (self.role, self.year) if x)
