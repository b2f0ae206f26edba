"""
Media normalisation for posters, gallery images and featured videos.

Images are handed to the external helper scripts (make-poster.sh crops to an
aspect and scales, compress-image.sh only scales and recompresses). Both take
positional arguments and are expected to be ffmpeg wrappers; dimensions are
read with ffprobe.
"""

import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from . import config
from .config import Workspace
from .models import PathKind, MediaKind

log = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".tif", ".tiff")
VIDEO_EXTENSIONS = (".mp4", ".webm", ".ogg", ".mov")
INSTAGRAM_RE = re.compile(r"instagram\.com/(p|reel|tv)/", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def strip_quotes(s: str) -> str:
    """Drop the quotes terminals add around dragged-in paths with spaces."""
    if not s:
        return s
    s = str(s).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1]
    return s


def sanitize_name(name: str) -> str:
    s = re.sub(r"[^a-z0-9_-]+", "-", str(name or "").lower())
    s = re.sub(r"-+", "-", s)
    return re.sub(r"^-|-$|\.+$", "", s)


def public_to_abs(ws: Workspace, public_path: str) -> Optional[Path]:
    if not public_path:
        return None
    return ws.public_dir / public_path.lstrip("/")


def classify_path(ws: Workspace, input_path: str) -> tuple[PathKind, Optional[Path]]:
    """
    Work out where a user-supplied path points.
    Returns (kind, absolute path) where the path is None for NONE/MISSING.
    """
    if not input_path:
        return PathKind.NONE, None
    input_path = strip_quotes(input_path)
    if not input_path:
        return PathKind.NONE, None

    # Site-absolute paths that exist under public/ win over real filesystem paths
    if input_path.startswith("/"):
        abs_public = public_to_abs(ws, input_path)
        if abs_public.exists():
            return PathKind.PUBLIC, abs_public

    abs_fs = Path(input_path)
    if not abs_fs.is_absolute():
        abs_fs = ws.root / abs_fs
    if abs_fs.exists():
        return PathKind.FILE, abs_fs

    return PathKind.MISSING, None


def ensure_jpeg_path(public_path: str) -> str:
    ext = Path(public_path or "").suffix.lower()
    if ext in (".jpg", ".jpeg"):
        return public_path
    return re.sub(r"\.[^./]+$", "", public_path) + ".jpg"


def list_folder_images(folder: Path) -> list[Path]:
    return sorted(
        (p for p in Path(folder).iterdir()
         if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS),
        key=lambda p: p.name,
    )


def media_kind(value: str) -> MediaKind:
    """Classify a project's featured media for rendering."""
    if not value or not str(value).strip():
        return MediaKind.NONE
    value = str(value).strip()
    if "<" in value:
        return MediaKind.EMBED
    if INSTAGRAM_RE.search(value):
        return MediaKind.INSTAGRAM
    if Path(value.split("?")[0]).suffix.lower() in VIDEO_EXTENSIONS:
        return MediaKind.VIDEO_FILE
    return MediaKind.URL


# ---------------------------------------------------------------------------
# ffprobe / helper scripts
# ---------------------------------------------------------------------------

def probe_dimensions(abs_path: Path) -> Optional[tuple[int, int]]:
    cmd = [
        config.FFPROBE_BIN,
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=width,height",
        "-of", "csv=p=0:s=x",
        str(abs_path),
    ]
    try:
        out = subprocess.check_output(cmd, text=True, stderr=subprocess.DEVNULL).strip()
    except (OSError, subprocess.CalledProcessError) as e:
        log.warning(f"  ffprobe failed for {abs_path}: {e}")
        return None
    try:
        w, h = out.splitlines()[0].split("x")[:2]
        return int(w), int(h)
    except (IndexError, ValueError):
        return None


def approx_is_aspect(width: int, height: int, num: int, den: int, tolerance_px: int = 2) -> bool:
    # Cross-multiplied so no float division is needed
    return abs(width * den - height * num) <= tolerance_px


def _run_helper(ws: Workspace, script: Path, args: list[str]) -> bool:
    cmd = [str(script)] + [str(a) for a in args]
    if ws.dry_run:
        log.info(f"  DRY RUN: {' '.join(cmd)}")
        return True
    try:
        subprocess.run(cmd, check=True)
        return True
    except FileNotFoundError:
        log.error(f"  Helper script not found: {script}")
        return False
    except (OSError, subprocess.CalledProcessError) as e:
        log.error(f"  {script.name} failed: {e}")
        return False


def run_make_poster(ws: Workspace, input_abs: Path, output_abs: Path, aspect: str = "4:5",
                    quality: str = config.IMAGE_QUALITY,
                    max_width: str = config.POSTER_MAX_WIDTH) -> bool:
    return _run_helper(ws, ws.make_poster, [input_abs, output_abs, aspect, quality, max_width])


def run_compress(ws: Workspace, input_abs: Path, output_abs: Path,
                 max_width: str = config.GALLERY_MAX_WIDTH,
                 quality: str = config.IMAGE_QUALITY) -> bool:
    return _run_helper(ws, ws.compress_image, [input_abs, output_abs, max_width, quality])


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def ensure_poster_processed(ws: Workspace, public_path: str) -> str:
    """Crop a poster already under public/ to 4:5, or just compress it if it fits."""
    if not public_path:
        return public_path
    abs_path = public_to_abs(ws, public_path)
    if not abs_path.exists():
        return public_path

    num, den = config.POSTER_ASPECT
    out_public = ensure_jpeg_path(public_path)
    out_abs = public_to_abs(ws, out_public)
    dims = probe_dimensions(abs_path)

    # Unknown dims: crop anyway
    if not dims or not approx_is_aspect(dims[0], dims[1], num, den, config.POSTER_TOLERANCE_PX):
        run_make_poster(ws, abs_path, out_abs, f"{num}:{den}")
        return out_public

    run_compress(ws, abs_path, out_abs, config.POSTER_MAX_WIDTH)
    return out_public


def normalize_poster(ws: Workspace, slug: str, input_path: str) -> str:
    if not input_path:
        return ""
    input_path = strip_quotes(input_path)
    kind, abs_path = classify_path(ws, input_path)

    if kind == PathKind.PUBLIC:
        return ensure_poster_processed(ws, input_path)
    if kind == PathKind.FILE:
        out_public = f"/posters/{sanitize_name(slug)}.jpg"
        out_abs = public_to_abs(ws, out_public)
        out_abs.parent.mkdir(parents=True, exist_ok=True)
        num, den = config.POSTER_ASPECT
        run_make_poster(ws, abs_path, out_abs, f"{num}:{den}")
        return out_public

    # Left as-is; the page 404s until fixed
    log.warning(f"Poster path not found: {input_path}")
    return input_path


def normalize_gallery_image(ws: Workspace, slug: str, input_path: str, index: int) -> str:
    if not input_path:
        return ""
    input_path = strip_quotes(input_path)
    kind, abs_path = classify_path(ws, input_path)

    base = sanitize_name(Path(input_path).stem) or f"img-{index + 1}"
    out_public = f"/galleries/{sanitize_name(slug)}/{base}.jpg"
    out_abs = public_to_abs(ws, out_public)

    if kind == PathKind.PUBLIC:
        if Path(input_path).suffix.lower() in (".jpg", ".jpeg"):
            run_compress(ws, abs_path, abs_path)
            return input_path
        out_abs.parent.mkdir(parents=True, exist_ok=True)
        run_compress(ws, abs_path, out_abs)
        return out_public
    if kind == PathKind.FILE:
        out_abs.parent.mkdir(parents=True, exist_ok=True)
        run_compress(ws, abs_path, out_abs)
        return out_public

    log.warning(f"Gallery image not found: {input_path}")
    return input_path


def maybe_compress_gallery_image(ws: Workspace, public_path: str) -> str:
    """Recompress an existing gallery JPEG in place; other formats are left untouched."""
    if not public_path:
        return public_path
    abs_path = public_to_abs(ws, public_path)
    if not abs_path.exists():
        return public_path
    if abs_path.suffix.lower() in (".jpg", ".jpeg"):
        run_compress(ws, abs_path, abs_path)
    return public_path


def normalize_video(ws: Workspace, slug: str, input_path: str) -> str:
    if not input_path:
        return ""
    input_path = strip_quotes(input_path)
    kind, abs_path = classify_path(ws, input_path)

    if kind == PathKind.PUBLIC:
        return input_path
    if kind == PathKind.FILE:
        src = Path(input_path)
        base = sanitize_name(src.stem) or "video"
        ext = src.suffix.lower() or ".mp4"
        out_public = f"/videos/{sanitize_name(slug)}-{base}{ext}"
        out_abs = public_to_abs(ws, out_public)
        out_abs.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(abs_path, out_abs)
        log.info(f"  Copied video to {out_public}")
        return out_public

    # External URL (YouTube/Vimeo/etc.)
    return input_path
