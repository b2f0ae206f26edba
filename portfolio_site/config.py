"""
Workspace configuration and logging.

Configuration via environment variables or .env file.
"""

import os
import sys
import logging
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env file so this works cross-platform (Windows included)
load_dotenv()

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

PORTFOLIO_ROOT = Path(os.getenv("PORTFOLIO_ROOT", os.getcwd()))
PORTFOLIO_OUTPUT = os.getenv("PORTFOLIO_OUTPUT", "")
LOG_FILE = os.getenv("PORTFOLIO_LOG_FILE", "")
MAKE_POSTER_SCRIPT = os.getenv("MAKE_POSTER_SCRIPT", "")
COMPRESS_IMAGE_SCRIPT = os.getenv("COMPRESS_IMAGE_SCRIPT", "")
FFPROBE_BIN = os.getenv("FFPROBE_BIN", "ffprobe")
SCRAPE_USER_AGENT = os.getenv(
    "SCRAPE_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
)
SCRAPE_TIMEOUT = int(os.getenv("SCRAPE_TIMEOUT", "20"))
SITE_OWNER = os.getenv("SITE_OWNER", "Gaston Ibarroule")
SITE_BASE_URL = os.getenv("SITE_BASE_URL", "")
DRY_RUN = os.getenv("DRY_RUN", "false").lower() == "true"

# Poster / gallery normalisation settings
POSTER_ASPECT = (4, 5)
POSTER_TOLERANCE_PX = 2
POSTER_MAX_WIDTH = "1400"
GALLERY_MAX_WIDTH = "1600"
IMAGE_QUALITY = "4"


@dataclass
class Workspace:
    """Filesystem layout of a portfolio checkout."""
    root: Path
    output: Path = None
    make_poster: Path = None
    compress_image: Path = None
    dry_run: bool = False

    def __post_init__(self):
        self.root = Path(self.root)
        if self.output is None:
            self.output = self.root / "site"
        if self.make_poster is None:
            self.make_poster = self.root / "scripts" / "make-poster.sh"
        if self.compress_image is None:
            self.compress_image = self.root / "scripts" / "compress-image.sh"

    @classmethod
    def from_env(cls) -> "Workspace":
        return cls(
            root=PORTFOLIO_ROOT,
            output=Path(PORTFOLIO_OUTPUT) if PORTFOLIO_OUTPUT else None,
            make_poster=Path(MAKE_POSTER_SCRIPT) if MAKE_POSTER_SCRIPT else None,
            compress_image=Path(COMPRESS_IMAGE_SCRIPT) if COMPRESS_IMAGE_SCRIPT else None,
            dry_run=DRY_RUN,
        )

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def projects_path(self) -> Path:
        return self.data_dir / "projects.json"

    @property
    def site_path(self) -> Path:
        return self.data_dir / "site.json"

    @property
    def public_dir(self) -> Path:
        return self.root / "public"

    @property
    def docs_dir(self) -> Path:
        """Exported static HTML of the previous site."""
        return self.root / "docs"

    @property
    def scrapes_dir(self) -> Path:
        return self.root / "backups" / "scrapes"

    @property
    def log_file(self) -> Path:
        return Path(LOG_FILE) if LOG_FILE else self.root / "portfolio.log"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def setup_logging(ws: Workspace, level: int = logging.INFO):
    ws.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(ws.log_file, encoding="utf-8"),
            logging.StreamHandler(
                open(sys.stdout.fileno(), mode="w", encoding="utf-8", closefd=False)
            ),
        ],
    )
