import json
from datetime import datetime

import requests

from portfolio_site import scrape
from tests.conftest import read_projects, write_projects

CREW_UNITED_HTML = """
<html><body>
  <h2><span class="project-title">Filmography</span></h2>
  <ul>
    <li class="credit">
      <div class="head"><a class="project-title" href="/p/1">Flush</a></div>
      <span class="credit-role">Sound Design</span>
      <span class="year">Kurzfilm, 2023</span>
    </li>
    <li class="credit">
      <div class="head"><a class="project-title" href="/p/2">Warm Decembers</a></div>
    </li>
  </ul>
</body></html>
"""


class FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Error")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, timeout=None, headers=None):
        self.requests.append((url, headers))
        if self.error:
            raise self.error
        return self.response


def test_parse_credits_reads_role_and_year_near_title():
    credits = scrape.parse_credits(CREW_UNITED_HTML, scrape.SELECTOR_MAPS["crewunited"])
    assert credits == [
        {"title": "Flush", "role": "Sound Design", "year": "2023"},
        {"title": "Warm Decembers", "role": "Sound Designer", "year": "Unknown"},
    ]


def test_scrape_site_sends_user_agent():
    session = FakeSession(FakeResponse(CREW_UNITED_HTML))
    credits = scrape.scrape_site("https://www.crew-united.com/x", scrape.SELECTOR_MAPS["crewunited"], session)
    assert len(credits) == 2
    url, headers = session.requests[0]
    assert url == "https://www.crew-united.com/x"
    assert "Mozilla" in headers["User-Agent"]


def test_scrape_site_returns_empty_on_http_error():
    session = FakeSession(FakeResponse("", status=503))
    assert scrape.scrape_site("https://imdb.com/name/x", scrape.SELECTOR_MAPS["imdb"], session) == []


def test_scrape_site_returns_empty_on_network_error():
    session = FakeSession(error=requests.ConnectionError("offline"))
    assert scrape.scrape_site("https://imdb.com/name/x", scrape.SELECTOR_MAPS["imdb"], session) == []


def test_write_backup(ws):
    credits = [{"title": "Out of Body", "role": "Sound Designer", "year": "2024"}]
    path = scrape.write_backup(ws, "imdb", credits, now=datetime(2024, 3, 1, 9, 5, 7))

    assert path == ws.scrapes_dir / "imdb-20240301-090507" / "projects.json"
    assert json.loads(path.read_text(encoding="utf-8")) == [{**credits[0], "slug": "out-of-body"}]


def test_merge_into_store_keeps_existing_entries(ws):
    write_projects(ws, [{"title": "Flush", "slug": "flush", "role": "Composer", "year": "2023"}])
    credits = [
        {"title": "flush", "role": "Sound Design", "year": "2023"},
        {"title": "Warm Decembers", "role": "Sound Designer", "year": "Unknown"},
    ]

    added, total = scrape.merge_into_store(ws, credits)

    assert (added, total) == (1, 2)
    saved = read_projects(ws)
    assert saved[0]["role"] == "Composer"
    assert saved[1]["slug"] == "warm-decembers"
    assert saved[1]["year"] == "Unknown"


def test_merge_into_store_skips_punctuation_variants(ws):
    write_projects(ws, [{"title": "Flush", "slug": "flush"}])

    added, total = scrape.merge_into_store(ws, [{"title": "Flush.", "role": "Mixer", "year": "2023"}])

    assert (added, total) == (0, 1)
    assert [p["slug"] for p in read_projects(ws)] == ["flush"]


def test_main_without_urls_leaves_store_alone(ws, answers, monkeypatch):
    monkeypatch.setattr(scrape.Workspace, "from_env", classmethod(lambda cls: ws))
    monkeypatch.setattr(scrape, "setup_logging", lambda ws: None)
    answers("", "")

    scrape.main()

    assert not ws.projects_path.exists()
