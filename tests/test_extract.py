import pytest

from portfolio_site import extract, store
from tests.conftest import read_projects

SEED_INDEX = """
<html><body><script>self.__next_f.push([1,"..."])</script>
<script>window.__seed = [{"projects":[
  {"title":"Flush","slug":"flush","role":"Sound Designer","year":"2023",
   "poster":"$undefined","featured":true,"content":"Short film",},
  {"title":"Out of Body","slug":"out-of-body","role":"Sound Designer, Composer",
   "year":"2024","images":[],"videoUrl":$undefined,},
]}]</script></body></html>
"""

FLUSH_PAGE = """
<html><body>
  <h1>Flush</h1>
  <div class="text-muted">Sound Designer • 2023</div>
  <img class="w-full h-full object-cover" src="/posters/flush.jpg">
  <iframe src="https://player.vimeo.com/video/42"></iframe>
  <div class="mt-3 text-sm whitespace-pre-wrap">Line one<br>Line two</div>
  <img src="/galleries/flush/a.jpg"><img src="/galleries/flush/b.jpg"><img src="/galleries/flush/a.jpg">
</body></html>
"""

ABOUT_PAGE = """
<div class="prose prose-invert max-w-none whitespace-pre-wrap">
  Gaston is a sound designer based in Berlin.\xa0
</div>
"""

CONTACT_PAGE = """
<script>var e = {"user":"gaston","domain":"example.com"};</script>
<a aria-label="linkedin" href="https://www.linkedin.com/in/gaston">in</a>
<a aria-label="crewunited" href="https://www.crew-united.com/gaston">cu</a>
"""

HOME_PAGE = '<p class="p-responsive text-muted whitespace-pre-line">\n  Sound for film and art.\n</p>'


def write_doc(ws, rel, html):
    path = ws.docs_dir / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")


def test_parse_seed_blob_tolerates_undefined_and_trailing_commas():
    seed = extract.parse_seed_blob(SEED_INDEX)
    assert [p["slug"] for p in seed] == ["flush", "out-of-body"]
    assert seed[0]["poster"] is None
    assert seed[0]["featured"] is True
    assert seed[1]["videoUrl"] is None
    assert seed[1]["images"] == []


@pytest.mark.parametrize("html", ["<html></html>", '"projects":[{"title": broken', '"projects":[{"a":}]}]'])
def test_parse_seed_blob_gives_up_on_bad_input(html):
    assert extract.parse_seed_blob(html) is None


@pytest.mark.parametrize("meta, parts", [
    ("Sound Designer • 2021", ("Sound Designer", "2021")),
    ("Composer", ("Composer", "")),
    ("", ("", "")),
])
def test_split_meta(meta, parts):
    assert extract.split_meta(meta) == parts


def test_scrape_project_page():
    project = extract.scrape_project_page("flush", FLUSH_PAGE)
    assert project.title == "Flush"
    assert (project.role, project.year) == ("Sound Designer", "2023")
    assert project.poster == "/posters/flush.jpg"
    assert project.video_url == "https://player.vimeo.com/video/42"
    assert project.content == "Line one\nLine two"


def test_extract_contact_maps_crewunited():
    contact = extract.extract_contact(CONTACT_PAGE)
    assert contact["email"] == "gaston@example.com"
    assert contact["links"] == {
        "linkedin": "https://www.linkedin.com/in/gaston",
        "crew-united": "https://www.crew-united.com/gaston",
    }


def test_extract_contact_without_email():
    contact = extract.extract_contact("<p>nothing here</p>")
    assert contact == {"email": None, "emailUser": None, "emailDomain": None, "links": {}}


def test_extract_about_and_intro():
    assert extract.extract_about(ABOUT_PAGE) == "Gaston is a sound designer based in Berlin."
    assert extract.extract_home_intro(HOME_PAGE) == "Sound for film and art."
    assert extract.extract_about("<p></p>") == ""


def test_run_uses_seed_and_fills_from_pages(ws):
    write_doc(ws, "projects/index.html", SEED_INDEX)
    write_doc(ws, "projects/flush.html", FLUSH_PAGE)
    write_doc(ws, "about.html", ABOUT_PAGE)
    write_doc(ws, "contact.html", CONTACT_PAGE)
    store.save_site(ws, {"aboutText": "old", "sonidataSupport": {"title": "Sonidata"}})

    extract.run(ws)

    saved = read_projects(ws)
    assert [p["slug"] for p in saved] == ["out-of-body", "flush"]
    flush = saved[1]
    assert flush["poster"] == "/posters/flush.jpg"
    assert flush["videoUrl"] == "https://player.vimeo.com/video/42"
    assert flush["images"] == ["/galleries/flush/a.jpg", "/galleries/flush/b.jpg"]
    assert flush["content"] == "Short film"

    site = store.load_site(ws)
    assert site["aboutText"] == "Gaston is a sound designer based in Berlin."
    assert site["contact"]["emailDomain"] == "example.com"
    assert site["sonidataSupport"] == {"title": "Sonidata"}
    assert "homeIntro" not in site


def test_run_falls_back_to_project_pages(ws):
    write_doc(ws, "projects/index.html", "<html>no seed</html>")
    write_doc(ws, "projects/flush.html", FLUSH_PAGE)
    write_doc(ws, "projects/unknown.html", "<h1>Untitled</h1>")

    projects, _ = extract.run(ws)

    assert [(p.slug, p.year) for p in projects] == [("flush", "2023"), ("unknown", "")]
    assert projects[0].images == ["/galleries/flush/a.jpg", "/galleries/flush/b.jpg"]


def test_main_exits_without_docs(ws, monkeypatch):
    monkeypatch.setattr(extract.Workspace, "from_env", classmethod(lambda cls: ws))
    monkeypatch.setattr(extract, "setup_logging", lambda ws: None)
    with pytest.raises(SystemExit) as exc:
        extract.main()
    assert exc.value.code == 1
