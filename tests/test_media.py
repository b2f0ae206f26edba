import subprocess

import pytest

from portfolio_site import media
from portfolio_site.models import MediaKind, PathKind


def touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


@pytest.fixture
def dims(monkeypatch):
    """Pretend ffprobe reports the given WxH (None -> ffprobe failure)."""
    def set_dims(value):
        def fake_check_output(cmd, **kwargs):
            if value is None:
                raise subprocess.CalledProcessError(1, cmd)
            return f"{value[0]}x{value[1]}\n"
        monkeypatch.setattr("portfolio_site.media.subprocess.check_output", fake_check_output)
    return set_dims


@pytest.mark.parametrize("raw, clean", [
    ("'/Users/me/My Poster.png'", "/Users/me/My Poster.png"),
    ('"/tmp/a b.jpg"', "/tmp/a b.jpg"),
    ("  /posters/x.jpg  ", "/posters/x.jpg"),
    ("'mismatched\"", "'mismatched\""),
    ("", ""),
])
def test_strip_quotes(raw, clean):
    assert media.strip_quotes(raw) == clean


@pytest.mark.parametrize("name, clean", [
    ("Out of Body", "out-of-body"),
    ("--Still_01--", "still_01"),
    ("IMG 2041 (edit)", "img-2041-edit"),
    ("", ""),
])
def test_sanitize_name(name, clean):
    assert media.sanitize_name(name) == clean


def test_ensure_jpeg_path():
    assert media.ensure_jpeg_path("/posters/a.jpeg") == "/posters/a.jpeg"
    assert media.ensure_jpeg_path("/posters/a.JPG") == "/posters/a.JPG"
    assert media.ensure_jpeg_path("/posters/a.png") == "/posters/a.jpg"
    assert media.ensure_jpeg_path("/posters/a") == "/posters/a.jpg"


def test_classify_path(ws, tmp_path):
    touch(ws.public_dir / "posters" / "flush.jpg")
    outside = touch(tmp_path / "incoming" / "still.png")

    assert media.classify_path(ws, "") == (PathKind.NONE, None)
    assert media.classify_path(ws, "/posters/flush.jpg") == \
        (PathKind.PUBLIC, ws.public_dir / "posters" / "flush.jpg")
    assert media.classify_path(ws, f"'{outside}'") == (PathKind.FILE, outside)
    assert media.classify_path(ws, "incoming/still.png") == (PathKind.FILE, outside)
    assert media.classify_path(ws, "/posters/missing.jpg") == (PathKind.MISSING, None)


def test_approx_is_aspect():
    assert media.approx_is_aspect(800, 1000, 4, 5)
    assert media.approx_is_aspect(1080, 1349, 4, 5, tolerance_px=5)
    assert not media.approx_is_aspect(1080, 1349, 4, 5, tolerance_px=2)
    assert not media.approx_is_aspect(1920, 1080, 4, 5)


@pytest.mark.parametrize("value, kind", [
    ("", MediaKind.NONE),
    (None, MediaKind.NONE),
    ("https://player.vimeo.com/video/123", MediaKind.URL),
    ("/videos/flush-teaser.mp4", MediaKind.VIDEO_FILE),
    ("https://www.instagram.com/reel/abc123/", MediaKind.INSTAGRAM),
    ('<blockquote class="instagram-media"></blockquote>', MediaKind.EMBED),
])
def test_media_kind(value, kind):
    assert media.media_kind(value) == kind


def test_probe_dimensions(ws, dims):
    dims((1080, 1350))
    assert media.probe_dimensions(ws.root / "x.jpg") == (1080, 1350)
    dims(None)
    assert media.probe_dimensions(ws.root / "x.jpg") is None


def test_helper_failure_returns_false(ws, monkeypatch):
    def boom(cmd, check=False, **kwargs):
        raise subprocess.CalledProcessError(2, cmd)
    monkeypatch.setattr("portfolio_site.media.subprocess.run", boom)
    assert media.run_compress(ws, ws.root / "a.jpg", ws.root / "b.jpg") is False


def test_dry_run_skips_helpers(ws, helper_calls):
    ws.dry_run = True
    assert media.run_make_poster(ws, ws.root / "a.jpg", ws.root / "b.jpg") is True
    assert helper_calls == []


def test_normalize_poster_from_file_makes_poster(ws, tmp_path, helper_calls):
    src = touch(tmp_path / "drop" / "Poster Final.png")

    out = media.normalize_poster(ws, "Out of Body", f"'{src}'")

    assert out == "/posters/out-of-body.jpg"
    assert helper_calls == [[
        str(ws.make_poster), str(src), str(ws.public_dir / "posters" / "out-of-body.jpg"),
        "4:5", "4", "1400",
    ]]
    assert (ws.public_dir / "posters").is_dir()


def test_public_poster_with_right_aspect_is_only_compressed(ws, helper_calls, dims):
    touch(ws.public_dir / "posters" / "flush.png")
    dims((800, 1000))

    out = media.normalize_poster(ws, "flush", "/posters/flush.png")

    assert out == "/posters/flush.jpg"
    assert helper_calls[0][0] == str(ws.compress_image)
    assert helper_calls[0][3] == "1400"


def test_public_poster_with_wrong_aspect_is_cropped(ws, helper_calls, dims):
    touch(ws.public_dir / "posters" / "flush.jpg")
    dims((1920, 1080))

    assert media.normalize_poster(ws, "flush", "/posters/flush.jpg") == "/posters/flush.jpg"
    assert helper_calls[0][0] == str(ws.make_poster)


def test_public_poster_with_unknown_dims_is_cropped(ws, helper_calls, dims):
    touch(ws.public_dir / "posters" / "flush.jpg")
    dims(None)

    media.normalize_poster(ws, "flush", "/posters/flush.jpg")
    assert helper_calls[0][0] == str(ws.make_poster)


def test_missing_poster_passes_through(ws, helper_calls):
    assert media.normalize_poster(ws, "flush", "/posters/nope.jpg") == "/posters/nope.jpg"
    assert helper_calls == []


def test_gallery_public_jpeg_compressed_in_place(ws, helper_calls):
    img = touch(ws.public_dir / "galleries" / "flush" / "still-01.jpg")

    assert media.normalize_gallery_image(ws, "flush", "/galleries/flush/still-01.jpg", 0) == \
        "/galleries/flush/still-01.jpg"
    assert helper_calls == [[str(ws.compress_image), str(img), str(img), "1600", "4"]]


def test_gallery_file_is_compressed_into_slug_folder(ws, tmp_path, helper_calls):
    src = touch(tmp_path / "stills" / "Still 02.TIF")

    out = media.normalize_gallery_image(ws, "Warm Decembers", str(src), 1)

    assert out == "/galleries/warm-decembers/still-02.jpg"
    assert helper_calls[0][2] == str(ws.public_dir / "galleries" / "warm-decembers" / "still-02.jpg")


def test_gallery_missing_passes_through(ws, helper_calls):
    assert media.normalize_gallery_image(ws, "flush", "nope.jpg", 0) == "nope.jpg"
    assert helper_calls == []


def test_maybe_compress_gallery_image_only_touches_jpeg(ws, helper_calls):
    touch(ws.public_dir / "galleries" / "a.png")
    touch(ws.public_dir / "galleries" / "b.jpg")
    media.maybe_compress_gallery_image(ws, "/galleries/a.png")
    assert helper_calls == []
    media.maybe_compress_gallery_image(ws, "/galleries/b.jpg")
    assert len(helper_calls) == 1


def test_normalize_video(ws, tmp_path):
    touch(ws.public_dir / "videos" / "teaser.mp4")
    src = tmp_path / "Exports" / "Final Mix.MOV"
    src.parent.mkdir(parents=True)
    src.write_bytes(b"video")

    assert media.normalize_video(ws, "flush", "/videos/teaser.mp4") == "/videos/teaser.mp4"
    assert media.normalize_video(ws, "flush", "https://vimeo.com/1") == "https://vimeo.com/1"

    out = media.normalize_video(ws, "flush", str(src))
    assert out == "/videos/flush-final-mix.mov"
    assert (ws.public_dir / "videos" / "flush-final-mix.mov").read_bytes() == b"video"


def test_list_folder_images(tmp_path):
    for name in ("b.JPG", "a.png", "notes.txt", "c.webp"):
        touch(tmp_path / name)
    assert [p.name for p in media.list_folder_images(tmp_path)] == ["a.png", "b.JPG", "c.webp"]
