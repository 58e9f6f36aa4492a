import zipfile
from io import BytesIO

import pytest
from jinja2 import TemplateNotFound

from snig.archive import archive_directory, format_bytes
from snig.config import GalleryConfig, parse_force
from snig.errors import ConfigError
from snig.render import PageRenderer


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (-4, "0 B"),
        (999, "999 B"),
        (1000, "1.0 KB"),
        (1500, "1.5 KB"),
        (10_000, "10 KB"),
        (1_000_000, "1.0 MB"),
        (2_340_000_000, "2.3 GB"),
    ],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_archive_is_recursive_with_relative_paths(tmp_path):
    (tmp_path / "a.jpg").write_bytes(b"a")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_bytes(b"bb")

    with zipfile.ZipFile(BytesIO(archive_directory(tmp_path))) as z:
        assert sorted(z.namelist()) == ["a.jpg", "sub/b.txt"]
        assert z.read("sub/b.txt") == b"bb"


def test_parse_force():
    assert parse_force(["resize,zip"]) == {"resize", "zip"}
    assert parse_force(["ZIP", "resize zip"]) == {"resize", "zip"}
    assert parse_force(None) == frozenset()


def test_config_defaults(tmp_path):
    config = GalleryConfig(input_dir=str(tmp_path / "Summer/"), output_dir=tmp_path / "out")
    assert config.name == "Summer"
    assert config.thumbnail_size == 200
    assert config.detail_size == 1000
    assert config.sort_by == "created"
    assert not config.force_resize and not config.force_zip
    config.validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sort_by": "size"},
        {"thumbnail_size": 0},
        {"detail_size": -1},
        {"force": frozenset({"everything"})},
    ],
)
def test_config_validation(tmp_path, kwargs):
    config = GalleryConfig(input_dir=tmp_path, output_dir=tmp_path / "out", **kwargs)
    with pytest.raises(ConfigError):
        config.validate()


def link(name):
    return {"basename": name, "html_file": name.lower().replace(".jpg", ".html"), "url_for": lambda f: f"{f}_{name}"}


def test_page_is_wrapped_in_layout():
    image = link("B.jpg")
    image.update(position=2, captured_display=None, camera_model="<Cam>", previous=link("a.jpg"), next=link("c.jpg"))
    html = PageRenderer().render(
        "page", {"image": image, "collection": {"name": "Trip", "size": 3}, "version": "1.0"}
    ).decode("utf-8")

    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Trip</title>" in html
    assert "002 / 003" in html
    assert 'href="a.html" title="previous"' in html
    assert 'href="orig_B.jpg" download' in html
    assert 'src="preview_B.jpg"' in html
    assert "&lt;Cam&gt;" in html
    assert "1.0" in html


def test_unknown_template():
    with pytest.raises(TemplateNotFound):
        PageRenderer().render("missing", {})
