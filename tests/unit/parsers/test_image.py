"""Unit tests for the image and gallery parser."""

import pytest

from wikidoc.config import config
from wikidoc.parsers.image import is_file_link, parse_gallery, parse_image, parse_images
from wikidoc.parsers.types import Image


class TestParseImage:
    """Tests for [[File:...]] links."""

    @pytest.mark.unit
    def test_options_alt_and_caption(self) -> None:
        """Should drop display options and keep alt text and caption."""
        image = parse_image("[[File:Toronto.jpg|thumb|220px|alt=Skyline|The [[CN Tower]] at night]]")
        assert image is not None
        assert image.file == "File:Toronto.jpg"
        assert image.alt == "Skyline"
        assert image.caption is not None
        assert image.caption.text == "The CN Tower at night"
        assert image.links()[0].page == "CN Tower"

    @pytest.mark.unit
    def test_no_caption(self) -> None:
        """Should leave the caption empty when only options follow."""
        image = parse_image("[[Image:Map.png|left|upright=1.2|200px]]")
        assert image is not None
        assert image.caption is None
        assert image.alt is None

    @pytest.mark.unit
    def test_localized_namespace(self) -> None:
        """Should accept localized file namespaces."""
        assert is_file_link("[[Datei:Berlin.jpg|mini]]")
        assert is_file_link("[[ file : Toronto.jpg]]")

    @pytest.mark.unit
    def test_plain_link_is_not_an_image(self) -> None:
        """Should return None for a non-file link."""
        assert parse_image("[[Toronto]]") is None


class TestParseImages:
    """Tests for extracting images from paragraph text."""

    @pytest.mark.unit
    def test_removes_file_links_only(self) -> None:
        """Should remove file links and leave other links in place."""
        images, rest = parse_images("Text [[File:A.jpg|thumb|Cap]] more [[Toronto]].")
        assert [image.file for image in images] == ["File:A.jpg"]
        assert rest == "Text  more [[Toronto]]."

    @pytest.mark.unit
    def test_gallery(self) -> None:
        """Should read one image per gallery line."""
        images, rest = parse_gallery("Before<gallery mode=packed>\nFile:A.jpg|First\nB.jpg\n</gallery>After")
        assert [image.file for image in images] == ["File:A.jpg", "File:B.jpg"]
        assert images[0].caption is not None
        assert images[0].caption.text == "First"
        assert images[1].caption is None
        assert rest == "BeforeAfter"


class TestImageUrls:
    """Tests for media server URLs."""

    @pytest.mark.unit
    def test_filename(self) -> None:
        """Should drop the namespace, capitalize and use underscores."""
        assert Image(file="File:the tower.jpg").filename() == "The_tower.jpg"
        assert Image(file="tower.jpg").filename() == "Tower.jpg"

    @pytest.mark.unit
    def test_url_uses_hashed_path(self) -> None:
        """Should place the file under its two-level hash directory."""
        url = Image(file="File:The tower.jpg").url()
        assert url.startswith(config.image_base_url + "/")
        first, second, name = url.rsplit("/", 3)[1:]
        assert len(first) == 1
        assert len(second) == 2
        assert second.startswith(first)
        assert name == "The_tower.jpg"

    @pytest.mark.unit
    def test_thumbnail_width(self) -> None:
        """Should use the configured width unless one is given."""
        image = Image(file="File:The tower.jpg")
        assert image.thumbnail().endswith(f"/{config.thumbnail_width}px-The_tower.jpg")
        assert image.thumbnail(120).endswith("/120px-The_tower.jpg")
        assert "/thumb/" in image.thumbnail()

    @pytest.mark.unit
    def test_to_dict(self) -> None:
        """Should include URLs and only the set optional fields."""
        data = Image(file="File:A.jpg", alt="An A").to_dict()
        assert data["file"] == "File:A.jpg"
        assert data["alt"] == "An A"
        assert "caption" not in data
        assert data["url"].endswith("/A.jpg")
