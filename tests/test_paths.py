"""Unit tests for title and output-location derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitdown.errors import DirError, PageError
from sitdown.paths import classify_dir, classify_page


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("content/about.md", "about.html"),
        ("content/blog/post1.md", "blog/post1.html"),
        ("content/a/b/c/deep.markdown", "a/b/c/deep.html"),
        ("site_src/notes/today.txt", "notes/today.html"),
    ],
)
def test_page_location_strips_root_and_swaps_suffix(source: str, expected: str) -> None:
    """Only the first component is dropped, at any depth."""
    info = classify_page(Path(source))
    assert info.location.as_posix() == expected, (
        f"expected {source} to map to {expected}"
    )
    assert info.location.suffix == ".html", "page locations must end in .html"


def test_page_location_relative_to_explicit_root(tmp_path: Path) -> None:
    root = tmp_path / "content"
    info = classify_page(root / "blog" / "post1.md", root)
    assert info.location == Path("blog/post1.html")


def test_page_title_replaces_underscores() -> None:
    info = classify_page(Path("content/my_first_post.md"))
    assert info.title == "my first post"


def test_top_level_home_is_written_to_index() -> None:
    info = classify_page(Path("content/home.md"))
    assert info.location == Path("index.html"), "home.md should become index.html"
    assert info.title == "home", "the derived title keeps the file stem"


def test_nested_home_keeps_its_name() -> None:
    info = classify_page(Path("content/blog/home.md"))
    assert info.location == Path("blog/home.html")


def test_dir_location_is_unsuffixed() -> None:
    info = classify_dir(Path("content/travel_notes/2024"))
    assert info.location == Path("travel_notes/2024")
    assert info.title == "2024"


def test_content_root_maps_to_output_root() -> None:
    info = classify_dir(Path("content"))
    assert info.location == Path(), "the content root is the output root"
    assert info.title == "content"


def test_undecodable_page_name_is_a_page_error() -> None:
    bad = Path("content/caf\udce9.md")
    with pytest.raises(PageError) as excinfo:
        classify_page(bad)
    assert excinfo.value.path == bad


def test_undecodable_dir_name_is_a_dir_error() -> None:
    with pytest.raises(DirError):
        classify_dir(Path("content/\udcff"))
