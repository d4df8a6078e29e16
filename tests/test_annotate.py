"""Tests for annotating a raw content tree."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from sitdown.config import MarkdownOptions, PageDefaults
from sitdown.errors import (
    AnnotationError,
    DirError,
    FrontMatterError,
    OutputConflictError,
    PageError,
)
from sitdown.pipeline import PageInfo, annotate, annotate_page
from sitdown.tree import Dir, Page, load

if typ.TYPE_CHECKING:
    from conftest import SiteWriter

DEFAULTS = PageDefaults(template="page")
OPTIONS = MarkdownOptions()


def _annotate_one(root: Path, name: str, text: str) -> PageInfo:
    source = root / "content" / name
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text(text, encoding="utf-8")
    return annotate_page(source, root / "content", DEFAULTS, OPTIONS)


def test_derived_title_and_default_template(tmp_path: Path) -> None:
    info = _annotate_one(tmp_path, "my_post.md", "Body\n")
    assert info.title == "my post"
    assert info.template == "page", "the configured default template applies"
    assert info.location == Path("my_post.html")
    assert info.meta == {}
    assert "<p>Body</p>" in info.content


def test_front_matter_overrides_title_and_template(tmp_path: Path) -> None:
    info = _annotate_one(
        tmp_path,
        "my_post.md",
        "---\ntitle: Hello\ntemplate: special\nauthor: Ada\n---\nBody\n",
    )
    assert info.title == "Hello", "explicit front matter wins over derived title"
    assert info.template == "special"
    assert info.meta == {"author": "Ada"}, "custom keys are preserved verbatim"


def test_layout_is_an_alias_for_template(tmp_path: Path) -> None:
    info = _annotate_one(tmp_path, "post.md", "---\nlayout: wide\n---\nBody\n")
    assert info.template == "wide"
    assert "layout" not in info.meta


def test_scalar_title_is_stringified(tmp_path: Path) -> None:
    info = _annotate_one(tmp_path, "year.md", "---\ntitle: 2024\n---\n")
    assert info.title == "2024"


def test_explicit_location(tmp_path: Path) -> None:
    info = _annotate_one(
        tmp_path, "blog/post.md", "---\nlocation: archive/old.htm\n---\n"
    )
    assert info.location == Path("archive/old.html"), "location forces .html"


@pytest.mark.parametrize("value", ["/etc/passwd", "../outside.html"])
def test_escaping_location_is_rejected(tmp_path: Path, value: str) -> None:
    with pytest.raises(FrontMatterError):
        _annotate_one(tmp_path, "post.md", f"---\nsave: {value}\n---\n")


def test_container_title_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(FrontMatterError):
        _annotate_one(tmp_path, "post.md", "---\ntitle: [a, b]\n---\n")


def test_annotate_maps_whole_tree(write_site: SiteWriter) -> None:
    root = write_site(
        {
            "content/home.md": "Home\n",
            "content/travel_notes/paris.md": "---\ntitle: Paris!\n---\n",
        }
    )
    raw = load(root / "content")
    annotated = annotate(raw, DEFAULTS, OPTIONS)

    assert annotated.shape() == raw.shape(), "annotation keeps the tree topology"
    assert annotated.data.location == Path()
    assert annotated.pages[0].data.location == Path("index.html")
    section = annotated.dirs[0]
    assert section.data.title == "travel notes"
    assert section.data.location == Path("travel_notes")
    assert section.pages[0].data.title == "Paris!"
    assert section.pages[0].data.location == Path("travel_notes/paris.html")


def test_annotate_collects_every_failure(write_site: SiteWriter) -> None:
    root = write_site(
        {
            "content/good.md": "fine\n",
            "content/bad_one.md": "---\n- list\n---\n",
            "content/sub/bad_two.md": "---\ncontent: reserved\n---\n",
        }
    )
    content = root / "content"
    raw = load(content)
    raw.pages.append(Page(content / "caf\udce9.md"))

    with pytest.raises(AnnotationError) as excinfo:
        annotate(raw, DEFAULTS, OPTIONS)

    failures = excinfo.value.failures
    assert len(failures) == 3, "every failing node must be reported"
    kinds = sorted(type(failure).__name__ for failure in failures)
    assert kinds == ["ContentIOError", "FrontMatterError", "FrontMatterError"]
    assert "bad_one.md" in str(excinfo.value)
    assert "bad_two.md" in str(excinfo.value)


def test_undecodable_dir_name_is_reported(tmp_path: Path) -> None:
    raw: Dir[Path, Path] = Dir(tmp_path, [], [Dir(tmp_path / "sub\udcff")])
    with pytest.raises(AnnotationError) as excinfo:
        annotate(raw, DEFAULTS, OPTIONS)
    assert [type(failure) for failure in excinfo.value.failures] == [DirError]


def test_undecodable_page_name_is_reported(tmp_path: Path) -> None:
    content = tmp_path / "content"
    content.mkdir()
    source = content / "caf\udce9.md"
    try:
        source.write_text("Body\n", encoding="utf-8")
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem rejects undecodable filenames")

    with pytest.raises(AnnotationError) as excinfo:
        annotate(load(content), DEFAULTS, OPTIONS)
    failure = excinfo.value.failures[0]
    assert isinstance(failure, PageError), "the filename, not the body, is at fault"
    assert failure.path == source


def test_home_and_index_conflict_is_reported(write_site: SiteWriter) -> None:
    root = write_site({"content/home.md": "Home\n", "content/index.md": "Index\n"})
    content = root / "content"

    with pytest.raises(AnnotationError) as excinfo:
        annotate(load(content), DEFAULTS, OPTIONS)

    [failure] = excinfo.value.failures
    assert isinstance(failure, OutputConflictError)
    assert failure.location == Path("index.html")
    assert {failure.path, failure.other} == {content / "home.md", content / "index.md"}
    assert "home.md" in str(excinfo.value), "both sources should be named"
    assert "index.md" in str(excinfo.value)


def test_explicit_location_conflict_is_reported(write_site: SiteWriter) -> None:
    root = write_site(
        {
            "content/about.md": "About\n",
            "content/blog/copy.md": "---\nlocation: about.html\n---\n",
        }
    )
    with pytest.raises(AnnotationError) as excinfo:
        annotate(load(root / "content"), DEFAULTS, OPTIONS)

    [failure] = excinfo.value.failures
    assert isinstance(failure, OutputConflictError)
    assert failure.path == root / "content" / "blog" / "copy.md"
    assert failure.other == root / "content" / "about.md"


def test_same_stem_different_suffix_conflicts(write_site: SiteWriter) -> None:
    root = write_site({"content/a.md": "A\n", "content/a.txt": "A again\n"})
    with pytest.raises(AnnotationError) as excinfo:
        annotate(load(root / "content"), DEFAULTS, OPTIONS)
    assert [type(f) for f in excinfo.value.failures] == [OutputConflictError]


@pytest.mark.parametrize(("value", "expected"), [("true", "true"), ("no", "no")])
def test_boolean_title_keeps_yaml_spelling(
    tmp_path: Path, value: str, expected: str
) -> None:
    info = _annotate_one(tmp_path, "flag.md", f"---\ntitle: {value}\n---\n")
    assert info.title == expected, "booleans should not use Python's spelling"
