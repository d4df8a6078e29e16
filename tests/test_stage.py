"""Tests for staging annotated metadata into the working directory."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from sitdown._constants import DIR_MARKER
from sitdown.config import MarkdownOptions, PageDefaults
from sitdown.errors import MetadataError, StagingError
from sitdown.pipeline import (
    DirInfo,
    PageInfo,
    annotate,
    read_dir_record,
    read_page_record,
    stage,
)
from sitdown.tree import Dir, Page, load

if typ.TYPE_CHECKING:
    from conftest import SiteWriter


@pytest.fixture
def annotated(blog_site: Path) -> Dir[DirInfo, PageInfo]:
    raw = load(blog_site / "content")
    return annotate(raw, PageDefaults(template="page"), MarkdownOptions())


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_stage_writes_one_file_per_node(
    annotated: Dir[DirInfo, PageInfo], tmp_path: Path
) -> None:
    working = tmp_path / ".sitdown"
    staged = stage(annotated, working)

    assert set(_snapshot(working)) == {
        DIR_MARKER,
        "index.yaml",
        f"blog/{DIR_MARKER}",
        "blog/post1.yaml",
        "blog/post2.yaml",
    }
    assert staged.shape() == annotated.shape()
    assert staged.data.path == working
    post1 = staged.dirs[0].pages[0].data
    assert post1.path == working / "blog" / "post1.yaml"
    assert post1.location == Path("blog/post1.html")
    assert post1.template == "page"


def test_staged_records_round_trip(
    annotated: Dir[DirInfo, PageInfo], tmp_path: Path
) -> None:
    staged = stage(annotated, tmp_path / "work")

    for original, ref in zip(
        annotated.iter_pages(), staged.iter_pages(), strict=True
    ):
        assert read_page_record(ref.data.path) == original.data, (
            f"staged record for {ref.data.location} should match annotation"
        )
    for original_dir, staged_dir in zip(annotated.walk(), staged.walk(), strict=True):
        assert read_dir_record(staged_dir.data.path) == original_dir.data


def test_custom_metadata_survives_staging(
    annotated: Dir[DirInfo, PageInfo], tmp_path: Path
) -> None:
    staged = stage(annotated, tmp_path / "work")
    post2 = read_page_record(staged.dirs[0].pages[1].data.path)
    assert post2.meta == {"author": "Ada", "tags": ["a", "b"]}


def test_restaging_is_byte_identical(
    annotated: Dir[DirInfo, PageInfo], tmp_path: Path
) -> None:
    working = tmp_path / "work"
    stage(annotated, working)
    first = _snapshot(working)
    stage(annotated, working)
    assert _snapshot(working) == first, "staging twice must produce identical files"


def test_malformed_record_is_a_metadata_error(tmp_path: Path) -> None:
    record = tmp_path / "broken.yaml"
    record.write_text("title: [unclosed\n", encoding="utf-8")
    with pytest.raises(MetadataError):
        read_page_record(record)

    record.write_text("title: only a title\n", encoding="utf-8")
    with pytest.raises(MetadataError) as excinfo:
        read_page_record(record)
    assert excinfo.value.path == record


def test_unwritable_working_dir_is_a_staging_error(write_site: SiteWriter) -> None:
    root = write_site({"blocker": "a file where a directory should be"})
    tree: Dir[DirInfo, PageInfo] = Dir(
        DirInfo(title="content", location=Path()),
        [Page(PageInfo(template="page", location=Path("a.html"), title="a"))],
    )
    with pytest.raises(StagingError) as excinfo:
        stage(tree, root / "blocker" / "work")
    assert excinfo.value.path == root / "blocker" / "work"
