"""Cyclopts CLI entrypoint for building sitdown sites.

The ``sitdown`` console script defined here builds a site from its
``sitdown.toml``, scaffolds new sites and removes generated files. Typical
usage is ``sitdown new blog`` once, then ``sitdown generate`` from inside the
site directory after every edit.

Examples
--------
Build the site described by ``./sitdown.toml``:

>>> from sitdown.cli import main
>>> main()  # doctest: +SKIP

Build a site living elsewhere with debug logging:

>>> from sitdown.cli import app
>>> app(["generate", "--config", "blog/sitdown.toml", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import CONFIG_FILENAME
from .config import load_site_config
from .errors import RenderError, SitdownError
from .scaffold import create_site
from .site import SiteBuilder, clear_directory

if typ.TYPE_CHECKING:
    from .config import SiteConfig

DEFAULT_CONFIG = Path(CONFIG_FILENAME)

app = App(name="sitdown", config=cyclopts.config.Env("SITDOWN_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to sitdown.toml", env_var="SITDOWN_CONFIG")
]
VerboseFlag = typ.Annotated[bool, Parameter(help="Log every pipeline step")]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config: Path) -> SiteConfig:
    """Load ``config`` with directories anchored at the file's folder."""
    return load_site_config(config).relative_to(config.parent)


def _fail(exc: SitdownError) -> typ.NoReturn:
    if isinstance(exc, RenderError):
        for path in exc.report.written:
            print(f"wrote {_format_path(path)}")
    print(f"error: {exc}", file=sys.stderr)
    raise SystemExit(1) from exc


@app.command(help="Build the site: annotate, stage and render every page.")
def generate(
    *, config: ConfigOption = DEFAULT_CONFIG, verbose: VerboseFlag = False
) -> None:
    """Build the site described by ``config`` and print each written file.

    Parameters
    ----------
    config : Path, optional
        Path to ``sitdown.toml`` (overridable via ``SITDOWN_CONFIG``). A
        missing file means every setting takes its default, resolved from the
        file's folder.
    verbose : bool, optional
        Log per-node progress at DEBUG level.

    Raises
    ------
    SystemExit
        With status 1 when the build fails; the message names each failing
        path.
    """
    _configure_logging(verbose=verbose)
    try:
        written = SiteBuilder(_load(config)).run()
    except SitdownError as exc:
        _fail(exc)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Create a minimal new site in a directory called NAME.")
def new(name: str, *, verbose: VerboseFlag = False) -> None:
    """Scaffold a site with content, templates and a stylesheet."""
    _configure_logging(verbose=verbose)
    try:
        created = create_site(Path(name))
    except SitdownError as exc:
        _fail(exc)
    for path in created:
        print(f"created {_format_path(path)}")


@app.command(help="Remove the generated output and working directories.")
def clean(
    *, config: ConfigOption = DEFAULT_CONFIG, verbose: VerboseFlag = False
) -> None:
    """Delete ``output_dir`` and ``working_dir`` from the site configuration."""
    _configure_logging(verbose=verbose)
    try:
        site_config = _load(config)
        for path in (site_config.output_dir, site_config.working_dir):
            if path.exists():
                clear_directory(path)
                print(f"removed {_format_path(path)}")
    except SitdownError as exc:
        _fail(exc)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``sitdown`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
