"""Common literal values used across sitdown.

These constants keep filenames, suffixes, and reserved metadata keys
centralized so the stager, the render traverser, and tests agree on the
working-directory layout. Intended for internal use within the sitdown
package.

Examples
--------
>>> from sitdown import _constants
>>> _constants.DIR_MARKER.startswith(".")
True
>>> _constants.STAGED_SUFFIX
'.yaml'
"""

CONFIG_FILENAME = "sitdown.toml"

OUTPUT_SUFFIX = ".html"
STAGED_SUFFIX = ".yaml"

# Hidden names are never loaded from the content tree, so a dot-prefixed
# marker cannot collide with a staged page.
DIR_MARKER = ".sitdown-dir.yaml"

HOME_STEM = "home"
INDEX_STEM = "index"

CONTENT_KEY = "content"
RESERVED_CONTEXT_KEYS = frozenset({"root", "parent"})
TITLE_KEYS = ("title",)
TEMPLATE_KEYS = ("template", "layout")
LOCATION_KEYS = ("location", "save")
