"""NiceGUI pages for Regexly.

Import this module to register all page routes with NiceGUI.
"""

from regexly.pages import about, tester

__all__ = ["about", "tester"]

# Touch modules to prevent linter from removing "unused" imports.
# These imports register @ui.page decorators as a side effect.
_PAGES = (about, tester)
