"""NiceGUI pages for CourseHub.

Import this module to register all page routes with NiceGUI.
"""

from coursehub.pages import hub, views

__all__ = ["hub", "views"]

# Touch modules to prevent linter from removing "unused" imports.
# These imports register @ui.page and @screen_view decorators as a side effect.
_PAGES = (hub, views)
