"""Site generation: page rendering, the one-shot build and watch mode."""

from metamath_blueprints.site.build import build_site
from metamath_blueprints.site.nav import NavigationIndex
from metamath_blueprints.site.render import PageRenderer

__all__ = ["NavigationIndex", "PageRenderer", "build_site"]
