"""Static site generator for Metamath formalization blueprints.

A content root holds one directory per project and one front-matter annotated
markdown file per item; the build renders every item, every project page and
a clickable dependency diagram per project.
"""

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.errors import BlueprintError, ErrorKind

__all__ = ["BlueprintError", "BuildConfig", "ErrorKind"]

__version__ = "0.1.0"
