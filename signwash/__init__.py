"""Top-level package for signwash.

This package normalizes legacy `&` color/format escapes in user-authored sign
text into the display layer's canonical `§` form. The main entry points are
`SignTextSanitizer` and `init_plugin`.
"""

from .sanitizer import SignTextSanitizer, init_plugin

__all__ = ["SignTextSanitizer", "init_plugin", "__version__"]

__version__ = "0.1.0"
