"""Modal editing engine for a terminal Markdown note editor."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "errors",
    "filetree",
    "keymaps",
    "links",
    "modes",
    "navigation",
    "runtime",
    "services",
    "session",
]

__version__ = "0.1.0"
