"""Dotview — live-updating Graphviz DOT previewer.

Watches a single DOT file and re-renders it in the browser whenever it
changes on disk.  A background watcher refreshes the current snapshot and
signals every open SSE connection; the page refetches and re-renders.

Quick start::

    import dotview

    dotview.preview("graph.dot")      # Live preview on an OS-chosen port
    dotview.display("graph.dot")      # Print the file and exit

Pipeline::

    disk write -> ChangeWatcher -> ContentStore -> NotificationBus -> /dot-events

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "DotviewConfig",
    "__version__",
    "display",
    "preview",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import dotview`` fast; Chirp and watchfiles are only imported
    when a preview is actually started.
    """
    if name == "DotviewConfig":
        from dotview.config import DotviewConfig

        return DotviewConfig

    if name == "display":
        from dotview.app import display

        return display

    if name == "preview":
        from dotview.app import preview

        return preview

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
