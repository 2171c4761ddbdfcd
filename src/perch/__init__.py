"""Perch: resolve and serve developer-tools frontend resources.

Translates a request URL into frontend bytes from the bundled resource
set or a local override directory, without blocking the caller on file
I/O.

Basic usage::

    from perch import FrontendConfig, MemoryBundle, ResourceRouter

    router = ResourceRouter(
        MemoryBundle.from_directory("out/frontend"),
        FrontendConfig.from_command_line(),
    )
    resolution = await router.resolve("devtools://devtools/bundled/inspector.html")

Behind an ASGI server::

    from perch import FrontendApp

    app = FrontendApp(router)
"""

__version__ = "0.1.0"
__all__ = [
    "Bundle",
    "ConfigurationError",
    "FileOverride",
    "FrontendApp",
    "FrontendConfig",
    "MemoryBundle",
    "NOT_FOUND_RESPONSE",
    "NoOverride",
    "Outcome",
    "PathTraversalError",
    "PerchError",
    "RemoteOverride",
    "Resolution",
    "ResourceRouter",
    "mime_type_for_url",
    "path_without_params",
    "strip_serve_markers",
]

# name -> module that defines it
_LAZY_IMPORTS: dict[str, str] = {
    "Bundle": "perch.bundle",
    "MemoryBundle": "perch.bundle",
    "FileOverride": "perch.config",
    "FrontendConfig": "perch.config",
    "NoOverride": "perch.config",
    "RemoteOverride": "perch.config",
    "ConfigurationError": "perch.errors",
    "PathTraversalError": "perch.errors",
    "PerchError": "perch.errors",
    "FrontendApp": "perch.app",
    "NOT_FOUND_RESPONSE": "perch.files",
    "mime_type_for_url": "perch.mime",
    "path_without_params": "perch.paths",
    "strip_serve_markers": "perch.paths",
    "Outcome": "perch.router",
    "Resolution": "perch.router",
    "ResourceRouter": "perch.router",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
