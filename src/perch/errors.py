"""Perch exception hierarchy.

Shared across the router, file collaborator, and configuration so every
module raises and catches the same types.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when frontend configuration is invalid.

    Raised at construction time, before any request is served.
    """


class PathTraversalError(PerchError):
    """A resolved file path escaped its override root.

    Never caught inside perch. A normalized path that still leaves the
    root means crafted input met a normalizer defect, and the request
    must fail loudly instead of reading outside the root.
    """

    def __init__(self, root: object, path: object) -> None:
        self.root = root
        self.path = path
        super().__init__(f"{path} is not contained in {root}")
