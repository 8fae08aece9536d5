"""HTTP middleware: request size limit, request ID.

Applied in main app; order matters (first added = innermost).
"""

from doclibrary.middleware.request_id import RequestIDMiddleware
from doclibrary.middleware.request_limits import RequestSizeLimitMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
]
