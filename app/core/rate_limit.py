"""
Simple in-memory rate limiters for the public API.

One sliding-window limiter per category (general traffic, blog writes, blog
type writes, landing page, page content), each counting requests per client
address. Limiters are created by the app factory and live on ``app.state``;
routes pull them in through the ``rate_limit`` dependency.
"""
import threading
import time
from collections import defaultdict
from typing import Callable, Dict, Tuple

from fastapi import Request

from app.core.config import Settings
from app.core.context import get_client_ip
from app.core.errors import RateLimitExceeded
from app.core.logging_config import get_logger

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

GENERAL = "general"
BLOG_WRITE = "blog_write"
BLOG_TYPE_WRITE = "blog_type_write"
LANDING_PAGE = "landing_page"
PAGE_CONTENT = "page_content"

# Error code returned when a category's quota is exhausted
CATEGORY_CODES = {
    GENERAL: "RATE_LIMIT_EXCEEDED",
    BLOG_WRITE: "BLOG_WRITE_RATE_LIMIT_EXCEEDED",
    BLOG_TYPE_WRITE: "BLOG_TYPE_WRITE_RATE_LIMIT_EXCEEDED",
    LANDING_PAGE: "LANDING_PAGE_RATE_LIMIT_EXCEEDED",
    PAGE_CONTENT: "PAGE_CONTENT_RATE_LIMIT_EXCEEDED",
}


class RateLimiter:
    """
    In-memory rate limiter using sliding window algorithm.
    For production with multiple workers, use Redis-based solution.
    """

    def __init__(self, max_requests: int = 100, window_seconds: int = 900):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        # {ip: [timestamp, ...]}
        self._requests: Dict[str, list] = defaultdict(list)
        self._lock = threading.Lock()

    def _cleanup_old_requests(self, ip: str):
        """Remove requests older than the window."""
        cutoff = time.time() - self.window_seconds
        self._requests[ip] = [ts for ts in self._requests[ip] if ts > cutoff]

    def is_rate_limited(self, ip: str) -> Tuple[bool, int]:
        """
        Check if IP is rate limited.
        Returns (is_limited, retry_after_seconds)
        """
        self._cleanup_old_requests(ip)

        hits = self._requests[ip]
        if len(hits) >= self.max_requests:
            retry_after = int(hits[0] + self.window_seconds - time.time()) + 1
            return True, max(retry_after, 1)

        return False, 0

    def record_request(self, ip: str):
        """Record a request from an IP."""
        self._requests[ip].append(time.time())

    def hit(self, ip: str) -> Tuple[bool, int]:
        """Check and record in one step. Rejected requests are not counted."""
        with self._lock:
            is_limited, retry_after = self.is_rate_limited(ip)
            if not is_limited:
                self.record_request(ip)
        return is_limited, retry_after

    def clear(self):
        with self._lock:
            self._requests.clear()


def build_rate_limiters(settings: Settings) -> Dict[str, RateLimiter]:
    """Create one limiter per category from the configured quotas."""
    window = settings.RATE_LIMIT_WINDOW_SECONDS
    return {
        GENERAL: RateLimiter(settings.RATE_LIMIT_GENERAL, window),
        BLOG_WRITE: RateLimiter(settings.RATE_LIMIT_BLOG_WRITE, window),
        BLOG_TYPE_WRITE: RateLimiter(settings.RATE_LIMIT_BLOG_TYPE_WRITE, window),
        LANDING_PAGE: RateLimiter(settings.RATE_LIMIT_LANDING_PAGE, window),
        PAGE_CONTENT: RateLimiter(settings.RATE_LIMIT_PAGE_CONTENT, window),
    }


def rate_limit(category: str) -> Callable[[Request], None]:
    """
    Build a FastAPI dependency enforcing the named category's quota.

    Usage:
        @router.post("/createBlog", dependencies=[Depends(rate_limit(BLOG_WRITE))])
    """
    if category not in CATEGORY_CODES:
        raise ValueError(f"Unknown rate limit category: {category}")

    def dependency(request: Request) -> None:
        limiter = request.app.state.context.rate_limiters[category]
        ip = get_client_ip(request)
        is_limited, retry_after = limiter.hit(ip)
        if is_limited:
            logger.warning("Rate limit exceeded", category=category, ip=ip, path=request.url.path)
            raise RateLimitExceeded(RATE_LIMIT_MESSAGE, code=CATEGORY_CODES[category], retry_after=retry_after)

    return dependency
