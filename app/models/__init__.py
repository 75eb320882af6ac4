from .base import utcnow
from .blog import Blog
from .blog_type import BlogType
from .footer import Footer
from .investment_card import InvestmentCard
from .landing_page import LandingPage
from .page_content import PageContent, PageType

__all__ = [
    "utcnow",
    "Blog",
    "BlogType",
    "Footer",
    "InvestmentCard",
    "LandingPage",
    "PageContent",
    "PageType",
]
