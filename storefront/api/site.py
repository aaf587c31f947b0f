"""
Site-level endpoints: robots.txt crawling directives
"""
from dataclasses import dataclass, field
from typing import List

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from storefront.core.config import settings

router = APIRouter(tags=["Site"])


@dataclass
class RobotsRule:
    user_agent: str
    allow: List[str] = field(default_factory=list)
    disallow: List[str] = field(default_factory=list)


ROBOTS_RULES = [
    RobotsRule(
        user_agent="*",
        allow=["/", "/shop", "/products", "/about-us"],
        disallow=[
            "/admin",
            "/api",
            "/_next",
            "/static",
            "/*.json$",
            "/*?*sort=",
            "/*?*filter=",
        ],
    ),
    RobotsRule(
        user_agent="Googlebot",
        allow=["/", "/shop", "/products", "/about-us"],
        disallow=["/admin", "/api"],
    ),
    RobotsRule(
        user_agent="Googlebot-Image",
        allow=["/products", "/shop"],
        disallow=["/admin"],
    ),
]


def render_robots(base_url: str) -> str:
    """robots.txt body for the given public site URL"""
    base_url = base_url.rstrip("/")
    lines = []
    for rule in ROBOTS_RULES:
        lines.append(f"User-Agent: {rule.user_agent}")
        lines.extend(f"Allow: {path}" for path in rule.allow)
        lines.extend(f"Disallow: {path}" for path in rule.disallow)
        lines.append("")
    lines.append(f"Host: {base_url}")
    lines.append(f"Sitemap: {base_url}/sitemap.xml")
    return "\n".join(lines) + "\n"


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots():
    return render_robots(settings.BASE_URL)
