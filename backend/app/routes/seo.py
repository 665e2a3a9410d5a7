"""
ButtonUp Backend — robots.txt
===============================

What:  GET /robots.txt: crawler directives for the whole site.
Why:   Served by the backend so the policy is versioned with the code.

The body is a module constant: every response is byte-identical, which lets
CDNs and crawlers cache it for 24 hours.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["SEO"])

ROBOTS_CACHE_CONTROL = "public, max-age=86400"

ROBOTS_TXT = """User-agent: *
Allow: /

# Sitemap
Sitemap: https://buttonup.cloud/sitemap.xml

# Block AI scrapers while allowing search engines
User-agent: GPTBot
Allow: /

User-agent: ChatGPT-User
Allow: /

User-agent: CCBot
Allow: /

User-agent: anthropic-ai
Allow: /

User-agent: Claude-Web
Allow: /

# Allow Google Bot
User-agent: Googlebot
Allow: /

# Allow Bing Bot  
User-agent: Bingbot
Allow: /

# Allow Baidu Spider
User-agent: Baiduspider
Allow: /

# Crawl-delay for polite crawling
Crawl-delay: 1

# Important pages that should be crawled frequently
Allow: /content/
Allow: /rss.xml
Allow: /llm.txt
Allow: /
Allow: /robots.txt

# Block admin areas if any
Disallow: /admin/
Disallow: /api/
Disallow: /_next/
Disallow: /node_modules/

# Block query parameters that don't change content
Disallow: /*?utm_*
Disallow: /*?ref=*
Disallow: /*?source=*
Disallow: /*?fbclid=*
Disallow: /*?gclid=*

# Ensure main pages are explicitly allowed
Allow: /$
Allow: /content/*"""


@router.get(
    "/robots.txt",
    response_class=PlainTextResponse,
    summary="Crawler directives",
)
async def robots_txt() -> PlainTextResponse:
    return PlainTextResponse(ROBOTS_TXT, headers={"Cache-Control": ROBOTS_CACHE_CONTROL})
