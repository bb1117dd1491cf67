"""Page metadata: canonical URL, OpenGraph and Twitter card fields."""

import html

from showcase.config import SiteConfig


def page_metadata(
    site: SiteConfig,
    title: str,
    description: str | None = None,
    path: str | None = None,
    image: str | None = None,
) -> dict:
    """Build the metadata block for one page.

    Falls back to the site description and social banner when the page
    does not provide its own.
    """
    base = site.site_url.rstrip("/")
    page_url = f"{base}{path}" if path else base
    description = description or site.description
    images = [image] if image else [site.social_banner]
    full_title = f"{title} | {site.title}"

    return {
        "title": title,
        "description": description,
        "canonical": page_url,
        "openGraph": {
            "title": full_title,
            "description": description,
            "url": page_url,
            "siteName": site.title,
            "images": images,
            "locale": site.locale,
            "type": "website",
        },
        "twitter": {
            "title": full_title,
            "card": "summary_large_image",
            "images": images,
        },
    }


def _e(value: object) -> str:
    return html.escape(str(value), quote=True)


def render_meta_tags(meta: dict) -> str:
    og = meta["openGraph"]
    tw = meta["twitter"]
    tags = [
        f'<title>{_e(og["title"])}</title>',
        f'<meta name="description" content="{_e(meta["description"])}">',
        f'<link rel="canonical" href="{_e(meta["canonical"])}">',
        f'<meta property="og:title" content="{_e(og["title"])}">',
        f'<meta property="og:description" content="{_e(og["description"])}">',
        f'<meta property="og:url" content="{_e(og["url"])}">',
        f'<meta property="og:site_name" content="{_e(og["siteName"])}">',
        f'<meta property="og:locale" content="{_e(og["locale"])}">',
        f'<meta property="og:type" content="{_e(og["type"])}">',
    ]
    tags += [f'<meta property="og:image" content="{_e(img)}">' for img in og["images"]]
    tags += [
        f'<meta name="twitter:card" content="{_e(tw["card"])}">',
        f'<meta name="twitter:title" content="{_e(tw["title"])}">',
    ]
    tags += [f'<meta name="twitter:image" content="{_e(img)}">' for img in tw["images"]]
    return "\n".join(tags)
