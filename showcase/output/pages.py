"""Render presentation blocks into self-contained static HTML pages."""

import html
import logging
from pathlib import Path

from showcase.config import Config, RevealConfig, SiteConfig
from showcase.models import Layout
from showcase.output.seo import page_metadata, render_meta_tags
from showcase.present import (
    PresentedItem,
    PresentedPage,
    PresentedSection,
    StaggerSlot,
    present_journey,
    present_portfolio,
)
from showcase.reveal import Regime, stagger_delay
from showcase.store import RecordStore

logger = logging.getLogger(__name__)

NAV = [
    ("index.html", "Home"),
    ("journey.html", "Journey"),
    ("portfolio.html", "Portfolio"),
]

JOURNEY_DESCRIPTION = "My path through tech: work, study, and everything in between"
PORTFOLIO_DESCRIPTION = "Publications, projects, and achievements"

_CSS = """
  * { margin: 0; padding: 0; box-sizing: border-box; }
  body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
         background: #f9fafb; color: #111827; line-height: 1.5; }
  a { color: inherit; }
  nav { display: flex; gap: 20px; padding: 20px 24px; max-width: 960px; margin: 0 auto; }
  nav a { text-decoration: none; color: #4b5563; font-weight: 500; }
  nav a.current { color: #111827; }
  main { max-width: 960px; margin: 0 auto; padding: 0 24px 64px; }
  .hero { padding: 24px 0 32px; border-bottom: 1px solid #e5e7eb; margin-bottom: 40px; }
  .hero h1 { font-size: 44px; font-weight: 800; letter-spacing: -0.02em; }
  .hero p { font-size: 18px; color: #6b7280; margin-top: 8px; }
  section { margin-bottom: 40px; }
  section h2 { font-size: 18px; font-weight: 700; margin-bottom: 16px; }
  .stack { display: flex; flex-direction: column; gap: 16px; }
  .grid { display: grid; grid-template-columns: 1fr; gap: 20px; }
  @media (min-width: 768px) { .grid { grid-template-columns: 1fr 1fr; } .span-2 { grid-column: span 2; } }
  .card { display: block; background: #fff; border: 1px solid #e5e7eb; border-left-width: 4px;
          border-radius: 8px; padding: 20px; box-shadow: 0 1px 2px rgba(0,0,0,.05); text-decoration: none; }
  a.card:hover { box-shadow: 0 4px 12px rgba(0,0,0,.08); transform: scale(1.02); }
  .card h3 { font-size: 18px; font-weight: 700; line-height: 1.3; }
  .card .header { display: flex; align-items: center; gap: 12px; margin-bottom: 4px; }
  .card .logo { width: 28px; height: 28px; border-radius: 50%; }
  .card .subtitle { font-size: 14px; font-style: italic; color: #4b5563; margin-top: 4px; }
  .card .org { font-size: 14px; font-weight: 500; color: #4b5563; margin-top: 4px; }
  .card .when { font-size: 12px; color: #6b7280; margin-top: 4px; }
  .card .description { font-size: 14px; color: #4b5563; margin-top: 12px; }
  .card ul { margin-top: 12px; padding-left: 20px; font-size: 14px; color: #4b5563; }
  .card .with { font-size: 12px; color: #6b7280; margin-top: 12px; }
  .chips { display: flex; flex-wrap: wrap; gap: 6px; margin-top: 12px; }
  .chip { background: #f3f4f6; color: #374151; border-radius: 999px; padding: 2px 10px; font-size: 12px; font-weight: 500; }
  .award { display: inline-block; margin-top: 12px; background: #fffbeb; color: #b45309; border-radius: 6px;
           padding: 4px 10px; font-size: 12px; font-weight: 600; }
  .pill { display: inline-block; border-radius: 999px; padding: 2px 12px; font-size: 12px; font-weight: 600; margin-bottom: 12px; }
  .badge-teal { background: #ccfbf1; color: #115e59; }      .border-teal { border-left-color: #14b8a6; }
  .badge-purple { background: #f3e8ff; color: #6b21a8; }    .border-purple { border-left-color: #a855f7; }
  .badge-rose { background: #ffe4e6; color: #9f1239; }      .border-rose { border-left-color: #f43f5e; }
  .badge-blue { background: #dbeafe; color: #1e40af; }      .border-blue { border-left-color: #3b82f6; }
  .badge-amber { background: #fef3c7; color: #92400e; }     .border-amber { border-left-color: #f59e0b; }
  .featured .body { display: flex; flex-direction: column; gap: 24px; }
  @media (min-width: 768px) { .featured .body { flex-direction: row; } .featured .media { width: 40%; flex-shrink: 0; } }
  .media button { border: 0; padding: 0; background: none; cursor: pointer; width: 100%; border-radius: 6px; overflow: hidden; }
  .media img { width: 100%; display: block; border-radius: 6px; }
  .empty { color: #6b7280; }
  [data-reveal] { opacity: 0; transform: translateY(20px);
                  transition: opacity var(--dur) ease-out var(--delay), transform var(--dur) ease-out var(--delay); }
  [data-reveal].revealed { opacity: 1; transform: none; }
  [data-reveal] [data-reveal-child] { opacity: 0; transform: scale(0.9);
                  transition: opacity var(--dur) ease-out var(--delay), transform var(--dur) ease-out var(--delay); }
  [data-reveal] li[data-reveal-child] { transform: translateX(-20px); }
  [data-reveal].revealed [data-reveal-child] { opacity: 1; transform: none; }
  #overlay { position: fixed; inset: 0; z-index: 50; display: flex; align-items: center; justify-content: center;
             background: rgba(0,0,0,.8); padding: 16px; }
  #overlay[hidden] { display: none; }
  #overlay figure { position: relative; max-width: 90vw; max-height: 90vh; }
  #overlay img { max-width: 100%; max-height: 85vh; border-radius: 8px; object-fit: contain; }
  #overlay .overlay-close { position: absolute; top: -12px; right: -12px; width: 32px; height: 32px; border: 0;
                            border-radius: 50%; background: #fff; cursor: pointer; font-size: 18px; }
"""

# Eager units reveal on first paint. Lazy units reveal the first time they
# intersect the viewport (shrunk by the configured margin), then are unobserved.
_SCRIPT = """
(() => {
  const reveal = (el) => el.classList.add('revealed');
  requestAnimationFrame(() => {
    document.querySelectorAll('[data-reveal="eager"]').forEach(reveal);
  });

  const lazy = document.querySelectorAll('[data-reveal="lazy"]');
  if ('IntersectionObserver' in window) {
    const margin = parseFloat(document.body.dataset.revealMargin || '0');
    const observer = new IntersectionObserver((entries) => {
      for (const entry of entries) {
        if (!entry.isIntersecting) continue;
        reveal(entry.target);
        observer.unobserve(entry.target);
      }
    }, { rootMargin: `-${margin}px 0px -${margin}px 0px` });
    lazy.forEach((el) => observer.observe(el));
    window.addEventListener('pagehide', () => observer.disconnect());
  } else {
    lazy.forEach(reveal);
  }

  const overlay = document.getElementById('overlay');
  if (!overlay) return;
  const image = overlay.querySelector('img');
  const close = () => {
    overlay.hidden = true;
    image.removeAttribute('src');
  };
  document.querySelectorAll('[data-enlarge]').forEach((button) => {
    button.addEventListener('click', () => {
      image.src = button.dataset.enlarge;
      image.alt = button.dataset.alt || '';
      overlay.hidden = false;
    });
  });
  overlay.addEventListener('click', close);
  image.addEventListener('click', (event) => event.stopPropagation());
  overlay.querySelector('.overlay-close').addEventListener('click', (event) => {
    event.stopPropagation();
    close();
  });
  window.addEventListener('pagehide', close);
})();
"""

_OVERLAY = """<div id="overlay" hidden>
  <figure>
    <button class="overlay-close" aria-label="Close">&times;</button>
    <img alt="">
  </figure>
</div>"""


def _e(text: str | None) -> str:
    return html.escape(text or "", quote=True)


def _timing_style(delay: float, duration: float) -> str:
    return f'style="--delay: {delay:g}s; --dur: {duration:g}s"'


def _reveal(regime: Regime, delay: float, duration: float) -> str:
    return f'data-reveal="{regime.value}" {_timing_style(delay, duration)}'


def _child(delay: float, duration: float) -> str:
    return f"data-reveal-child {_timing_style(delay, duration)}"


def _link(href: str | None, text: str) -> str:
    if not href:
        return _e(text)
    external = href.startswith(("http://", "https://"))
    rel = ' target="_blank" rel="noopener noreferrer"' if external else ""
    return f'<a href="{_e(href)}"{rel}>{_e(text)}</a>'


def _when(item: PresentedItem) -> str:
    r = item.record
    return _e(r.date) + (f" &middot; {_e(r.location)}" if r.location else "")


def _chips(slots: tuple[StaggerSlot, ...], reveal: RevealConfig) -> str:
    if not slots:
        return ""
    chips = "".join(
        f'<span class="chip" {_child(s.delay, reveal.chip.duration)}>{_e(s.text)}</span>'
        for s in slots
    )
    return f'<div class="chips">{chips}</div>'


def _bullets(slots: tuple[StaggerSlot, ...], reveal: RevealConfig) -> str:
    if not slots:
        return ""
    items = "".join(
        f'<li {_child(s.delay, reveal.bullet.duration)}>{_e(s.text)}</li>' for s in slots
    )
    return f"<ul>{items}</ul>"


def _pill(item: PresentedItem) -> str:
    return f'<span class="pill {item.accent.badge}">{_e(item.accent.label)}</span>'


def render_timeline_card(item: PresentedItem, reveal: RevealConfig) -> str:
    r = item.record
    logo = f'<img class="logo" src="{_e(r.image)}" alt="{_e(r.organization)}">' if r.image else ""
    collaborators = (
        f'<p class="with">With {_e(", ".join(r.collaborators))}</p>' if r.collaborators else ""
    )
    return f"""<article class="card timeline {item.accent.border}" id="{item.unit_id}" {_reveal(Regime.LAZY, item.delay, item.duration)}>
  {_pill(item)}
  <div class="header">{logo}<h3>{_e(r.title)}</h3></div>
  <p class="org">{_link(r.link, r.organization)}</p>
  <p class="when">{_when(item)}</p>
  <p class="description">{_e(r.description)}</p>
  {_bullets(item.bullets, reveal)}
  {_chips(item.chips, reveal)}
  {collaborators}
</article>"""


def render_featured_card(item: PresentedItem, reveal: RevealConfig) -> str:
    r = item.record
    media = ""
    if item.enlargeable:
        media = f"""<div class="media" {_child(item.media_delay, reveal.media.duration)}>
      <button data-enlarge="{_e(r.image)}" data-alt="{_e(r.title)}" aria-label="View {_e(r.title)} image">
        <img src="{_e(r.image)}" alt="{_e(r.title)}" width="480" height="320">
      </button>
    </div>"""
    subtitle = f'<p class="subtitle">{_e(r.subtitle)}</p>' if r.subtitle else ""
    return f"""<article class="card featured span-2 {item.accent.border}" id="{item.unit_id}" {_reveal(Regime.LAZY, item.delay, item.duration)}>
  <div class="body">
    {media}
    <div class="content">
      {_pill(item)}
      <h3>{_e(r.title)}</h3>
      {subtitle}
      <p class="org">{_link(r.link, r.organization)}</p>
      <p class="when">{_when(item)}</p>
      <p class="description">{_e(r.description)}</p>
      {_chips(item.chips, reveal)}
    </div>
  </div>
</article>"""


def render_standard_card(item: PresentedItem, reveal: RevealConfig) -> str:
    r = item.record
    award = f'<div class="award">&#127942; {_e(r.badge)}</div>' if r.badge else ""
    content = f"""{_pill(item)}
    <h3>{_e(r.title)}</h3>
    <p class="org">{_e(r.organization)}</p>
    <p class="when">{_when(item)}</p>
    <p class="description">{_e(r.description)}</p>
    {award}
    {_chips(item.chips, reveal)}"""
    if r.link:
        inner = f'<a class="card {item.accent.border}" href="{_e(r.link)}" target="_blank" rel="noopener noreferrer">\n    {content}\n  </a>'
    else:
        inner = f'<div class="card {item.accent.border}">\n    {content}\n  </div>'
    return f"""<div id="{item.unit_id}" {_reveal(Regime.LAZY, item.delay, item.duration)}>
  {inner}
</div>"""


_CARD_RENDERERS = {
    Layout.TIMELINE: render_timeline_card,
    Layout.FEATURED: render_featured_card,
    Layout.STANDARD: render_standard_card,
}


def render_section(section: PresentedSection, reveal: RevealConfig, container: str) -> str:
    if section.empty is not None:
        cards = f'    <p class="empty">{_e(section.empty.message)}</p>'
    else:
        cards = "\n".join(_CARD_RENDERERS[item.layout](item, reveal) for item in section.items)
    return f"""<section id="{section.unit_id}">
  <h2 {_reveal(Regime.EAGER, section.delay, reveal.section.duration)}>{_e(section.label)}</h2>
  <div class="{container}">
{cards}
  </div>
</section>"""


def _render_hero(title: str, description: str, reveal: RevealConfig) -> str:
    d0 = stagger_delay(reveal.hero, 0)
    d1 = stagger_delay(reveal.hero, 1)
    return f"""<header class="hero">
  <h1 {_reveal(Regime.EAGER, d0, reveal.hero.duration)}>{_e(title)}</h1>
  <p {_reveal(Regime.EAGER, d1, reveal.hero.duration)}>{_e(description)}</p>
</header>"""


def _nav_link(href: str, label: str, current: str) -> str:
    css = ' class="current"' if href == current else ""
    return f'<a href="{href}"{css}>{_e(label)}</a>'


def _render_document(
    site: SiteConfig,
    reveal: RevealConfig,
    *,
    current: str,
    meta: dict,
    hero: str,
    body: str,
    overlay: bool = False,
) -> str:
    nav = " ".join(_nav_link(href, label, current) for href, label in NAV)
    lang = site.locale.split("_")[0]
    return f"""<!DOCTYPE html>
<html lang="{_e(lang)}">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
{render_meta_tags(meta)}
<style>{_CSS}</style>
</head>
<body data-reveal-margin="{reveal.margin:g}">
<nav>{nav}</nav>
<main>
{hero}
{body}
</main>
{_OVERLAY if overlay else ""}
<script>{_SCRIPT}</script>
</body>
</html>"""


def render_journey_page(config: Config, page: PresentedPage) -> str:
    reveal = config.reveal
    if page.empty is not None:
        body = f'<p class="empty">{_e(page.empty.message)}</p>'
    else:
        body = "\n".join(render_section(s, reveal, "stack") for s in page.sections)
    return _render_document(
        config.site, reveal,
        current="journey.html",
        meta=page_metadata(config.site, "My Journey", JOURNEY_DESCRIPTION, "/journey"),
        hero=_render_hero("My Journey", JOURNEY_DESCRIPTION, reveal),
        body=body,
    )


def render_portfolio_page(config: Config, page: PresentedPage) -> str:
    reveal = config.reveal
    body = "\n".join(render_section(s, reveal, "grid") for s in page.sections)
    enlargeable = any(item.enlargeable for s in page.sections for item in s.items)
    return _render_document(
        config.site, reveal,
        current="portfolio.html",
        meta=page_metadata(config.site, "Portfolio", PORTFOLIO_DESCRIPTION, "/portfolio"),
        hero=_render_hero("Portfolio", PORTFOLIO_DESCRIPTION, reveal),
        body=body,
        overlay=enlargeable,
    )


def render_index_page(config: Config, store: RecordStore) -> str:
    site = config.site
    socials = "".join(
        f"<li>{_link(url, name.title())}</li>" for name, url in site.socials.items()
    )
    elsewhere = f"<section><h2>Elsewhere</h2><ul>{socials}</ul></section>" if socials else ""
    body = f"""<section>
  <h2>Explore</h2>
  <div class="grid">
    <a class="card border-teal" href="journey.html"><h3>Journey</h3>
      <p class="description">{len(store.journey)} entries across work and education</p></a>
    <a class="card border-rose" href="portfolio.html"><h3>Portfolio</h3>
      <p class="description">{len(store.portfolio)} publications, projects and awards</p></a>
  </div>
</section>
{elsewhere}"""
    return _render_document(
        site, config.reveal,
        current="index.html",
        meta=page_metadata(site, site.title, site.description),
        hero=_render_hero(site.title, site.description, config.reveal),
        body=body,
    )


def build_site(config: Config, store: RecordStore, output_dir: Path | None = None) -> list[Path]:
    """Render every page into ``output_dir`` and return the written paths."""
    out = output_dir or config.resolved_output_dir
    out.mkdir(parents=True, exist_ok=True)

    journey = present_journey(store.journey, config.sections.journey, config.reveal)
    portfolio = present_portfolio(store.portfolio, config.sections.portfolio, config.reveal)

    pages = {
        "index.html": render_index_page(config, store),
        "journey.html": render_journey_page(config, journey),
        "portfolio.html": render_portfolio_page(config, portfolio),
    }
    written: list[Path] = []
    for name, content in pages.items():
        path = out / name
        path.write_text(content, encoding="utf-8")
        written.append(path)
        logger.info("Wrote %s (%d bytes)", path, len(content))
    return written
