"""CLI entry point for showcase."""

import argparse
import logging
import sys
from pathlib import Path

from showcase.config import Config, UnknownTagPolicy, load_config
from showcase.errors import ShowcaseError
from showcase.present import PresentedPage, present_journey, present_portfolio
from showcase.store import RecordStore

logger = logging.getLogger(__name__)

PAGES = ("journey", "portfolio")


def _present(page: str, config: Config, store: RecordStore) -> PresentedPage:
    if page == "journey":
        return present_journey(store.journey, config.sections.journey, config.reveal)
    return present_portfolio(store.portfolio, config.sections.portfolio, config.reveal)


def _print_outline(page: PresentedPage) -> None:
    print(f"{page.kind}:")
    if page.empty is not None:
        print(f"  {page.empty.message}")
        return
    for section in page.sections:
        print(f"  [{section.label}] +{section.delay:g}s")
        if section.empty is not None:
            print(f"    {section.empty.message}")
        for item in section.items:
            extras = []
            if item.enlargeable:
                extras.append(f"image +{item.media_delay:g}s")
            if item.bullets:
                extras.append(f"{len(item.bullets)} highlights")
            if item.chips:
                extras.append(f"{len(item.chips)} tags")
            suffix = f" ({', '.join(extras)})" if extras else ""
            print(
                f"    {item.index}. {item.record.title} "
                f"[{item.layout.value}, +{item.delay:g}s]{suffix}"
            )


def main() -> None:
    parser = argparse.ArgumentParser(description="Showcase portfolio site builder")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command")

    # build command
    build_parser = sub.add_parser("build", help="Render the static pages")
    build_parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output directory (defaults to data.output_dir from config)",
    )

    # outline command
    outline_parser = sub.add_parser("outline", help="Show sections, layouts and reveal delays")
    outline_parser.add_argument(
        "page", nargs="?", choices=PAGES,
        help="Page to outline. If omitted, outlines both.",
    )

    # check command
    sub.add_parser("check", help="Load both collections, failing on unknown record types")

    # simulate command
    simulate_parser = sub.add_parser("simulate", help="Scroll a page on a simulated viewport")
    simulate_parser.add_argument("page", choices=PAGES)
    simulate_parser.add_argument("--viewport-height", type=float, default=800.0)
    simulate_parser.add_argument("--scroll-step", type=float, default=200.0)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)

        if args.command == "build":
            from showcase.output.pages import build_site

            store = RecordStore.from_config(config)
            for path in build_site(config, store, args.output):
                print(path)

        elif args.command == "outline":
            store = RecordStore.from_config(config)
            for page in ([args.page] if args.page else PAGES):
                _print_outline(_present(page, config, store))

        elif args.command == "check":
            store = RecordStore.from_config(config, unknown_tags=UnknownTagPolicy.ERROR)
            print(f"OK: {len(store.journey)} journey entries, {len(store.portfolio)} portfolio entries")

        elif args.command == "simulate":
            from showcase.view import simulate_scroll

            store = RecordStore.from_config(config)
            view = simulate_scroll(
                _present(args.page, config, store), config.reveal,
                viewport_height=args.viewport_height,
                scroll_step=args.scroll_step,
            )
            for event in view.scheduler.events:
                print(f"  t={event.start:7.3f}s  {event.kind.value:<8} {event.unit_id}")
            if view.scheduler.pending:
                print(f"\nNever revealed: {len(view.scheduler.pending)} unit(s)")
            view.navigate_away()

        else:
            parser.print_help()
    except ShowcaseError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
