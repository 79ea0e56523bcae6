"""Flowmark CLI entry point.

Allows running via `python -m flowmark` and provides the console script
defined in `pyproject.toml`. Reads a text file, guesses which breaks are
hard, refills it and prints the result with hard breaks marked.
"""

from __future__ import annotations

import argparse
import logging
import sys

import blessed

from .fill import fill_region, unfill_region
from .model import Document, DocumentOptions
from .modes import FlowedFillMode, HardNewlinesMode
from .session import SessionKeys, get_flowed_modes, get_session, set_flowed_modes
from .settings_persistence import get_persistence
from .version import get_version_string
from .view import FlowView

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="flowmark", description=__doc__.splitlines()[0])
    parser.add_argument("file", nargs="?", help="text file to read (default: stdin)")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    parser.add_argument("-m", "--mode", default="text", help="major mode of the document")
    parser.add_argument("-w", "--width", type=int, help="fill column")
    parser.add_argument("--flowed", action="store_true",
                        help="use flowed breaks for MODE (adds it to the flowed mode set)")
    parser.add_argument("--unfill", action="store_true", help="join soft breaks instead of filling")
    parser.add_argument("--no-guess", action="store_true",
                        help="treat every existing break as hard")
    parser.add_argument("--plain", action="store_true", help="print text without markers")
    parser.add_argument("--save-prefs", action="store_true",
                        help="remember the flowed mode set and width")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if args.version:
        print(get_version_string())
        return 0
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    persistence = get_persistence()
    persistence.apply_to_session()
    session = get_session()
    if args.flowed:
        set_flowed_modes(get_flowed_modes() | {args.mode})
    if args.width is not None:
        session.set(SessionKeys.FILL_COLUMN, args.width)

    try:
        if args.file:
            with open(args.file, encoding="utf-8") as f:
                text = f.read()
        else:
            text = sys.stdin.read()
    except OSError as e:
        print(f"flowmark: {e}", file=sys.stderr)
        return 1

    options = DocumentOptions(major_mode=args.mode)
    options.fill_column = session.get(SessionKeys.FILL_COLUMN, options.fill_column)
    document = Document.from_text(text, hard=args.no_guess, options=options)
    HardNewlinesMode(document).enable(guess=not args.no_guess)
    FlowedFillMode(document).enable()

    if args.unfill:
        unfill_region(document, 0, len(document))
    else:
        fill_region(document, 0, len(document))

    if args.plain:
        sys.stdout.write(document.text)
    else:
        view = FlowView(document, blessed.Terminal(stream=sys.stdout))
        sys.stdout.write("\n".join(view.render()))

    if args.save_prefs and not persistence.save_session():
        logger.warning("Preferences were not saved")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
