from __future__ import annotations
import argparse, json, os, sys, logging
from pathlib import Path

from . import config as CFG
from .config import TOP_K
from .engine import CompletionEngine
from .search import SearchOptions


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="XML completion CLI (catalog-backed)")
    p.add_argument("--file", required=True, help="XML document to complete in")
    p.add_argument("--caret", type=int, default=None, help="Caret offset (default: end of file)")
    p.add_argument("--catalog", required=True, help="JSON catalog of completion items")
    p.add_argument("--q", default=None, help="Query to rank with (default: text typed before the caret)")
    p.add_argument("-k", type=int, default=TOP_K, help="Top-K results")
    p.add_argument("--advanced", action="store_true", help="Use advanced search")
    p.add_argument("--search-description", action="store_true", help="Advanced: match descriptions too")
    p.add_argument("--search-data-type", action="store_true", help="Advanced: match data types too")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)
        os.environ["INTELLISENSE_VERBOSE"] = "1"
        CFG.VERBOSE = True

    try:
        text = Path(args.file).read_text(encoding="utf-8")
    except OSError as e:
        p.error(f"cannot read --file: {e}")
    caret = len(text) if args.caret is None else args.caret

    try:
        options = (SearchOptions()
                   .with_max_results(args.k)
                   .with_search_in_description(args.search_description)
                   .with_search_in_data_type(args.search_data_type))
        eng = CompletionEngine.from_dsn(f"json:///{os.path.abspath(args.catalog)}", options=options)
    except FileNotFoundError as e:
        p.error(f"catalog not found: {e}")
    except ValueError as e:
        p.error(str(e))

    try:
        session = eng.complete(text, caret, query=args.q, advanced=args.advanced)
        if args.json:
            print(json.dumps(session.to_dict(), ensure_ascii=False, indent=2))
            return 0

        ctx = session.context
        print(f"Context: {ctx}")
        print(f"Query:   {session.query!r}")
        if not session.results:
            print("(no matches)")
            return 0
        print("#  Type        Label                          Description")
        for i, it in enumerate(session.results, 1):
            print(f"{i:<2} {it.type.name:<11} {it.label:<30} {it.description or ''}")
        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    sys.exit(main())
