from __future__ import annotations
import argparse
import logging
import os
from typing import Any

from flask import Flask, jsonify, request

from intellisense import config as CFG
from intellisense.config import MARK_CLOSE, MARK_OPEN, TOP_K
from intellisense.engine import CompletionEngine
from intellisense.fuzzy import levenshtein_distance, score
from intellisense.highlight import highlight_matches
from intellisense.models import CompletionItem, CompletionItemType
from intellisense.search import SearchOptions

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: CompletionEngine | None = None

# request "options" keys -> SearchOptions builder
_OPTION_BUILDERS = {
    "max_results": "with_max_results",
    "min_score": "with_min_score",
    "search_in_description": "with_search_in_description",
    "search_in_data_type": "with_search_in_data_type",
    "case_sensitive": "with_case_sensitive",
    "parallel_processing": "with_parallel_processing",
    "label_weight": "with_label_weight",
}
_BOOL_OPTIONS = {"search_in_description", "search_in_data_type", "case_sensitive", "parallel_processing"}


class BadRequest(ValueError):
    pass


def _bad(msg: str):
    return jsonify({"error": msg}), 400


def _options(raw: Any) -> SearchOptions:
    opts = SearchOptions().with_max_results(TOP_K)
    if raw is None:
        return opts
    if not isinstance(raw, dict):
        raise BadRequest("'options' must be an object")
    for key, value in raw.items():
        if key == "type_priorities":
            if not isinstance(value, dict):
                raise BadRequest("'options.type_priorities' must be an object")
            for name, prio in value.items():
                try:
                    opts.with_type_priority(CompletionItemType[str(name).upper()], prio)
                except (KeyError, ValueError):
                    raise BadRequest(f"bad type priority {name!r}: {prio!r}") from None
            continue
        builder = _OPTION_BUILDERS.get(key)
        if builder is None:
            raise BadRequest(f"unknown option {key!r}")
        if key in _BOOL_OPTIONS and not isinstance(value, bool):
            raise BadRequest(f"option {key!r} must be true or false, got {value!r}")
        try:
            getattr(opts, builder)(value)
        except (TypeError, ValueError) as e:
            raise BadRequest(f"bad option {key!r}: {e}") from None
    return opts


# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"status": "ok", "provider": _engine is not None and _engine.provider is not None})


@app.get("/api/score")
def api_score():
    q = request.args.get("q", "", type=str)
    t = request.args.get("t", "", type=str)
    return jsonify({
        "query": q,
        "target": t,
        "score": score(q, t),
        "distance": levenshtein_distance(q, t),
        "highlight": highlight_matches(t, q, open_mark=MARK_OPEN, close_mark=MARK_CLOSE),
    })


@app.post("/api/complete")
def api_complete():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _bad("expected a JSON object body")

    text = body.get("text", "")
    caret = body.get("caret", len(text) if isinstance(text, str) else 0)
    if not isinstance(text, str):
        return _bad("'text' must be a string")
    if not isinstance(caret, int) or isinstance(caret, bool):
        return _bad("'caret' must be an integer")
    for key in ("selected", "query"):
        if body.get(key) is not None and not isinstance(body[key], str):
            return _bad(f"'{key}' must be a string")
    advanced = body.get("advanced", False)
    if not isinstance(advanced, bool):
        return _bad("'advanced' must be true or false")

    try:
        opts = _options(body.get("options"))
        items = None
        if body.get("items") is not None:
            if not isinstance(body["items"], list):
                raise BadRequest("'items' must be a list")
            items = [CompletionItem.from_dict(raw) for raw in body["items"]]
    except (BadRequest, ValueError, TypeError) as e:
        return _bad(str(e))

    eng = _engine or CompletionEngine()
    if items is None and eng.provider is None:
        return _bad("no catalog loaded; pass 'items' in the request")

    session = eng.complete(
        text, caret, body.get("selected"),
        query=body.get("query"),
        options=opts,
        advanced=advanced,
        items=items,
    )
    return jsonify(session.to_dict())


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the completion playground (Flask JSON API)")
    ap.add_argument("--catalog", default=None, help="JSON catalog; without it requests must carry 'items'")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)
        os.environ["INTELLISENSE_VERBOSE"] = "1"
        CFG.VERBOSE = True

    global _engine
    if args.catalog:
        try:
            _engine = CompletionEngine.from_dsn(f"json:///{os.path.abspath(args.catalog)}")
        except FileNotFoundError as e:
            ap.error(f"catalog not found: {e}")
        except ValueError as e:
            ap.error(str(e))
    else:
        _engine = CompletionEngine()

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
