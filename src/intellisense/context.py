# intellisense/context.py
"""
Caret context analysis for partially typed markup.

analyze() looks at the text before the caret and decides which zone the
caret is in:

    <root attr="va|       -> ATTRIBUTE_VALUE   (inside an unclosed quote)
    <root at|             -> ATTRIBUTE         (after the name and whitespace)
    <ro|   </ro|          -> ELEMENT           (right after '<' or '</')
    <root>te|             -> TEXT_CONTENT      (after the last '>')
    <root xmlns:x="|      -> NAMESPACE         (namespace declaration)

The document is never validated; unterminated tags and quotes simply end
up in the closest zone. TEMPLATE is never produced here, XSLT-aware
callers overlay it on the returned context.
"""

from __future__ import annotations
import logging
import re
from typing import List, Optional, Tuple

from .models import CompletionContext, CompletionType

log = logging.getLogger(__name__)

# Markup that can appear before the caret. Comments, CDATA, PIs and
# declarations are matched first so that tags inside them are skipped.
_TAG_RE = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<![^>]*>"
    r"|<(/?)([A-Za-z_][\w:.-]*)((?:[^>\"']|\"[^\"]*\"|'[^']*')*)>",
    re.S,
)
_NAME_RE = re.compile(r"[A-Za-z_][\w:.-]*")
_ATTR_BEFORE_VALUE_RE = re.compile(r"([\w:.-]+)\s*=\s*\Z")
_TOKEN_TAIL_RE = re.compile(r"[\w:.-]*\Z")


def _element_stack(text: str) -> List[str]:
    """Unclosed start tags in text, outermost first."""
    stack: List[str] = []
    for m in _TAG_RE.finditer(text):
        name = m.group(2)
        if not name:
            continue  # comment / CDATA / PI / declaration
        if m.group(1):
            # closing tag: pop back to its start tag, ignore strays
            if name in stack:
                while stack.pop() != name:
                    pass
            continue
        if m.group(3).rstrip().endswith("/"):
            continue  # self-closing
        stack.append(name)
    return stack


def _literal_end(text: str) -> int:
    """End offset of the last closed comment / CDATA / PI / declaration, 0 if none."""
    end = 0
    for m in _TAG_RE.finditer(text):
        if not m.group(2):
            end = m.end()
    return end


def _inside(before: str, opener: str, closer: str) -> bool:
    return before.rfind(opener) > before.rfind(closer)


def _scan_tag(tag: str) -> Tuple[Optional[str], int, bool]:
    """
    Walk the content of an open tag left to right.
    Returns (open quote char or None, index of that quote, tag closed?).
    """
    quote: Optional[str] = None
    quote_at = -1
    for i, ch in enumerate(tag):
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
            quote_at = i
        elif ch == ">":
            return None, -1, True
    return quote, quote_at, False


def _token_start(before: str, lower: int) -> int:
    """Start offset of the name-like token that ends at the caret, not before lower."""
    m = _TOKEN_TAIL_RE.search(before, max(0, lower))
    return m.start() if m else len(before)


def _is_namespace_decl(attr: Optional[str]) -> bool:
    return bool(attr) and (attr == "xmlns" or attr.startswith("xmlns:"))


def _set_enclosing(ctx: CompletionContext, stack: List[str]) -> None:
    ctx.element_path = tuple(stack)
    ctx.current_element = stack[-1] if stack else ""
    ctx.parent_element = stack[-2] if len(stack) >= 2 else None


def _set_tag_owner(ctx: CompletionContext, name: str, stack: List[str]) -> None:
    ctx.element_path = tuple(stack)
    ctx.current_element = name
    ctx.parent_element = stack[-1] if stack else None


def _classify(ctx: CompletionContext, text: str, caret: int) -> None:
    before = text[:caret]
    ctx.completion_start = caret
    if not before:
        return

    # /* ~~~ literal sections: no markup completion inside ~~~ */
    if _inside(before, "<!--", "-->"):
        start = before.rfind("<!--")
        ctx.completion_type = CompletionType.TEXT_CONTENT
        ctx.in_comment = True
        _set_enclosing(ctx, _element_stack(before[:start]))
        ctx.completion_start = _token_start(before, start + 4)
        return
    if _inside(before, "<![CDATA[", "]]>"):
        start = before.rfind("<![CDATA[")
        ctx.completion_type = CompletionType.TEXT_CONTENT
        ctx.in_cdata = True
        _set_enclosing(ctx, _element_stack(before[:start]))
        ctx.completion_start = _token_start(before, start + 9)
        return
    if _inside(before, "<?", "?>"):
        return  # processing instruction: best guess is the default context

    # quotes and '<' inside closed literal sections are not markup
    lit_end = _literal_end(before)
    lt = before.rfind("<", lit_end)
    if lt == -1:
        if lit_end:
            ctx.completion_type = CompletionType.TEXT_CONTENT
            _set_enclosing(ctx, _element_stack(before))
            ctx.completion_start = _token_start(before, lit_end)
        return  # no markup yet

    tag = before[lt + 1:]
    quote, quote_at, closed = _scan_tag(tag)

    if closed:
        # between tags
        ctx.completion_type = CompletionType.TEXT_CONTENT
        _set_enclosing(ctx, _element_stack(before))
        ctx.completion_start = _token_start(before, before.rfind(">") + 1)
        return

    if tag.startswith("!"):
        return  # <!DOCTYPE ... and friends

    stack = _element_stack(before[:lt])
    closing = tag.startswith("/")
    body = tag[1:] if closing else tag
    m = _NAME_RE.match(body)
    name = m.group(0) if m else ""

    if quote is not None and not closing:
        # zone 1 / 5: inside an attribute value
        am = _ATTR_BEFORE_VALUE_RE.search(tag[:quote_at])
        attr = am.group(1) if am else None
        _set_tag_owner(ctx, name, stack)
        ctx.current_attribute = attr
        ctx.in_attribute_value = True
        ctx.completion_start = lt + 1 + quote_at + 1
        if _is_namespace_decl(attr):
            ctx.completion_type = CompletionType.NAMESPACE
            ctx.current_namespace = attr.partition(":")[2]
        else:
            ctx.completion_type = CompletionType.ATTRIBUTE_VALUE
        return

    rest = body[len(name):]
    if not closing and name and rest[:1].isspace():
        # zone 2 / 5: attribute name position
        _set_tag_owner(ctx, name, stack)
        ctx.in_attribute = True
        ctx.completion_start = _token_start(before, lt + 1 + len(name))
        token = before[ctx.completion_start:]
        if _is_namespace_decl(token):
            ctx.completion_type = CompletionType.NAMESPACE
        else:
            ctx.completion_type = CompletionType.ATTRIBUTE
        return

    # zone 3: element name right after '<' or '</'
    ctx.completion_type = CompletionType.ELEMENT
    ctx.in_element = True
    ctx.closing_tag = closing
    _set_enclosing(ctx, stack)
    ctx.completion_start = lt + 1 + (1 if closing else 0)


def _reset(ctx: CompletionContext) -> None:
    ctx.completion_type = CompletionType.ELEMENT
    ctx.in_element = ctx.in_attribute = ctx.in_attribute_value = False
    ctx.closing_tag = ctx.in_comment = ctx.in_cdata = False
    ctx.current_element = ""
    ctx.parent_element = None
    ctx.current_attribute = None
    ctx.current_namespace = None
    ctx.element_path = ()
    ctx.completion_start = 0


def analyze(full_text: Optional[str], caret_position: int, selected_text: Optional[str] = None) -> CompletionContext:
    """
    Classify the caret position inside full_text. Never raises: out-of-range
    carets are clamped and anything unexpected degrades to the default
    ELEMENT context with every flag cleared.
    """
    text = full_text or ""
    ctx = CompletionContext(full_text=text, selected_text=selected_text, caret_position=caret_position)
    try:
        caret = max(0, min(int(caret_position), len(text)))
        _classify(ctx, text, caret)
    except Exception:
        log.exception("Context analysis failed at caret %r; using default context", caret_position)
        _reset(ctx)
    log.debug("Analyzed context: %s", ctx)
    return ctx
