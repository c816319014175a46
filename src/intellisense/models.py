# src/intellisense/models.py
"""
Data models for the completion core.

- CompletionContext: where the caret sits syntactically, built once per request.
- CompletionItem: a candidate supplied by a provider, ranked by the search layer.

Neither class carries ranking logic; they only structure the data that
the analyzer, the matcher and the search orchestrator pass around.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class CompletionType(Enum):
    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    ATTRIBUTE_VALUE = "attribute_value"
    TEXT_CONTENT = "text_content"
    NAMESPACE = "namespace"
    TEMPLATE = "template"


class CompletionItemType(Enum):
    ELEMENT = "element"
    ATTRIBUTE = "attribute"
    VALUE = "value"
    TEXT = "text"
    NAMESPACE = "namespace"
    SNIPPET = "snippet"
    TYPE = "type"


@dataclass(slots=True)
class CompletionContext:
    """
    Snapshot of the caret's syntactic position for one completion request.

    The analyzer is the single writer: it fills every field. Later stages
    (schema lookup, XSLT-aware callers) may refine fields it left open,
    e.g. set ``has_xsd_schema``, ``current_namespace`` or switch the type
    to ``TEMPLATE``; they must not contradict what the analyzer derived.

    Attributes
    ----------
    full_text : str
        Entire document content at request time.
    selected_text : str
        Current selection; ``None`` is stored as ``""``.
    caret_position : int
        Offset into ``full_text``. May exceed ``len(full_text)``.
    current_element : str
        Element being edited (attribute zones) or innermost enclosing
        element (element/text zones); ``""`` when there is none.
    completion_type : CompletionType
        Classification of the caret zone, ``ELEMENT`` by default.
    completion_start : int
        Offset where the token being typed begins.
    element_path : tuple[str, ...]
        Unclosed start tags before the caret, outermost first.
    """
    full_text: str
    selected_text: Optional[str]
    caret_position: int
    current_element: str = ""
    completion_type: CompletionType = CompletionType.ELEMENT
    in_element: bool = False
    in_attribute: bool = False
    in_attribute_value: bool = False
    has_xsd_schema: bool = False
    parent_element: Optional[str] = None
    current_namespace: Optional[str] = None
    document_type: Optional[str] = None
    current_attribute: Optional[str] = None
    closing_tag: bool = False
    in_comment: bool = False
    in_cdata: bool = False
    completion_start: int = 0
    element_path: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.selected_text is None:
            self.selected_text = ""
        if self.full_text is None:
            self.full_text = ""
        if self.current_element is None:
            self.current_element = ""

    @property
    def prefix(self) -> str:
        """Text typed so far for the token under the caret."""
        end = max(0, min(self.caret_position, len(self.full_text)))
        start = max(0, min(self.completion_start, end))
        return self.full_text[start:end]

    def to_dict(self) -> dict[str, Any]:
        return {
            "completion_type": self.completion_type.name,
            "caret_position": self.caret_position,
            "current_element": self.current_element,
            "parent_element": self.parent_element,
            "current_attribute": self.current_attribute,
            "current_namespace": self.current_namespace,
            "document_type": self.document_type,
            "in_element": self.in_element,
            "in_attribute": self.in_attribute,
            "in_attribute_value": self.in_attribute_value,
            "has_xsd_schema": self.has_xsd_schema,
            "closing_tag": self.closing_tag,
            "in_comment": self.in_comment,
            "in_cdata": self.in_cdata,
            "completion_start": self.completion_start,
            "prefix": self.prefix,
            "element_path": list(self.element_path),
        }

    def __str__(self) -> str:
        return (
            f"CompletionContext(type={self.completion_type.name}, "
            f"element={self.current_element!r}, parent={self.parent_element!r}, "
            f"inElement={str(self.in_element).lower()}, "
            f"inAttribute={str(self.in_attribute).lower()}, "
            f"inAttributeValue={str(self.in_attribute_value).lower()}, "
            f"caret={self.caret_position})"
        )


@dataclass(frozen=True, slots=True)
class CompletionItem:
    """
    One completion candidate as handed over by a provider.

    Attributes
    ----------
    label : str
        Text shown to the user and matched against the query.
    type : CompletionItemType
        Kind of candidate; drives the type-priority tie-break.
    description : Optional[str]
        Documentation text, searchable in advanced search.
    required : bool
        Schema says the candidate is mandatory (e.g. a required attribute).
    data_type : Optional[str]
        Schema type name (e.g. ``xs:string``), searchable in advanced search.
    relevance_score : int
        Provider-assigned boost added to the label score.
    insert_text : Optional[str]
        Text to insert; defaults to ``label``.
    """
    label: str
    type: CompletionItemType = CompletionItemType.ELEMENT
    description: Optional[str] = None
    required: bool = False
    data_type: Optional[str] = None
    relevance_score: int = 0
    insert_text: Optional[str] = None

    @property
    def text_to_insert(self) -> str:
        return self.insert_text if self.insert_text is not None else self.label

    @classmethod
    def from_dict(cls, raw: dict[str, Any], *, default_type: CompletionItemType = CompletionItemType.ELEMENT) -> "CompletionItem":
        if "label" not in raw or not isinstance(raw["label"], str):
            raise ValueError(f"completion item needs a string 'label': {raw!r}")
        kind = raw.get("type")
        try:
            item_type = CompletionItemType[str(kind).upper()] if kind else default_type
        except KeyError:
            raise ValueError(f"unknown completion item type {kind!r} for {raw['label']!r}") from None
        return cls(
            label=raw["label"],
            type=item_type,
            description=raw.get("description"),
            required=bool(raw.get("required", False)),
            data_type=raw.get("data_type", raw.get("dataType")),
            relevance_score=int(raw.get("relevance_score", raw.get("relevance", 0))),
            insert_text=raw.get("insert_text"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "type": self.type.name,
            "description": self.description,
            "required": self.required,
            "data_type": self.data_type,
            "relevance_score": self.relevance_score,
            "insert_text": self.text_to_insert,
        }
