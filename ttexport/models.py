"""
Typed views over Teamtailor's JSON:API documents.

Upstream payloads are loosely shaped, so construction never fails on a
dict: missing or mistyped members fall back to empty values and the
accessors return empty strings instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass; a JSON true is not a count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Resource:
    """A JSON:API resource object: a candidate or a side-loaded record."""

    type: str
    id: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    relationships: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, obj: Any) -> "Resource":
        obj = _as_dict(obj)
        return cls(
            type=_as_str(obj.get("type")),
            id=_as_str(obj.get("id")),
            attributes=_as_dict(obj.get("attributes")),
            relationships=_as_dict(obj.get("relationships")),
        )

    def attribute(self, name: str) -> str:
        """Attribute value as a string; empty when missing or null."""
        return _as_str(self.attributes.get(name))

    def related_ids(self, name: str) -> List[str]:
        """
        Ids referenced by a to-many relationship, in payload order.

        A relationship without data, or whose data is a single object
        rather than a list, has no references.
        """
        rel = _as_dict(self.relationships.get(name))
        refs = rel.get("data")
        if not isinstance(refs, list):
            return []
        return [_as_str(_as_dict(ref).get("id")) for ref in refs]


@dataclass(frozen=True)
class Page:
    """One page of the candidates listing."""

    data: List[Resource] = field(default_factory=list)
    included: List[Resource] = field(default_factory=list)
    next_link: Optional[str] = None
    record_count: Optional[int] = None
    page_count: Optional[int] = None

    @classmethod
    def from_json(cls, payload: Any) -> "Page":
        payload = _as_dict(payload)
        links = _as_dict(payload.get("links"))
        meta = _as_dict(payload.get("meta"))
        next_link = links.get("next")
        return cls(
            data=[Resource.from_json(r) for r in _as_list(payload.get("data"))],
            included=[Resource.from_json(r) for r in _as_list(payload.get("included"))],
            next_link=_as_str(next_link) if next_link else None,
            record_count=_as_int(meta.get("record_count")),
            page_count=_as_int(meta.get("page_count")),
        )

    @property
    def has_next(self) -> bool:
        return bool(self.next_link)

    @property
    def has_meta(self) -> bool:
        return self.record_count is not None or self.page_count is not None


class CsvRow(NamedTuple):
    """One candidate joined to one job application (or to none)."""

    candidate_id: str
    first_name: str
    last_name: str
    email: str
    job_application_id: str
    job_application_created_at: str
