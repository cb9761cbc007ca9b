"""
Workflow section resolution.

Two passes over the raw records:

1. Build a name → section lookup from each record's own Section/Column value.
   The first record with a given name wins; later duplicates are counted as
   collisions and reported once per run.
2. Resolve every record's effective section: its own value, else its parent's
   value from the lookup, else "Uncategorized".

The effective sections, in first-appearance order, define both the section
buckets and each task's section rank. Parents may appear before or after their
subtasks, which is why the lookup has to be complete before pass two.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from taskreport.engine.fields import NAME, PARENT_TASK, SECTION
from taskreport.models.task import UNCATEGORIZED

log = logging.getLogger(__name__)

# Substrings that mark a section as holding finished work (case-insensitive)
DONE_PATTERNS = ("done", "complete", "completed", "finished", "closed", "resolved")

# Rank given to a section missing from the order map; sorts after every real section
UNRANKED_SECTION_ORDER = 999


def is_done_section(section: Optional[str]) -> bool:
    """True if the section name contains any completion word, e.g. "Completed Tasks"."""
    if not section:
        return False
    lower = section.lower()
    return any(pattern in lower for pattern in DONE_PATTERNS)


def _cell(record: Mapping[str, str], key: str) -> str:
    return (record.get(key) or "").strip()


@dataclass
class SectionLookup:
    """Own-section lookup from pass one, plus duplicate-name bookkeeping."""

    sections: Dict[str, str] = field(default_factory=dict)
    collisions: int = 0
    duplicate_names: List[str] = field(default_factory=list)


@dataclass
class SectionResolution:
    """Effective section per record, in record order, and the section ranking."""

    effective: List[str]
    names: List[str]
    order: Dict[str, int]
    lookup: SectionLookup

    def order_of(self, section: str) -> int:
        return self.order.get(section, UNRANKED_SECTION_ORDER)


def build_section_lookup(records: Sequence[Mapping[str, str]]) -> SectionLookup:
    """
    Pass one: map task name → its own section.

    First occurrence wins. A first occurrence without a section of its own
    still claims the name, so a later duplicate never supplies a section for it.
    """
    lookup = SectionLookup()
    seen = set()
    for record in records:
        name = _cell(record, NAME)
        if not name:
            continue
        if name in seen:
            lookup.collisions += 1
            if name not in lookup.duplicate_names:
                lookup.duplicate_names.append(name)
            continue
        seen.add(name)
        own = _cell(record, SECTION)
        if own:
            lookup.sections[name] = own
    return lookup


def resolve_section(record: Mapping[str, str], lookup: SectionLookup) -> str:
    """Pass two for one record: own section, else parent's, else Uncategorized."""
    own = _cell(record, SECTION)
    if own:
        return own
    parent = _cell(record, PARENT_TASK)
    if parent and parent in lookup.sections:
        return lookup.sections[parent]
    return UNCATEGORIZED


def resolve_sections(records: Sequence[Mapping[str, str]]) -> SectionResolution:
    """Run both passes and rank sections by first appearance (1-based)."""
    lookup = build_section_lookup(records)
    if lookup.collisions:
        log.warning(
            "%d duplicate task name(s) found (%s); first occurrence wins for parent lookups",
            lookup.collisions,
            ", ".join(lookup.duplicate_names[:5]),
        )

    effective = [resolve_section(record, lookup) for record in records]

    names: List[str] = []
    order: Dict[str, int] = {}
    for section in effective:
        if section not in order:
            names.append(section)
            order[section] = len(names)

    return SectionResolution(effective=effective, names=names, order=order, lookup=lookup)
