"""Column mapping between uploaded file headers and the system field catalog.

A mapping is a plain ``dict`` of original file header (case preserved) to a
system header id. Headers left out of the mapping are not imported.

Every function here is pure: callers own the mapping and get a new one back
from anything that changes it.
"""

import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

ColumnMapping = Dict[str, str]


@dataclass
class MappingValidation:
    valid: bool
    missing_fields: List[str] = field(default_factory=list)
    unknown_headers: List[str] = field(default_factory=list)


def normalize_header(value: str) -> str:
    return value.strip().lower()


def header_id(system_header) -> str:
    # Model instances carry UUIDs, stored mappings carry strings
    return str(system_header.id)


def canonical_id(value) -> str:
    """Lowercase hyphenated form for UUID ids, other ids unchanged."""
    value = str(value).strip()
    try:
        return str(uuid.UUID(value))
    except ValueError:
        return value


def canonical_mapping(mapping: Mapping[str, str]) -> ColumnMapping:
    return {file_header: canonical_id(target) for file_header, target in mapping.items()}


def find_matching_header(file_header: str, system_headers: Iterable):
    """Return the first catalog header that matches ``file_header``.

    A header matches when the normalized names are equal or either one
    contains the other. The catalog is scanned in order and the first hit
    wins, there is no scoring between candidates.
    """
    normalized = normalize_header(file_header)
    for system_header in system_headers:
        candidate = normalize_header(system_header.name)
        if (
            normalized == candidate
            or candidate in normalized
            or normalized in candidate
        ):
            return system_header
    return None


def auto_map(file_headers: Sequence[str], system_headers: Sequence) -> ColumnMapping:
    mapping: ColumnMapping = {}
    for file_header in file_headers:
        match = find_matching_header(file_header, system_headers)
        if match is not None:
            mapping[file_header] = header_id(match)
    return mapping


def suggest_mapping(
    file_headers: Sequence[str],
    system_headers: Sequence,
    initial: Optional[Mapping[str, str]] = None,
) -> ColumnMapping:
    """Use ``initial`` when the caller already has a mapping, else auto-map."""
    if initial:
        return canonical_mapping(initial)
    return auto_map(file_headers, system_headers)


def set_column(
    mapping: Mapping[str, str],
    file_header: str,
    system_header_id: Optional[str],
) -> ColumnMapping:
    """Manual override for a single file header.

    An empty target drops the header from the import. Several headers may
    point at the same system field, nothing checks for that.
    """
    updated = dict(mapping)
    if not system_header_id:
        updated.pop(file_header, None)
    else:
        updated[file_header] = canonical_id(system_header_id)
    return updated


def missing_required_fields(mapping: Mapping[str, str], system_headers: Iterable) -> list:
    targeted = {canonical_id(target) for target in mapping.values()}
    return [
        system_header
        for system_header in system_headers
        if system_header.is_required and header_id(system_header) not in targeted
    ]


def validate_mapping(
    mapping: Mapping[str, str],
    system_headers: Iterable,
    file_headers: Optional[Sequence[str]] = None,
) -> MappingValidation:
    """Check required fields, and mapping keys against the file when given.

    Keys that are not headers of the file contribute nothing, so they do not
    count towards the required fields.
    """
    unknown: List[str] = []
    if file_headers is not None:
        known = set(file_headers)
        unknown = [file_header for file_header in mapping if file_header not in known]
        mapping = {
            file_header: target
            for file_header, target in mapping.items()
            if file_header in known
        }

    missing = missing_required_fields(mapping, system_headers)
    return MappingValidation(
        valid=not missing and not unknown,
        missing_fields=[system_header.name for system_header in missing],
        unknown_headers=unknown,
    )


def apply_mapping(row: Mapping[str, str], mapping: Mapping[str, str]) -> Dict[str, str]:
    """Project a parsed row onto system header ids.

    Unmapped columns are dropped. When two headers target the same id the
    later one in the mapping wins.
    """
    data: Dict[str, str] = {}
    for file_header, target in mapping.items():
        value = row.get(file_header)
        data[target] = "" if value is None else str(value)
    return data


def export_columns(mapping: Mapping[str, str]) -> List[str]:
    columns: List[str] = []
    for target in mapping.values():
        if target not in columns:
            columns.append(target)
    return columns
