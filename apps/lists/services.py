"""Record store: uploaded lists and the records they create."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.db import DatabaseError, transaction

from .catalog import get_system_headers
from .mapping import apply_mapping, canonical_mapping, validate_mapping
from .models import Record, UploadedList
from .parsers import ParsedFile

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    uploaded_list: Optional[UploadedList] = None
    records_created: int = 0
    missing_fields: List[str] = field(default_factory=list)
    unknown_headers: List[str] = field(default_factory=list)

    @property
    def ok(self):
        return self.uploaded_list is not None


def create_list(campaign, user, filename, original_headers, mapping) -> UploadedList:
    return UploadedList.objects.create(
        campaign=campaign,
        user=user,
        filename=filename,
        original_headers=list(original_headers),
        mapped_headers=dict(mapping),
    )


def insert_record(uploaded_list: UploadedList, data: Dict[str, str]) -> Record:
    return Record.objects.create(
        uploaded_list=uploaded_list,
        campaign_id=uploaded_list.campaign_id,
        user_id=uploaded_list.user_id,
        data=data,
    )


def list_by_list(list_id):
    return list(Record.objects.filter(uploaded_list_id=list_id).order_by('created_at', 'id'))


def list_by_campaign(campaign_id):
    return list(Record.objects.filter(campaign_id=campaign_id).order_by('created_at', 'id'))


def get_list(list_id) -> Optional[UploadedList]:
    return UploadedList.objects.filter(pk=list_id).first()


def lists_by_campaign(campaign_id):
    return list(UploadedList.objects.filter(campaign_id=campaign_id).order_by('-created_at', '-id'))


def delete_by_list(list_id) -> bool:
    """Delete a list and its records. False when the store fails."""
    try:
        with transaction.atomic():
            deleted_records, _ = Record.objects.filter(uploaded_list_id=list_id).delete()
            UploadedList.objects.filter(pk=list_id).delete()
    except DatabaseError as e:
        logger.error(f"Error deleting list {list_id}: {str(e)}")
        return False

    logger.info(f"Deleted list {list_id} with {deleted_records} records")
    return True


def commit_upload(campaign, user, filename, parsed: ParsedFile, mapping, system_headers=None) -> CommitResult:
    """Validate ``mapping`` and store one record per parsed row.

    Nothing is written when a required field is unmapped or a mapping key
    is not a header of the file. Rows are inserted one at a time outside a
    transaction, so a failure part way through leaves the rows already
    written in place.
    """
    if system_headers is None:
        system_headers = get_system_headers()

    mapping = canonical_mapping(mapping)
    validation = validate_mapping(mapping, system_headers, parsed.headers)
    if not validation.valid:
        return CommitResult(
            missing_fields=validation.missing_fields,
            unknown_headers=validation.unknown_headers,
        )

    uploaded_list = create_list(campaign, user, filename, parsed.headers, mapping)

    created = 0
    for row in parsed.rows:
        insert_record(uploaded_list, apply_mapping(row, mapping))
        created += 1

    logger.info(f"Committed list {uploaded_list.id} ({filename}) to campaign {campaign.id}: {created} records")
    return CommitResult(uploaded_list=uploaded_list, records_created=created)


def available_fields(records) -> List[str]:
    """Distinct data keys across ``records`` in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        for key in record.data:
            seen.setdefault(key, None)
    return list(seen)
