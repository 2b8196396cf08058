"""Segment store and evaluation against the record store."""

import logging
from typing import List, Optional

from django.db import DatabaseError

from apps.lists.services import list_by_campaign
from .filters import FilterCondition, filter_records
from .models import Segment

logger = logging.getLogger(__name__)


def _serialize_conditions(conditions) -> list:
    return [
        condition.to_dict() if isinstance(condition, FilterCondition) else dict(condition)
        for condition in conditions
    ]


def create_segment(campaign, user, name, filter_conditions) -> Segment:
    return Segment.objects.create(
        campaign=campaign,
        user=user,
        name=name,
        filter_conditions=_serialize_conditions(filter_conditions),
    )


def get_segment(segment_id) -> Optional[Segment]:
    return Segment.objects.filter(pk=segment_id).first()


def update_segment(segment_id, name, filter_conditions) -> Optional[Segment]:
    """Replace name and conditions wholesale."""
    segment = get_segment(segment_id)
    if segment is None:
        return None

    segment.name = name
    segment.filter_conditions = _serialize_conditions(filter_conditions)
    segment.save(update_fields=['name', 'filter_conditions'])
    return segment


def delete_segment(segment_id) -> bool:
    try:
        Segment.objects.filter(pk=segment_id).delete()
    except DatabaseError as e:
        logger.error(f"Error deleting segment {segment_id}: {str(e)}")
        return False
    return True


def list_segments_by_campaign(campaign_id) -> List[Segment]:
    return list(Segment.objects.filter(campaign_id=campaign_id).order_by('-created_at', '-id'))


def evaluate_segment(segment: Segment) -> list:
    return filter_records(list_by_campaign(segment.campaign_id), segment.get_conditions())


def get_records_by_segment(segment_id) -> list:
    """Records matching the segment; a segment that does not exist matches nothing."""
    segment = get_segment(segment_id)
    if segment is None:
        logger.debug(f"Segment {segment_id} not found, returning no records")
        return []
    return evaluate_segment(segment)
