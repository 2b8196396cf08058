import strawberry
from strawberry.types import Info
from typing import List
from apps.lists.catalog import get_system_headers
from apps.segments.models import Segment
from apps.segments.services import evaluate_segment
from .types import RecordType, SegmentType, SystemHeaderType


def user_segments(info: Info):
    user = info.context.request.user
    if not user.is_authenticated:
        return Segment.objects.none()
    return Segment.objects.filter(user=user)


@strawberry.type
class SegmentQueries:

    @strawberry.field
    def system_headers(self) -> List[SystemHeaderType]:
        return get_system_headers()

    @strawberry.field
    def segments(self, info: Info, campaign_id: strawberry.ID) -> List[SegmentType]:
        if not str(campaign_id).isdigit():
            return []
        return list(user_segments(info).filter(campaign_id=campaign_id).select_related('campaign'))

    @strawberry.field
    def segment_records(self, info: Info, segment_id: strawberry.ID) -> List[RecordType]:
        if not str(segment_id).isdigit():
            return []
        segment = user_segments(info).filter(pk=segment_id).first()
        if segment is None:
            return []
        return evaluate_segment(segment)
