import strawberry_django
from strawberry import auto
from apps.campaigns.graphql.types import CampaignType
from apps.lists.models import Record, SystemHeader
from apps.segments.models import Segment


@strawberry_django.type(SystemHeader)
class SystemHeaderType:
    id: auto
    name: auto
    is_required: auto


@strawberry_django.type(Record)
class RecordType:
    id: auto
    data: auto
    created_at: auto


@strawberry_django.type(Segment)
class SegmentType:
    id: auto
    name: auto
    filter_conditions: auto
    created_at: auto
    campaign: CampaignType
