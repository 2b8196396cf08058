import strawberry
from strawberry.types import Info
from typing import List
from apps.campaigns.models import Campaign
from apps.segments import services
from apps.segments.filters import parse_conditions
from .types import SegmentType


@strawberry.input
class FilterConditionInput:
    field: str
    operator: str
    value: str = ""


@strawberry.input
class SegmentInput:
    campaign_id: strawberry.ID
    name: str
    filter_conditions: List[FilterConditionInput] = strawberry.field(default_factory=list)


@strawberry.type
class SegmentMutations:

    @strawberry.mutation
    def create_segment(self, info: Info, input: SegmentInput) -> SegmentType:
        user = info.context.request.user
        if not user.is_authenticated:
            raise PermissionError("Authentication required")

        campaign = None
        if str(input.campaign_id).isdigit():
            campaign = Campaign.objects.filter(pk=input.campaign_id, user=user).first()
        if campaign is None:
            raise ValueError("Campaign not found")

        # InvalidFilterCondition surfaces as a GraphQL error
        conditions = parse_conditions(
            {'field': c.field, 'operator': c.operator, 'value': c.value}
            for c in input.filter_conditions
        )
        return services.create_segment(campaign, user, input.name, conditions)
