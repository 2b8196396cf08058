import strawberry
from strawberry.types import Info
from typing import Optional
from apps.campaigns.models import Campaign
from .types import CampaignType


@strawberry.input
class CampaignInput:
    name: str
    description: Optional[str] = None


@strawberry.type
class CampaignMutations:

    @strawberry.mutation
    def create_campaign(self, info: Info, input: CampaignInput) -> CampaignType:
        user = info.context.request.user
        if not user.is_authenticated:
            raise PermissionError("Authentication required")
        if not input.name.strip():
            raise ValueError("Name is required")
        return Campaign.objects.create(
            user=user,  # Forzar owner
            name=input.name.strip(),
            description=input.description or None,
        )
