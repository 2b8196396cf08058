import strawberry
from strawberry.types import Info
from typing import List, Optional
from apps.campaigns.models import Campaign
from .types import CampaignType


def user_campaigns(info: Info):
    user = info.context.request.user
    if not user.is_authenticated:
        return Campaign.objects.none()
    return Campaign.objects.filter(user=user)


@strawberry.type
class CampaignQueries:

    @strawberry.field
    def campaigns(self, info: Info) -> List[CampaignType]:
        return list(user_campaigns(info))

    @strawberry.field
    def campaign(self, info: Info, id: strawberry.ID) -> Optional[CampaignType]:
        if not str(id).isdigit():
            return None
        return user_campaigns(info).filter(pk=id).first()
