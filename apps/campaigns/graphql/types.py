import strawberry_django
from strawberry import auto
from apps.campaigns.models import Campaign


@strawberry_django.type(Campaign)
class CampaignType:
    id: auto
    name: auto
    description: auto
    created_at: auto
