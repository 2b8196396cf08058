import strawberry
from apps.authentication.graphql.queries import AuthQueries
from apps.campaigns.graphql.queries import CampaignQueries
from apps.campaigns.graphql.mutations import CampaignMutations
from apps.segments.graphql.queries import SegmentQueries
from apps.segments.graphql.mutations import SegmentMutations


@strawberry.type
class Query(CampaignQueries, SegmentQueries, AuthQueries):
    pass


@strawberry.type
class Mutation(CampaignMutations, SegmentMutations):
    pass


schema = strawberry.Schema(query=Query, mutation=Mutation)
