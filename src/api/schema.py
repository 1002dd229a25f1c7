"""GraphQL schema combining all types and resolvers."""

import strawberry

from api.resolvers.mutations import Mutation
from api.resolvers.queries import Query
from api.resolvers.subscriptions import Subscription

schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)
