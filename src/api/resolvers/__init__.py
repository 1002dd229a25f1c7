"""Query, mutation and subscription resolvers."""
