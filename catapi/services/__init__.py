"""
Use cases for the cat API.

Each service orchestrates the repository and the domain helpers. Routers and
GraphQL resolvers call these services instead of touching sessions directly.
"""
