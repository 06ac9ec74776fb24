"""Resolver package for the GraphQL schema.

Each relation field calls exactly one function here, and each function issues
exactly one call against the persistence client found in the request context.
"""

# Intentionally empty; functions are defined in sibling modules.
