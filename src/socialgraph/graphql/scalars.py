"""
Custom GraphQL scalars for entity identifiers
"""

from typing import Any, NewType

import strawberry
from graphql import GraphQLError, StringValueNode, ValueNode, print_ast

UUID = NewType("UUID", str)
# Membership in the closed set is left to the persistence lookup
MemberTypeId = NewType("MemberTypeId", str)


def identity(value: Any) -> Any:
    """Serialize / parse-value contract: identifiers pass through unchanged."""
    return value


def _string_literal_parser(scalar_name: str):
    def parse_literal(value_node: ValueNode, _variables: dict[str, Any] | None = None) -> str:
        # Only inline string literals are identifiers; ints, enums etc. are rejected
        if not isinstance(value_node, StringValueNode):
            raise GraphQLError(
                f"{scalar_name} cannot represent a non string value: {print_ast(value_node)}",
                value_node,
            )
        return value_node.value

    return parse_literal


parse_uuid_literal = _string_literal_parser("UUID")
parse_member_type_id_literal = _string_literal_parser("MemberTypeId")


SCALAR_MAP = {
    UUID: strawberry.scalar(
        name="UUID",
        description="Opaque unique identifier of a user, profile or post.",
        serialize=identity,
        parse_value=identity,
        parse_literal=parse_uuid_literal,
    ),
    MemberTypeId: strawberry.scalar(
        name="MemberTypeId",
        description="Identifier of a member type, e.g. `basic` or `business`.",
        serialize=identity,
        parse_value=identity,
        parse_literal=parse_member_type_id_literal,
    ),
}
