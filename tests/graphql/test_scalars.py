"""
Tests for the identifier scalars
"""

import pytest
from graphql import BooleanValueNode, GraphQLError, IntValueNode, StringValueNode

from socialgraph.graphql.scalars import (
    identity,
    parse_member_type_id_literal,
    parse_uuid_literal,
)


@pytest.mark.unit
class TestScalarCoercion:
    """serialize / parse_value / parse_literal contracts."""

    def test_serialize_and_parse_value_are_identity(self):
        value = "0b7f6c1e-2d53-4a39-9c77-0f3a1b2c3d4e"
        assert identity(value) is value

    @pytest.mark.parametrize("parser", [parse_uuid_literal, parse_member_type_id_literal])
    def test_string_literal_is_accepted(self, parser):
        assert parser(StringValueNode(value="business")) == "business"

    @pytest.mark.parametrize(
        "node",
        [IntValueNode(value="42"), BooleanValueNode(value=True)],
    )
    def test_non_string_literal_is_rejected(self, node):
        with pytest.raises(GraphQLError, match="cannot represent a non string value"):
            parse_uuid_literal(node)

    def test_member_type_literal_rejection_names_the_scalar(self):
        with pytest.raises(GraphQLError, match="MemberTypeId"):
            parse_member_type_id_literal(IntValueNode(value="1"))


@pytest.mark.integration
class TestScalarsInQueries:
    """Scalar behaviour as seen through query execution."""

    @pytest.mark.asyncio
    async def test_int_literal_for_uuid_is_a_validation_error(self, gql):
        result = await gql("{ user(id: 123) { id } }")

        assert result.data is None
        assert result.errors
        assert "UUID" in result.errors[0].message

    @pytest.mark.asyncio
    async def test_int_literal_for_member_type_id_is_a_validation_error(self, gql):
        result = await gql("{ memberType(id: 7) { id } }")

        assert result.data is None
        assert result.errors

    @pytest.mark.asyncio
    async def test_known_member_type_literal_resolves(self, gql):
        result = await gql('{ memberType(id: "business") { id discount postsLimitPerMonth } }')

        assert result.errors is None
        assert result.data == {
            "memberType": {"id": "business", "discount": 7.7, "postsLimitPerMonth": 100}
        }

    @pytest.mark.asyncio
    async def test_unknown_member_type_literal_parses_and_resolves_to_null(self, gql):
        result = await gql('{ memberType(id: "not-a-real-type") { id } }')

        assert result.errors is None
        assert result.data == {"memberType": None}

    @pytest.mark.asyncio
    async def test_identifier_variables_pass_through_unchanged(self, gql, create_user):
        user = await create_user(name="Bob")

        result = await gql(
            "query GetUser($id: UUID!) { user(id: $id) { id name } }", {"id": user["id"]}
        )

        assert result.errors is None
        assert result.data == {"user": {"id": user["id"], "name": "Bob"}}
