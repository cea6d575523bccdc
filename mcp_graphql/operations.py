# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/operations.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Root operation extraction.

Reads the fields of the schema's Query and Mutation root types, in declaration
order, and flattens each one into an ``OperationDescriptor``. Referenced types
are not visited here.
"""

# Standard
from typing import List, Optional, Sequence

# Third-Party
from graphql import GraphQLObjectType, GraphQLSchema

# First-Party
from mcp_graphql.models import ArgumentDescriptor, declared_default, OperationDescriptor, OperationKind
from mcp_graphql.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


def _root_type(schema: GraphQLSchema, kind: OperationKind) -> Optional[GraphQLObjectType]:
    """Return the root object type for an operation kind.

    Args:
        schema: Source schema.
        kind: Operation kind.

    Returns:
        The root type, or None when the schema does not define one.
    """
    if kind is OperationKind.QUERY:
        return schema.query_type
    return schema.mutation_type


def extract_operations(
    schema: GraphQLSchema,
    allowed_kinds: Sequence[OperationKind] = (OperationKind.QUERY, OperationKind.MUTATION),
) -> List[OperationDescriptor]:
    """Extract query and mutation root fields as operation descriptors.

    Queries come first, then mutations; within a kind the root type's field
    order is kept, so repeated calls on the same schema give the same list.

    Args:
        schema: Schema to read.
        allowed_kinds: Kinds to extract.

    Returns:
        List of operation descriptors.
    """
    operations: List[OperationDescriptor] = []
    for kind in (OperationKind.QUERY, OperationKind.MUTATION):
        if kind not in allowed_kinds:
            continue
        root = _root_type(schema, kind)
        if root is None:
            continue
        for field_name, field in root.fields.items():
            arguments = tuple(
                ArgumentDescriptor(name=arg_name, type=arg.type, default_value=declared_default(arg), description=arg.description)
                for arg_name, arg in field.args.items()
            )
            operations.append(
                OperationDescriptor(
                    name=field_name,
                    kind=kind,
                    description=field.description,
                    arguments=arguments,
                    output_type=field.type,
                )
            )

    logger.debug(f"Extracted {len(operations)} operations ({', '.join(k.value for k in allowed_kinds)})")
    return operations
