"""HTTP implementation of the CatalogStore port."""

from typing import Optional

import httpx

from ..application.domain import (
    AssetGraph,
    CatalogStore,
    ErrorKind,
    StoreOutcome,
)
from ..application.exceptions import CatalogAPIError

from .api_models import (
    AssetGraphRequestBody,
    AssetProperties,
    ConnectionProperties,
    ConnectorTypeProperties,
    EndpointProperties,
    GUIDResponse,
    SchemaAttributeProperties,
    SchemaTypeProperties,
)
from .base_client import CatalogServerClient

_CSV_FILES_PATH = "/assets/csv-files"

# Simple class names of the exceptions a catalog server reports.
_EXCEPTION_KINDS = {
    "InvalidParameterException": ErrorKind.INVALID_INPUT,
    "PropertyServerException": ErrorKind.STORE_UNAVAILABLE,
    "UserNotAuthorizedException": ErrorKind.NOT_AUTHORIZED,
}

_INVALID_INPUT_CODES = frozenset({400, 404, 409, 422})
_NOT_AUTHORIZED_CODES = frozenset({401, 403})


class HttpCatalogStore(CatalogServerClient, CatalogStore):
    """A catalog store reached through the catalog server's REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str,
        base_url: str,
        server_name: str,
        user_id: str,
        timeout: int,
    ):
        """Initializes the catalog store adapter."""
        super().__init__(client, token, base_url, server_name, user_id, timeout)
        self.endpoint = self.url_for(_CSV_FILES_PATH)

    def _map_to_request_body(self, graph: AssetGraph) -> AssetGraphRequestBody:
        """Maps the domain graph to its wire representation."""
        asset = graph.asset
        connection = graph.connection

        schema_type = None
        if graph.schema is not None:
            schema_type = SchemaTypeProperties(
                type_name=graph.schema.type_name,
                qualified_name=graph.schema.qualified_name,
                display_name=graph.schema.display_name,
                encoding_standard=graph.schema.encoding_standard,
                version_number=graph.schema.version_number,
                attribute_count=len(graph.schema.attributes),
                attributes=[
                    SchemaAttributeProperties(
                        qualified_name=attribute.qualified_name,
                        attribute_name=attribute.name,
                        element_position=attribute.position,
                        min_cardinality=attribute.min_cardinality,
                        max_cardinality=attribute.max_cardinality,
                        data_type=attribute.data_type,
                    )
                    for attribute in graph.schema.attributes
                ],
            )

        configuration = connection.configuration_properties
        return AssetGraphRequestBody(
            asset=AssetProperties(
                type_name=asset.type_name,
                qualified_name=asset.qualified_name,
                display_name=asset.display_name,
                description=asset.description,
                extended_properties=dict(asset.extended_properties),
            ),
            schema_type=schema_type,
            connection=ConnectionProperties(
                guid=connection.guid,
                qualified_name=connection.qualified_name,
                display_name=connection.display_name,
                description=connection.description,
                endpoint=EndpointProperties(
                    guid=connection.endpoint.guid,
                    qualified_name=connection.endpoint.qualified_name,
                    display_name=connection.endpoint.display_name,
                    address=connection.endpoint.address,
                ),
                connector_type=ConnectorTypeProperties(
                    guid=connection.connector_type.guid,
                    qualified_name=connection.connector_type.qualified_name,
                    display_name=connection.connector_type.display_name,
                    connector_provider_class_name=(
                        connection.connector_type.connector_provider_class_name
                    ),
                ),
                configuration_properties=(
                    dict(configuration) if configuration is not None else None
                ),
            ),
        )

    def _parse_body(self, response: httpx.Response) -> Optional[GUIDResponse]:
        """Validates the response body, or returns None if it is unreadable."""
        try:
            return GUIDResponse.model_validate(response.json())
        except ValueError:
            # Covers both malformed JSON and pydantic ValidationError.
            return None

    def _classify(self, response: httpx.Response) -> StoreOutcome:
        """Turns the server's answer into a StoreOutcome."""

        body = self._parse_body(response)

        code = response.status_code
        if code < 300 and body is not None:
            code = body.related_http_code

        if code < 300:
            if body is None or not body.guid:
                raise CatalogAPIError(
                    f"Catalog server accepted the request (HTTP "
                    f"{response.status_code}) but returned no guid"
                )
            return StoreOutcome.success(body.guid)

        kind = _kind_for(code, body)
        message = f"Catalog server returned HTTP {code}"
        if body is not None and body.exception_error_message:
            message = body.exception_error_message

        return StoreOutcome.failure(kind, message)

    async def submit(self, graph: AssetGraph) -> StoreOutcome:
        """
        Posts the asset graph to the catalog server as one request.

        This method serves as the public contract fulfillment for the
        CatalogStore port.

        Args:
            graph: The descriptors of the file being onboarded.

        Returns:
            The asset guid, or the category and message of the failure.

        Raises:
            CatalogAPIError: If the server reports success without a guid.
        """

        qualified_name = graph.asset.qualified_name
        self.logger.info(f"Submitting {qualified_name} to {self.endpoint}...")

        body = self._map_to_request_body(graph).model_dump(
            mode="json", by_alias=True, exclude_none=True
        )

        try:
            response = await self.post_json(self.endpoint, body)
        except httpx.TransportError as e:
            self.logger.warning(
                f"Catalog server unreachable for {qualified_name}: {e!r}"
            )
            return StoreOutcome.failure(
                ErrorKind.STORE_UNAVAILABLE,
                f"Catalog server unreachable: {type(e).__name__}",
            )

        outcome = self._classify(response)
        self.logger.info(
            f"Catalog server answered HTTP {response.status_code} "
            f"for {qualified_name}"
        )
        return outcome


def _kind_for(code: int, body: Optional[GUIDResponse]) -> ErrorKind:
    """Picks the failure category from the exception class or HTTP code."""

    if body is not None and body.exception_class_name:
        simple_name = body.exception_class_name.rsplit(".", 1)[-1]
        if simple_name in _EXCEPTION_KINDS:
            return _EXCEPTION_KINDS[simple_name]

    if code in _INVALID_INPUT_CODES:
        return ErrorKind.INVALID_INPUT
    if code in _NOT_AUTHORIZED_CODES:
        return ErrorKind.NOT_AUTHORIZED
    if code >= 500:
        return ErrorKind.STORE_UNAVAILABLE
    return ErrorKind.UNEXPECTED
