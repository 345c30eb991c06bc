"""
Construction of the catalog descriptors for a CSV file.

The builder is a pure function of the request and the configured identity
constants: it performs no I/O and has no failure modes of its own. Requests
reach it with a non-blank full path; OnboardingService rejects the rest.
"""

from pathlib import PurePath
from typing import Optional, Sequence, Tuple

from .domain import *

DEFAULT_DELIMITER_CHARACTER = ","
DEFAULT_QUOTE_CHARACTER = '"'
DEFAULT_FILE_TYPE = "csv"

_ENDPOINT_NAME_TEMPLATE = "StructuredFileStore.Endpoint.{path}"
_CONNECTOR_TYPE_NAME_TEMPLATE = "StructuredFileStore.ConnectorType.{path}"
_CONNECTION_NAME_SUFFIX = "Structured File Store Connection"
_CONNECTION_DESCRIPTION = "StructuredFileStore connection."
_CONNECTOR_TYPE_DISPLAY_NAME = "CSV File Store Connector"


def asset_qualified_name(full_path: str) -> str:
    """The natural key of a CSV file asset."""
    return f"{CSV_FILE_TYPE_NAME}:{full_path}"


def file_type_of(full_path: str) -> str:
    """Text after the last '.' of the path as given, or 'csv' if none."""
    _, dot, extension = full_path.rpartition(".")
    return extension if dot and extension else DEFAULT_FILE_TYPE


class DescriptorBuilder:
    """Turns an OnboardingRequest into the AssetGraph submitted to the store."""

    def __init__(self, identities: IdentityConstants):
        self.identities = identities

    def build(self, request: OnboardingRequest) -> AssetGraph:
        """
        Builds the asset, optional schema and connection descriptors.

        Args:
            request: The description of the file to onboard.

        Returns:
            The descriptor graph. Its schema is None unless column headers
            were supplied.
        """

        qualified_name = asset_qualified_name(request.full_path)

        delimiter = _resolve(
            request.delimiter_character, DEFAULT_DELIMITER_CHARACTER
        )
        quote = _resolve(request.quote_character, DEFAULT_QUOTE_CHARACTER)

        asset = AssetDescriptor(
            qualified_name=qualified_name,
            display_name=request.display_name,
            description=request.description,
            extended_properties=frozen_mapping({
                DELIMITER_CHARACTER_PROPERTY: delimiter,
                QUOTE_CHARACTER_PROPERTY: quote,
                FILE_TYPE_PROPERTY: file_type_of(request.full_path),
            }),
        )

        schema = None
        if request.column_headers is not None:
            schema = self._build_schema(
                qualified_name,
                request.display_name or PurePath(request.full_path).name,
                request.column_headers,
            )

        connection = self._build_connection(
            request.full_path, request.column_headers, delimiter, quote
        )

        return AssetGraph(asset=asset, schema=schema, connection=connection)

    def _build_schema(
        self,
        anchor_qualified_name: str,
        anchor_display_name: str,
        column_headers: Sequence[str],
    ) -> SchemaDescriptor:
        """One string-typed attribute per header, in header order."""

        schema_qualified_name = f"{anchor_qualified_name}:TabularSchema"
        attributes: Tuple[SchemaAttribute, ...] = tuple(
            SchemaAttribute(
                qualified_name=f"{schema_qualified_name}:Column:{header}",
                name=header,
                position=position,
            )
            for position, header in enumerate(column_headers)
        )

        return SchemaDescriptor(
            qualified_name=schema_qualified_name,
            display_name=f"{anchor_display_name} Tabular Schema",
            attributes=attributes,
        )

    def _build_connection(
        self,
        full_path: str,
        column_headers: Optional[Sequence[str]],
        delimiter: str,
        quote: str,
    ) -> ConnectionDescriptor:
        endpoint_name = _ENDPOINT_NAME_TEMPLATE.format(path=full_path)
        endpoint = EndpointDescriptor(
            guid=self.identities.endpoint_guid,
            qualified_name=endpoint_name,
            display_name=endpoint_name,
            address=full_path,
        )

        connector_type = ConnectorTypeDescriptor(
            guid=self.identities.connector_type_guid,
            qualified_name=_CONNECTOR_TYPE_NAME_TEMPLATE.format(path=full_path),
            display_name=_CONNECTOR_TYPE_DISPLAY_NAME,
            connector_provider_class_name=(
                self.identities.connector_provider_class_name
            ),
        )

        candidates = {
            DELIMITER_CHARACTER_PROPERTY: delimiter,
            QUOTE_CHARACTER_PROPERTY: quote,
            COLUMN_NAMES_PROPERTY: (
                tuple(column_headers) if column_headers is not None else None
            ),
        }
        configuration = {
            key: value for key, value in candidates.items() if value is not None
        }

        connection_name = full_path + _CONNECTION_NAME_SUFFIX
        return ConnectionDescriptor(
            guid=self.identities.connection_guid,
            qualified_name=connection_name,
            display_name=connection_name,
            description=_CONNECTION_DESCRIPTION,
            endpoint=endpoint,
            connector_type=connector_type,
            configuration_properties=(
                frozen_mapping(configuration) if configuration else None
            ),
        )


def _resolve(value: Optional[str], default: str) -> str:
    return default if value is None else value
