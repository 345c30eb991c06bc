"""
Pydantic models for the catalog server's REST contract.

The request models describe the JSON body posted for one asset graph; the
response model validates what the server sends back, so that a deviation
from the contract is caught here rather than in the application core.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AssetProperties(CatalogModel):
    type_name: str
    qualified_name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    extended_properties: Dict[str, str]


class SchemaAttributeProperties(CatalogModel):
    qualified_name: str
    attribute_name: str
    element_position: int
    min_cardinality: int
    max_cardinality: int
    data_type: str


class SchemaTypeProperties(CatalogModel):
    type_name: str
    qualified_name: str
    display_name: str
    encoding_standard: str
    version_number: str
    attribute_count: int
    attributes: List[SchemaAttributeProperties]


class EndpointProperties(CatalogModel):
    guid: str
    qualified_name: str
    display_name: str
    address: str


class ConnectorTypeProperties(CatalogModel):
    guid: str
    qualified_name: str
    display_name: str
    connector_provider_class_name: str


class ConnectionProperties(CatalogModel):
    guid: str
    qualified_name: str
    display_name: str
    description: str
    endpoint: EndpointProperties
    connector_type: ConnectorTypeProperties
    configuration_properties: Optional[Dict[str, Any]] = None


class AssetGraphRequestBody(CatalogModel):
    """The body of the CSV file onboarding request."""

    asset: AssetProperties
    schema_type: Optional[SchemaTypeProperties] = None
    connection: ConnectionProperties


class GUIDResponse(BaseModel):
    """
    Represents the server's answer to a create request.

    On success `guid` is set; on failure the exception fields describe the
    server-side exception and `relatedHTTPCode` its category.
    """

    guid: Optional[str] = None
    related_http_code: int = Field(default=200, alias="relatedHTTPCode")
    exception_class_name: Optional[str] = Field(
        default=None, alias="exceptionClassName"
    )
    exception_error_message: Optional[str] = Field(
        default=None, alias="exceptionErrorMessage"
    )
