"""
This module defines the core domain models for the application.

These classes represent the pure, technology-agnostic catalog descriptors,
the request and result objects of an onboarding call, and the ports through
which the application reaches the catalog store and the audit log.
"""

import dataclasses
import enum
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple


CSV_FILE_TYPE_NAME = "CSVFile"
TABULAR_SCHEMA_TYPE_NAME = "TabularSchemaType"

DELIMITER_CHARACTER_PROPERTY = "delimiterCharacter"
QUOTE_CHARACTER_PROPERTY = "quoteCharacter"
FILE_TYPE_PROPERTY = "fileType"
COLUMN_NAMES_PROPERTY = "columnNames"


def frozen_mapping(values: Mapping[str, Any]) -> Mapping[str, Any]:
    """Returns a read-only copy of a mapping."""
    return MappingProxyType(dict(values))


# --- Request / Result ---

@dataclasses.dataclass(frozen=True)
class OnboardingRequest:
    """Caller-supplied description of a delimited text file."""

    full_path: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    column_headers: Optional[Sequence[str]] = None
    delimiter_character: Optional[str] = None
    quote_character: Optional[str] = None

    def __post_init__(self):
        if self.column_headers is not None:
            object.__setattr__(
                self, "column_headers", tuple(self.column_headers)
            )


class ErrorKind(enum.Enum):
    """The failure categories an onboarding call can end in."""

    INVALID_INPUT = "InvalidInput"
    STORE_UNAVAILABLE = "StoreUnavailable"
    NOT_AUTHORIZED = "NotAuthorized"
    UNEXPECTED = "Unexpected"

    @property
    def http_code(self) -> int:
        return _HTTP_CODES[self]


_HTTP_CODES = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.STORE_UNAVAILABLE: 500,
    ErrorKind.NOT_AUTHORIZED: 403,
    ErrorKind.UNEXPECTED: 500,
}


@dataclasses.dataclass(frozen=True)
class FailureDetail:
    """Structured error returned to the caller."""

    kind: ErrorKind
    message: str

    @property
    def http_code(self) -> int:
        return self.kind.http_code


@dataclasses.dataclass(frozen=True)
class OnboardingResult:
    """Outcome of one onboarding call: a guid or an error, never both."""

    guid: Optional[str] = None
    error: Optional[FailureDetail] = None

    @classmethod
    def succeeded(cls, guid: str) -> "OnboardingResult":
        return cls(guid=guid)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> "OnboardingResult":
        return cls(error=FailureDetail(kind=kind, message=message))

    @property
    def ok(self) -> bool:
        return self.guid is not None and self.error is None


@dataclasses.dataclass(frozen=True)
class StoreOutcome:
    """
    Tagged result of a store submission.

    Exactly one of `guid` and `error_kind` is expected to be set; the
    orchestrator treats anything else as an unexpected failure.
    """

    guid: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, guid: str) -> "StoreOutcome":
        return cls(guid=guid)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "StoreOutcome":
        return cls(error_kind=kind, message=message)


# --- Descriptors ---

@dataclasses.dataclass(frozen=True)
class IdentityConstants:
    """
    Fixed identities shared by every onboarded CSV file.

    Loaded from configuration at startup so that separate environments can
    use separate identity spaces.
    """

    endpoint_guid: str
    connector_type_guid: str
    connection_guid: str
    connector_provider_class_name: str


@dataclasses.dataclass(frozen=True)
class AssetDescriptor:
    qualified_name: str
    display_name: Optional[str]
    description: Optional[str]
    extended_properties: Mapping[str, str]
    type_name: str = CSV_FILE_TYPE_NAME


@dataclasses.dataclass(frozen=True)
class SchemaAttribute:
    """A single column of a tabular schema."""

    qualified_name: str
    name: str
    position: int
    min_cardinality: int = 1
    max_cardinality: int = 1
    data_type: str = "String"


@dataclasses.dataclass(frozen=True)
class SchemaDescriptor:
    qualified_name: str
    display_name: str
    attributes: Tuple[SchemaAttribute, ...]
    encoding_standard: str = CSV_FILE_TYPE_NAME
    version_number: str = "1.0"
    type_name: str = TABULAR_SCHEMA_TYPE_NAME


@dataclasses.dataclass(frozen=True)
class EndpointDescriptor:
    guid: str
    qualified_name: str
    display_name: str
    address: str


@dataclasses.dataclass(frozen=True)
class ConnectorTypeDescriptor:
    guid: str
    qualified_name: str
    display_name: str
    connector_provider_class_name: str


@dataclasses.dataclass(frozen=True)
class ConnectionDescriptor:
    guid: str
    qualified_name: str
    display_name: str
    description: str
    endpoint: EndpointDescriptor
    connector_type: ConnectorTypeDescriptor
    configuration_properties: Optional[Mapping[str, Any]] = None


@dataclasses.dataclass(frozen=True)
class AssetGraph:
    """The descriptors of one file, submitted to the store as a single unit."""

    asset: AssetDescriptor
    schema: Optional[SchemaDescriptor]
    connection: ConnectionDescriptor


# --- Ports (Interfaces) ---

class CatalogStore(ABC):
    """A port for the catalog engine that persists asset graphs."""

    @abstractmethod
    async def submit(self, graph: AssetGraph) -> StoreOutcome:
        """
        Persists the graph as one logical unit and returns its asset guid,
        or the category of the failure.
        """
        pass


class AuditLog(ABC):
    """A port for reporting unexpected failures."""

    @abstractmethod
    def record_unexpected(self, action: str, error: BaseException):
        """Records a fault that the application could not classify."""
        pass
