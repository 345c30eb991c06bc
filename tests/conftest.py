import pytest

from asset_onboarding.application.builder import DescriptorBuilder
from asset_onboarding.application.domain import IdentityConstants


TEST_IDENTITIES = IdentityConstants(
    endpoint_guid="endpoint-guid",
    connector_type_guid="connector-type-guid",
    connection_guid="connection-guid",
    connector_provider_class_name="example.CSVFileStoreProvider",
)


@pytest.fixture
def identities() -> IdentityConstants:
    return TEST_IDENTITIES


@pytest.fixture
def builder(identities: IdentityConstants) -> DescriptorBuilder:
    return DescriptorBuilder(identities)
