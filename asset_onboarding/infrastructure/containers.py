"""
Dependency Injection container for the asset_onboarding component.

This container uses the `dependency-injector` library to wire together the
onboarding service, the descriptor builder and the infrastructure adapters,
based on the Dynaconf settings.
"""

from dependency_injector import containers, providers
import httpx

from ..application.builder import DescriptorBuilder
from ..application.domain import *
from ..application.service import OnboardingService
from ..settings import settings

from .audit import JsonlAuditLog
from .catalog_client import HttpCatalogStore


class Container(containers.DeclarativeContainer):
    """DI container for wiring the application components."""

    config = providers.Object(settings)

    http_client = providers.Singleton(httpx.AsyncClient)

    identities = providers.Singleton(
        IdentityConstants,
        endpoint_guid=config.provided.identities.endpoint_guid,
        connector_type_guid=config.provided.identities.connector_type_guid,
        connection_guid=config.provided.identities.connection_guid,
        connector_provider_class_name=(
            config.provided.identities.connector_provider_class_name
        ),
    )

    builder = providers.Factory(DescriptorBuilder, identities=identities)

    catalog_store: providers.Factory[CatalogStore] = providers.Factory(
        HttpCatalogStore,
        client=http_client,
        token=config.provided.catalog.api_token,
        base_url=config.provided.catalog.base_url,
        server_name=config.provided.catalog.server_name,
        user_id=config.provided.catalog.user_id,
        timeout=config.provided.catalog.timeout,
    )

    audit_log: providers.Factory[AuditLog] = providers.Factory(
        JsonlAuditLog,
        jsonl_path=config.provided.audit.jsonl_path,
    )

    onboarding_service = providers.Factory(
        OnboardingService,
        builder=builder,
        store=catalog_store,
        audit_log=audit_log,
        concurrent_submissions=(
            config.provided.onboarding.concurrent_submissions
        ),
    )
