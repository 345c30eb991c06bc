import asyncio

import pytest

from asset_onboarding.application.domain import (
    AuditLog,
    CatalogStore,
    ErrorKind,
    OnboardingRequest,
    StoreOutcome,
)
from asset_onboarding.application.service import OnboardingService


class _Store(CatalogStore):
    def __init__(self, outcome=None, error=None):
        self.outcome = outcome
        self.error = error
        self.graphs = []

    async def submit(self, graph):
        self.graphs.append(graph)
        if self.error is not None:
            raise self.error
        return self.outcome


class _Audit(AuditLog):
    def __init__(self, fail=False):
        self.fail = fail
        self.records = []

    def record_unexpected(self, action, error):
        self.records.append((action, error))
        if self.fail:
            raise RuntimeError("audit down")


def _request(path="/data/x.csv", **kwargs):
    return OnboardingRequest(full_path=path, **kwargs)


def _onboard(service, request):
    return asyncio.run(service.onboard(request))


def test_success_returns_guid_only(builder):
    store = _Store(StoreOutcome.success("asset-1"))
    service = OnboardingService(builder, store, _Audit())

    result = _onboard(service, _request(column_headers=["a", "b"]))

    assert result.guid == "asset-1"
    assert result.error is None
    assert result.ok is True
    assert len(store.graphs) == 1
    assert store.graphs[0].asset.qualified_name == "CSVFile:/data/x.csv"
    assert len(store.graphs[0].schema.attributes) == 2


def test_missing_request_is_invalid_input_without_store_call(builder):
    store = _Store(StoreOutcome.success("asset-1"))
    service = OnboardingService(builder, store, _Audit())

    result = _onboard(service, None)

    assert result.guid is None
    assert result.error.kind is ErrorKind.INVALID_INPUT
    assert result.error.http_code == 400
    assert store.graphs == []


@pytest.mark.parametrize(
    "kind, http_code",
    [
        (ErrorKind.INVALID_INPUT, 400),
        (ErrorKind.STORE_UNAVAILABLE, 500),
        (ErrorKind.NOT_AUTHORIZED, 403),
    ],
)
def test_classified_store_failures_pass_through(builder, kind, http_code):
    audit = _Audit()
    store = _Store(StoreOutcome.failure(kind, "store said no"))
    service = OnboardingService(builder, store, audit)

    result = _onboard(service, _request())

    assert result.guid is None
    assert result.error.kind is kind
    assert result.error.message == "store said no"
    assert result.error.http_code == http_code
    assert audit.records == []


def test_not_authorized_store_failure(builder):
    store = _Store(
        StoreOutcome.failure(ErrorKind.NOT_AUTHORIZED, "user may not create assets")
    )
    service = OnboardingService(builder, store)

    result = _onboard(service, _request())

    assert result.error.kind is ErrorKind.NOT_AUTHORIZED
    assert result.guid is None


def test_raised_fault_is_audited_and_hidden(builder):
    audit = _Audit()
    store = _Store(error=KeyError("secret internals"))
    service = OnboardingService(builder, store, audit)

    result = _onboard(service, _request())

    assert result.guid is None
    assert result.error.kind is ErrorKind.UNEXPECTED
    assert "secret internals" not in result.error.message
    assert len(audit.records) == 1
    action, error = audit.records[0]
    assert action == "onboard_csv_file"
    assert isinstance(error, KeyError)


def test_unexpected_outcome_kind_is_audited(builder):
    audit = _Audit()
    store = _Store(StoreOutcome.failure(ErrorKind.UNEXPECTED, "internal detail"))
    service = OnboardingService(builder, store, audit)

    result = _onboard(service, _request())

    assert result.error.kind is ErrorKind.UNEXPECTED
    assert "internal detail" not in result.error.message
    assert len(audit.records) == 1


@pytest.mark.parametrize("outcome", [StoreOutcome(), None])
def test_empty_outcome_is_unexpected(builder, outcome):
    store = _Store(outcome)
    service = OnboardingService(builder, store, _Audit())

    result = _onboard(service, _request())

    assert result.guid is None
    assert result.error.kind is ErrorKind.UNEXPECTED


def test_outcome_with_guid_and_error_is_never_both(builder):
    store = _Store(
        StoreOutcome(guid="g", error_kind=ErrorKind.STORE_UNAVAILABLE, message="m")
    )
    service = OnboardingService(builder, store)

    result = _onboard(service, _request())

    assert result.guid is None
    assert result.error.kind is ErrorKind.STORE_UNAVAILABLE


def test_failing_audit_log_does_not_change_result(builder):
    store = _Store(error=RuntimeError("boom"))
    service = OnboardingService(builder, store, _Audit(fail=True))

    result = _onboard(service, _request())

    assert result.error.kind is ErrorKind.UNEXPECTED
    assert result.guid is None


def test_missing_audit_log_is_tolerated(builder):
    service = OnboardingService(builder, _Store(error=RuntimeError("boom")), None)

    result = _onboard(service, _request())

    assert result.error.kind is ErrorKind.UNEXPECTED


def test_onboard_all_keeps_input_order(builder):
    class _PathStore(CatalogStore):
        async def submit(self, graph):
            path = graph.connection.endpoint.address
            if path.endswith("bad.csv"):
                return StoreOutcome.failure(ErrorKind.INVALID_INPUT, "bad path")
            await asyncio.sleep(0)
            return StoreOutcome.success(f"guid:{path}")

    service = OnboardingService(builder, _PathStore(), concurrent_submissions=2)
    requests = [_request("/data/a.csv"), _request("/data/bad.csv"), _request("/data/c.csv")]

    results = asyncio.run(service.onboard_all(requests))

    assert [r.guid for r in results] == ["guid:/data/a.csv", None, "guid:/data/c.csv"]
    assert results[1].error.kind is ErrorKind.INVALID_INPUT


def test_onboard_all_with_no_requests(builder):
    service = OnboardingService(builder, _Store(StoreOutcome.success("g")))

    assert asyncio.run(service.onboard_all([])) == []


@pytest.mark.parametrize("full_path", [None, "", "   "])
def test_request_without_full_path_is_invalid_input(builder, full_path):
    audit = _Audit()
    store = _Store(StoreOutcome.success("asset-1"))
    service = OnboardingService(builder, store, audit)

    result = _onboard(service, OnboardingRequest(full_path=full_path))

    assert result.guid is None
    assert result.error.kind is ErrorKind.INVALID_INPUT
    assert "fullPath" in result.error.message
    assert store.graphs == []
    assert audit.records == []


def test_empty_header_list_is_submitted_with_empty_schema(builder):
    store = _Store(StoreOutcome.success("asset-1"))
    service = OnboardingService(builder, store)

    result = _onboard(service, _request(column_headers=[]))

    assert result.guid == "asset-1"
    assert store.graphs[0].schema.attributes == ()
