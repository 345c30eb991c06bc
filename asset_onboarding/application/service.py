"""
The core application service, containing the onboarding orchestration.

OnboardingService sequences the descriptor builder and a single store
submission, and folds every possible outcome into an OnboardingResult.
Nothing raised below this boundary reaches the caller.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from tqdm.contrib.logging import logging_redirect_tqdm
from tqdm.asyncio import tqdm_asyncio

from .builder import DescriptorBuilder
from .domain import *

logger = logging.getLogger(__name__)

_ONBOARD_ACTION = "onboard_csv_file"
_GENERIC_FAILURE_MESSAGE = (
    "An unexpected error occurred while onboarding the file. "
    "The failure has been recorded in the audit log."
)
_NO_REQUEST_MESSAGE = "No onboarding request was supplied."
_NO_FULL_PATH_MESSAGE = "The fullPath parameter must name the file to onboard."


class OnboardingService:
    """Orchestrates the onboarding of CSV files into the catalog."""

    def __init__(
        self,
        builder: DescriptorBuilder,
        store: CatalogStore,
        audit_log: Optional[AuditLog] = None,
        concurrent_submissions: int = 4,
    ):
        """Initializes the service with its collaborators (ports)."""
        self.builder = builder
        self.store = store
        self.audit_log = audit_log
        self.concurrent_submissions = concurrent_submissions

    async def onboard(
        self, request: Optional[OnboardingRequest]
    ) -> OnboardingResult:
        """
        Builds the descriptors for one file and submits them to the store.

        Args:
            request: The file description. None, or a request without a
                     full path, is answered with an INVALID_INPUT failure
                     and no store call.

        Returns:
            An OnboardingResult holding either the new asset guid or a
            structured error. Never raises.
        """

        if request is None:
            logger.warning(_NO_REQUEST_MESSAGE)
            return OnboardingResult.failed(
                ErrorKind.INVALID_INPUT, _NO_REQUEST_MESSAGE
            )

        if not isinstance(request.full_path, str) or not request.full_path.strip():
            logger.warning(f"Rejected request: {_NO_FULL_PATH_MESSAGE}")
            return OnboardingResult.failed(
                ErrorKind.INVALID_INPUT, _NO_FULL_PATH_MESSAGE
            )

        logger.info(f"Onboarding {request.full_path}...")

        try:
            graph = self.builder.build(request)
            outcome = await self.store.submit(graph)
        except Exception as e:
            self._report_unexpected(e)
            return OnboardingResult.failed(
                ErrorKind.UNEXPECTED, _GENERIC_FAILURE_MESSAGE
            )

        return self._resolve(request, outcome)

    def _resolve(
        self, request: OnboardingRequest, outcome: Optional[StoreOutcome]
    ) -> OnboardingResult:
        """Maps a store outcome onto the result returned to the caller."""

        outcome = outcome or StoreOutcome()
        kind = outcome.error_kind

        if kind is None and outcome.guid is not None:
            logger.info(
                f"Onboarded {request.full_path} as asset {outcome.guid}"
            )
            return OnboardingResult.succeeded(outcome.guid)

        if kind in (
            ErrorKind.INVALID_INPUT,
            ErrorKind.STORE_UNAVAILABLE,
            ErrorKind.NOT_AUTHORIZED,
        ):
            message = outcome.message or kind.value
            logger.error(
                f"Onboarding {request.full_path} failed ({kind.value}): "
                f"{message}"
            )
            return OnboardingResult.failed(kind, message)

        # Unexpected, unknown, or an outcome carrying neither guid nor error.
        self._report_unexpected(
            RuntimeError(
                f"Store returned {outcome!r} for {request.full_path}"
            )
        )
        return OnboardingResult.failed(
            ErrorKind.UNEXPECTED, _GENERIC_FAILURE_MESSAGE
        )

    def _report_unexpected(self, error: BaseException):
        """Logs the fault and hands it to the audit log, if one is wired."""

        logger.error(
            f"Unexpected {type(error).__name__} during onboarding: {error}"
        )
        if self.audit_log is None:
            return
        try:
            self.audit_log.record_unexpected(_ONBOARD_ACTION, error)
        except Exception as audit_error:
            logger.warning(
                f"Audit log rejected the failure report: {audit_error}"
            )

    async def _onboard_with_semaphore(
        self, request: OnboardingRequest, semaphore: asyncio.Semaphore
    ) -> OnboardingResult:
        """Wrapper to acquire a semaphore before onboarding one file."""
        async with semaphore:
            return await self.onboard(request)

    async def onboard_all(
        self, requests: Sequence[OnboardingRequest]
    ) -> List[OnboardingResult]:
        """Onboards several files with bounded concurrency, in input order."""

        if not requests:
            logger.info("No files to onboard.")
            return []

        semaphore = asyncio.Semaphore(self.concurrent_submissions)
        tasks = [
            asyncio.create_task(
                self._onboard_with_semaphore(request, semaphore)
            )
            for request in requests
        ]

        logger.info(
            f"Onboarding {len(tasks)} files with a concurrency "
            f"limit of {self.concurrent_submissions}..."
        )

        with logging_redirect_tqdm():
            results = await tqdm_asyncio.gather(
                *tasks, desc="Onboarding", unit="file"
            )

        failed = sum(1 for result in results if not result.ok)
        logger.info(
            f"Onboarding completed: {len(results) - failed} succeeded, "
            f"{failed} failed."
        )

        return list(results)
