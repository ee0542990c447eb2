"""End-to-end submission pipeline."""

import asyncio
import logging
import time
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, TypeVar

from hermes_ai.classifier import Classifier
from hermes_ai.clustering import ClusterManager
from hermes_ai.data import MAX_TEXT_LENGTH, MisinformationItem, Usage
from hermes_ai.errors import (
    AnalysisUnavailable,
    ContentPolicyRejection,
    HermesError,
    PartialClusterWrite,
    StoreUnavailable,
    UpstreamError,
    ValidationError,
)
from hermes_ai.policy import ContentValidator, rejection_message
from hermes_ai.run_logger import RunLogger, RunRecord
from hermes_ai.similarity import SimilarityOracle
from hermes_ai.store import StoreHandle

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StageTimeouts:
    """Upper bound in seconds for each external call."""

    validation: float = 15.0
    classification: float = 30.0
    similarity: float = 10.0
    template: float = 30.0
    store: float = 10.0


def check_text(text: object) -> str:
    """Validate submission shape and length.

    Raises:
        ValidationError: If text is not a non-blank string of at most
            MAX_TEXT_LENGTH characters.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Text is required and must be a string")
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(f"Text is too long (max {MAX_TEXT_LENGTH} characters)")
    return text


class SubmissionPipeline:
    """Validate, classify, cluster and persist one submission.

    Flow:
    1. Shape/length check (no external calls)
    2. Content-policy validation
    3. Classification
    4. Similarity lookup
    5. Cluster resolution (template generation for matches)
    6. Create the item, then relabel matched peers

    Any dependency failure or timeout in steps 2-6 before the create raises
    ``AnalysisUnavailable`` and nothing is written. A failure after the create
    raises ``PartialClusterWrite``.

    Args:
        validator: Content-policy validator.
        classifier: Misinformation classifier.
        oracle: Similarity oracle.
        cluster_manager: Cluster resolver.
        store: Store handle, opened on first use.
        timeouts: Per-stage timeouts.
        run_logger: Optional RunLogger for per-submission JSON logs.
    """

    def __init__(
        self,
        *,
        validator: ContentValidator,
        classifier: Classifier,
        oracle: SimilarityOracle,
        cluster_manager: ClusterManager,
        store: StoreHandle,
        timeouts: StageTimeouts | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._validator = validator
        self._classifier = classifier
        self._oracle = oracle
        self._cluster_manager = cluster_manager
        self._store = store
        self._timeouts = timeouts or StageTimeouts()
        self._run_logger = run_logger

    async def submit(self, text: object) -> MisinformationItem:
        """Run a submission through the full pipeline.

        Args:
            text: Raw submitted text.

        Returns:
            The persisted item.

        Raises:
            ValidationError: Bad input shape or length.
            ContentPolicyRejection: Content not suitable for fact-checking.
            AnalysisUnavailable: A dependency failed; nothing was persisted.
            PartialClusterWrite: The item exists but some peers kept stale
                cluster metadata.
        """
        checked = check_text(text)
        record = self._run_logger.start_run(checked) if self._run_logger else None
        usage = Usage()

        try:
            item = await self._run(checked, record, usage)
        except HermesError as e:
            if self._run_logger:
                self._run_logger.finish_run(
                    record,
                    usage,
                    item_id=e.item_id if isinstance(e, PartialClusterWrite) else None,
                    error=e.kind,
                )
            raise

        if self._run_logger:
            self._run_logger.finish_run(
                record, usage, item_id=item.id, cluster_id=item.cluster_id
            )
        return item

    async def _run(self, text: str, record: RunRecord | None, usage: Usage) -> MisinformationItem:
        timeouts = self._timeouts

        validation, stage_usage = await self._stage(
            record,
            stage="content_validation",
            component=self._validator,
            call=self._validator.validate(text),
            timeout=timeouts.validation,
            input_data=text,
        )
        usage += stage_usage
        if not validation.is_valid:
            logger.info("Submission rejected by content policy: %s", validation.content_type)
            raise ContentPolicyRejection(validation.content_type, rejection_message(validation))

        analysis, stage_usage = await self._stage(
            record,
            stage="classification",
            component=self._classifier,
            call=self._classifier.analyze(text),
            timeout=timeouts.classification,
            input_data=text,
        )
        usage += stage_usage

        matches, stage_usage = await self._stage(
            record,
            stage="similarity",
            component=self._oracle,
            call=self._oracle.find_similar(text),
            timeout=timeouts.similarity,
            input_data=text,
        )
        usage += stage_usage

        decision, stage_usage = await self._stage(
            record,
            stage="clustering",
            component=self._cluster_manager,
            call=self._cluster_manager.resolve(text, matches),
            timeout=timeouts.template,
            input_data=matches,
        )
        usage += stage_usage

        item = MisinformationItem.from_analysis(text, analysis, decision.identity)

        t0 = time.monotonic()
        try:
            store = await self._store.get()
            created = await self._cluster_manager.commit(
                store, item, decision, timeout=timeouts.store
            )
        except StoreUnavailable as e:
            logger.warning("Persisting submission failed: %s", e)
            raise AnalysisUnavailable("persistence") from e

        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage="persistence",
                component=type(store).__name__,
                input_data={"peer_ids": list(decision.peer_ids)},
                output_data={"item_id": created.id, "cluster_id": created.cluster_id},
                usage=None,
                duration_seconds=time.monotonic() - t0,
            )
        return created

    async def _stage(
        self,
        record: RunRecord | None,
        stage: str,
        component: Any,
        call: Awaitable[tuple[T, Usage]],
        timeout: float,
        input_data: Any,
    ) -> tuple[T, Usage]:
        """Await one external call with a timeout, mapping failures to AnalysisUnavailable."""
        t0 = time.monotonic()
        try:
            output, stage_usage = await asyncio.wait_for(call, timeout)
        except TimeoutError as e:
            logger.warning("Stage %s timed out after %.1fs", stage, timeout)
            raise AnalysisUnavailable(stage) from e
        except UpstreamError as e:
            logger.warning("Stage %s failed: %s", stage, e, exc_info=True)
            raise AnalysisUnavailable(stage) from e

        if self._run_logger:
            self._run_logger.log_stage(
                record,
                stage=stage,
                component=type(component).__name__,
                input_data=input_data,
                output_data=output,
                usage=stage_usage,
                duration_seconds=time.monotonic() - t0,
            )
        return (output, stage_usage)
