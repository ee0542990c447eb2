"""Error taxonomy for the submission and read paths.

Callers branch on the exception class (or its ``kind``), never on the message.
``retryable`` marks upstream failures where the same request may succeed later.
Messages on upstream errors are generic; the underlying cause is chained via
``__cause__`` and logged, not shown to untrusted callers.
"""

from hermes_ai.data import ContentType


class HermesError(Exception):
    """Base class for every error raised by this package."""

    kind = "error"
    retryable = False


class ValidationError(HermesError):
    """Input has the wrong shape or length."""

    kind = "validation"


class ContentPolicyRejection(HermesError):
    """Content is not suitable for fact-checking.

    Args:
        content_type: Reason code, or None when the validator gave an
            unrecognised one.
        message: User-facing explanation.
    """

    kind = "content_policy"

    def __init__(self, content_type: ContentType | None, message: str) -> None:
        super().__init__(message)
        self.content_type = content_type
        self.message = message


class UpstreamError(HermesError):
    """A dependency (model provider, similarity service, store) failed."""

    kind = "upstream"
    retryable = True


class ClassificationError(UpstreamError):
    kind = "classification"


class TemplateError(UpstreamError):
    kind = "template"


class SimilarityError(UpstreamError):
    kind = "similarity"


class StoreUnavailable(UpstreamError):
    kind = "store_unavailable"


class AnalysisUnavailable(HermesError):
    """A submission failed before anything was persisted. Safe to retry.

    Args:
        stage: Pipeline stage that failed (e.g. "classification").
    """

    kind = "analysis_unavailable"
    retryable = True

    def __init__(self, stage: str) -> None:
        super().__init__("Unable to analyze due to API errors. Please try again later.")
        self.stage = stage


class PartialClusterWrite(HermesError):
    """The new item was created but relabelling its cluster peers did not fully apply.

    Carries the identifiers a repair pass needs to finish the relabel.

    Args:
        item_id: Id of the newly created item.
        cluster_id: Cluster the peers should have been moved into.
        failed_ids: Peer ids whose update failed or whose outcome is unknown.
        updated_ids: Peer ids that were updated.
    """

    kind = "partial_cluster_write"

    def __init__(
        self,
        item_id: str,
        cluster_id: str,
        failed_ids: tuple[str, ...],
        updated_ids: tuple[str, ...] = (),
    ) -> None:
        super().__init__(
            f"Item {item_id} created but {len(failed_ids)} peer(s) of cluster "
            f"{cluster_id} were not relabelled"
        )
        self.item_id = item_id
        self.cluster_id = cluster_id
        self.failed_ids = failed_ids
        self.updated_ids = updated_ids


class NotFound(HermesError):
    """No item exists with the given id."""

    kind = "not_found"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item not found: {item_id}")
        self.item_id = item_id
