"""Cluster resolution for new submissions.

Clustering is one-step and top-match-wins: the highest-ranked oracle match
decides the cluster, and every other match is relabelled into it even if it
previously belonged to a different cluster. Relabelled peers lose any head flag
they held elsewhere, so the winning cluster keeps its single head. Members
of that other cluster that were not matched keep their old cluster id;
there is no transitive merge afterwards.

The oracle read and the writes are not one transaction. Two submissions of
the same claim processed concurrently can both see no match and start two
clusters; nothing reconciles them later.
"""

import asyncio
import logging
import secrets
import string
import time
from collections.abc import Callable
from dataclasses import dataclass

from hermes_ai.data import ClusterIdentity, MisinformationItem, SimilarMatch, Usage
from hermes_ai.errors import PartialClusterWrite, StoreUnavailable
from hermes_ai.store import ClusterPatch, ItemStore
from hermes_ai.template import TemplateGenerator

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_cluster_id() -> str:
    """Return a fresh cluster id: ``cluster_<epoch ms>_<9 random base36 chars>``.

    Unique by construction; the store is never consulted.
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"cluster_{int(time.time() * 1000)}_{suffix}"


@dataclass(frozen=True)
class ClusterDecision:
    """The outcome of resolving one submission against its oracle matches.

    Attributes:
        identity: Cluster fields for the new item. Its ``variations`` is the
            number of distinct matches found for this submission, not the
            cluster size.
        peer_ids: Matched records to relabel, in oracle order.
        established: True when the cluster id was freshly minted even though
            matches existed (the top match had never been clustered). The top
            match then becomes the head of the new cluster.
    """

    identity: ClusterIdentity
    peer_ids: tuple[str, ...] = ()
    established: bool = False

    @property
    def patch(self) -> ClusterPatch:
        return ClusterPatch(
            cluster_id=self.identity.cluster_id,
            message_template=self.identity.message_template,
            variations_delta=1,
            head_id=self.peer_ids[0] if self.established else None,
        )


class ClusterManager:
    """Decides cluster membership and writes it back consistently.

    Args:
        template_generator: Produces the cluster template from member texts.
        id_factory: Cluster id generator, replaceable in tests.
    """

    def __init__(
        self,
        template_generator: TemplateGenerator,
        *,
        id_factory: Callable[[], str] = new_cluster_id,
    ) -> None:
        self._template_generator = template_generator
        self._id_factory = id_factory

    async def resolve(
        self, text: str, matches: list[SimilarMatch]
    ) -> tuple[ClusterDecision, Usage]:
        """Resolve the cluster for a new submission. Performs no writes.

        Args:
            text: The new submission.
            matches: Oracle matches, most similar first.

        Returns:
            Tuple of (decision, usage).

        Raises:
            TemplateError: If the template generator fails.
        """
        if not matches:
            identity = ClusterIdentity(
                cluster_id=self._id_factory(),
                is_cluster_head=True,
                message_template=text,
                variations=0,
            )
            return (ClusterDecision(identity=identity), Usage())

        top = matches[0]
        established = not top.cluster_id
        cluster_id = top.cluster_id or self._id_factory()

        template, usage = await self._template_generator.generate(
            [text, *(m.text for m in matches)]
        )

        peer_ids = tuple(dict.fromkeys(m.id for m in matches))
        identity = ClusterIdentity(
            cluster_id=cluster_id,
            is_cluster_head=False,
            message_template=template,
            variations=len(peer_ids),
        )
        logger.debug(
            "Submission joins %s with %d peer(s)%s",
            cluster_id,
            len(peer_ids),
            " (new cluster id)" if established else "",
        )
        return (
            ClusterDecision(identity=identity, peer_ids=peer_ids, established=established),
            usage,
        )

    async def commit(
        self,
        store: ItemStore,
        item: MisinformationItem,
        decision: ClusterDecision,
        *,
        timeout: float | None = None,
    ) -> MisinformationItem:
        """Create the new item, then relabel its peers.

        Args:
            store: Open item store.
            item: Unsaved item carrying ``decision.identity``.
            decision: Output of ``resolve``.
            timeout: Bound in seconds for each store call.

        Returns:
            The created item with its id.

        Raises:
            StoreUnavailable: If the create fails; nothing was written.
            PartialClusterWrite: If the create succeeded but some or all
                peers were not relabelled.
        """
        try:
            created = await asyncio.wait_for(store.create(item), timeout)
        except TimeoutError as e:
            raise StoreUnavailable("Create timed out") from e

        if not decision.peer_ids:
            return created

        item_id = created.id or ""
        try:
            result = await asyncio.wait_for(
                store.batch_update(list(decision.peer_ids), decision.patch), timeout
            )
        except (StoreUnavailable, TimeoutError) as e:
            logger.error(
                "Cluster relabel failed after creating %s in %s",
                item_id,
                decision.identity.cluster_id,
            )
            raise PartialClusterWrite(
                item_id=item_id,
                cluster_id=decision.identity.cluster_id,
                failed_ids=decision.peer_ids,
            ) from e

        if not result.complete:
            logger.error(
                "Cluster relabel incomplete for %s in %s: failed %s",
                item_id,
                decision.identity.cluster_id,
                ", ".join(result.failed),
            )
            raise PartialClusterWrite(
                item_id=item_id,
                cluster_id=decision.identity.cluster_id,
                failed_ids=result.failed,
                updated_ids=result.updated,
            )
        return created
