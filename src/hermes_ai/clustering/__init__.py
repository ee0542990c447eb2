from hermes_ai.clustering.manager import ClusterDecision, ClusterManager, new_cluster_id

__all__ = ["ClusterDecision", "ClusterManager", "new_cluster_id"]
