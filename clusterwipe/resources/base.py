from abc import ABC, abstractmethod
import logging
from typing import Dict, List, Optional, Union

from clusterwipe.core.logging import get_logger
from clusterwipe.core.report import ReportItem
from clusterwipe.core.tags import DEFAULT_CLUSTER_ID_TAG_KEY, matches, matches_all


class ActionEngine(ABC):
    """Discovers and deletes one kind of provider resource for a cluster."""

    name = "base"

    def __init__(self, logger: Union[logging.Logger, logging.LoggerAdapter, None] = None,
                 cluster_id_tag_key: str = DEFAULT_CLUSTER_ID_TAG_KEY):
        self.logger = get_logger(logger, engine=self.name)
        self.cluster_id_tag_key = cluster_id_tag_key

    def get_name(self) -> str:
        return self.name

    def is_cluster_resource(self, tags: Dict[str, str], cluster_id: str,
                            extra_tags: Dict[str, str]) -> bool:
        """A resource belongs to the cluster if it carries the cluster id tag and every extra tag."""
        if not matches(self.cluster_id_tag_key, cluster_id, tags):
            return False
        return matches_all(extra_tags, tags)

    @abstractmethod
    def delete_resources_for_cluster(self, cluster_id: str, extra_tags: Optional[Dict[str, str]],
                                     dry_run: bool) -> List[ReportItem]:
        pass
