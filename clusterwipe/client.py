import logging
from typing import Dict, Iterable, Optional, Tuple, Union

import boto3

from clusterwipe.core.errors import EngineAggregationError
from clusterwipe.core.logging import get_logger, timed
from clusterwipe.core.report import Report
from clusterwipe.core.tags import DEFAULT_CLUSTER_ID_TAG_KEY
from clusterwipe.resources.base import ActionEngine
from clusterwipe.resources.rds import RDSEngine


class Client:
    """Runs a fixed, ordered list of action engines against one cluster.

    Engines run one at a time in registration order. The first engine error
    aborts the run: later engines are not invoked and no report is returned.
    """

    def __init__(self, engines: Iterable[ActionEngine],
                 logger: Union[logging.Logger, logging.LoggerAdapter, None] = None):
        self.engines: Tuple[ActionEngine, ...] = tuple(engines)
        self.logger = get_logger(logger)

    @timed
    def delete_resources_for_cluster(self, cluster_id: str, tags: Optional[Dict[str, str]] = None,
                                     dry_run: bool = True) -> Report:
        log = self.logger.with_fields(cluster_id=cluster_id, dry_run=dry_run)
        log.debug("deleting resources for cluster")
        report = Report()
        for engine in self.engines:
            engine_name = engine.get_name()
            log.debug("running engine", extra={"engine": engine_name})
            try:
                items = engine.delete_resources_for_cluster(cluster_id, dict(tags or {}), dry_run)
            except Exception as e:
                raise EngineAggregationError("failed to run engine", engine_name, cluster_id) from e
            report.extend(items)
        log.debug(f"teardown complete, {len(report)} resources reported")
        return report


def new_default_client(session: Optional[boto3.Session] = None,
                       logger: Union[logging.Logger, logging.LoggerAdapter, None] = None,
                       region: Optional[str] = None,
                       cluster_id_tag_key: str = DEFAULT_CLUSTER_ID_TAG_KEY) -> Client:
    """Build a client with the default AWS engines for ``session``."""
    session = session or boto3.session.Session()
    log = get_logger(logger, provider="aws")
    engines = [
        RDSEngine.from_session(session, log, region=region, cluster_id_tag_key=cluster_id_tag_key),
    ]
    return Client(engines, log)
