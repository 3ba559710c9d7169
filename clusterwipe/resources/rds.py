import logging
from typing import Any, Dict, List, Optional, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from clusterwipe.core.errors import DeletionError, DiscoveryError, RemediationError, TagLookupError
from clusterwipe.core.report import Action, ActionStatus, ReportItem
from clusterwipe.core.tags import DEFAULT_CLUSTER_ID_TAG_KEY, tags_to_dict
from clusterwipe.resources.base import ActionEngine

STATUS_DELETING = "deleting"

AWS_ERRORS = (ClientError, BotoCoreError)


class RDSEngine(ActionEngine):
    """Deletes RDS database instances tagged for a cluster."""

    name = "AWS RDS Engine"

    def __init__(self, rds_client: Any,
                 logger: Union[logging.Logger, logging.LoggerAdapter, None] = None,
                 cluster_id_tag_key: str = DEFAULT_CLUSTER_ID_TAG_KEY):
        super().__init__(logger, cluster_id_tag_key)
        self.rds = rds_client

    @classmethod
    def from_session(cls, session: boto3.Session, logger=None, region: Optional[str] = None,
                     cluster_id_tag_key: str = DEFAULT_CLUSTER_ID_TAG_KEY) -> "RDSEngine":
        return cls(session.client('rds', region_name=region), logger, cluster_id_tag_key)

    def delete_resources_for_cluster(self, cluster_id: str, extra_tags: Optional[Dict[str, str]],
                                     dry_run: bool) -> List[ReportItem]:
        extra_tags = extra_tags or {}
        log = self.logger.with_fields(cluster_id=cluster_id, dry_run=dry_run)
        log.debug("deleting resources for cluster")

        databases = self._find_cluster_databases(cluster_id, extra_tags, log)
        log.debug(f"filtering complete, {len(databases)} databases matched")

        report_items = []
        for db in databases:
            db_id = db['DBInstanceIdentifier']
            db_log = log.with_fields(resource_id=db_id)
            db_log.debug("building report for database")
            item = ReportItem(id=db['DBInstanceArn'], name=db_id, action=Action.DELETE)

            if dry_run:
                db_log.debug("dry run enabled, skipping deletion step")
                report_items.append(item.with_status(ActionStatus.DRY_RUN))
                continue

            db_log.debug("performing deletion of database")
            report_items.append(item.with_status(ActionStatus.IN_PROGRESS))
            # RDS rejects a delete for an instance that is already deleting
            if db.get('DBInstanceStatus') == STATUS_DELETING:
                db_log.debug("deletion of database already in progress")
                continue

            if db.get('DeletionProtection'):
                db_log.debug("removing deletion protection on database")
                try:
                    self.rds.modify_db_instance(
                        DBInstanceIdentifier=db_id,
                        DeletionProtection=False,
                        ApplyImmediately=True,
                    )
                except AWS_ERRORS as e:
                    raise RemediationError("failed to remove deletion protection on database",
                                           self.name, cluster_id, db_id) from e

            try:
                self.rds.delete_db_instance(
                    DBInstanceIdentifier=db_id,
                    SkipFinalSnapshot=True,
                    DeleteAutomatedBackups=True,
                )
            except AWS_ERRORS as e:
                raise DeletionError("failed to delete rds instance", self.name, cluster_id, db_id) from e

        return report_items

    def _find_cluster_databases(self, cluster_id, extra_tags, log) -> List[Dict[str, Any]]:
        matched = []
        for db in self._list_databases(cluster_id):
            db_id = db['DBInstanceIdentifier']
            db_log = log.with_fields(resource_id=db_id)
            db_log.debug("checking tags on database")
            try:
                tag_list = self.rds.list_tags_for_resource(ResourceName=db['DBInstanceArn']).get('TagList', [])
            except AWS_ERRORS as e:
                raise TagLookupError("failed to list tags for database", self.name, cluster_id, db_id) from e

            tags = tags_to_dict(tag_list)
            if not self.is_cluster_resource(tags, cluster_id, extra_tags):
                db_log.debug(f"database did not match cluster tag ({self.cluster_id_tag_key}={cluster_id}) "
                             f"or additional tags {extra_tags}, ignoring")
                continue
            matched.append(db)
        return matched

    def _list_databases(self, cluster_id) -> List[Dict[str, Any]]:
        databases = []
        try:
            paginator = self.rds.get_paginator('describe_db_instances')
            for page in paginator.paginate():
                databases.extend(page.get('DBInstances', []))
        except AWS_ERRORS as e:
            raise DiscoveryError("failed to describe database instances", self.name, cluster_id) from e
        return databases
