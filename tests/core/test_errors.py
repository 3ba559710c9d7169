from botocore.exceptions import ClientError
from clusterwipe.core.errors import (
    ClusterWipeError, DeletionError, DiscoveryError, EngineAggregationError,
    RemediationError, TagLookupError,
)

def test_taxonomy_shares_base():
    for cls in (DiscoveryError, TagLookupError, RemediationError, DeletionError, EngineAggregationError):
        assert issubclass(cls, ClusterWipeError)

def test_error_context_skips_missing_fields():
    err = DiscoveryError("failed to list", engine="AWS RDS Engine", cluster_id="abc")
    assert err.context() == {'engine': 'AWS RDS Engine', 'cluster_id': 'abc'}

def test_error_str_includes_context_and_cause():
    cause = ClientError({'Error': {'Code': 'AccessDenied', 'Message': 'nope'}}, 'DeleteDBInstance')
    try:
        raise DeletionError("failed to delete", "AWS RDS Engine", "abc", "db-1") from cause
    except DeletionError as e:
        text = str(e)
    assert "failed to delete" in text
    assert "resource_id=db-1" in text
    assert "AccessDenied" in text

def test_aggregation_error_does_not_repeat_context():
    inner = TagLookupError("failed to list tags", "AWS RDS Engine", "abc", "db-1")
    try:
        try:
            raise inner
        except TagLookupError as e:
            raise EngineAggregationError("failed to run engine", "AWS RDS Engine", "abc") from e
    except EngineAggregationError as outer:
        text = str(outer)
        assert outer.__cause__ is inner
    assert text.startswith("failed to run engine: failed to list tags")
    assert text.count("cluster_id=abc") == 1
