"""Tag matching for cluster resource discovery."""
from typing import Dict, List, Mapping, Optional

DEFAULT_CLUSTER_ID_TAG_KEY = "integreatly.org/clusterID"


def tags_to_dict(tag_list: Optional[List[Dict[str, str]]]) -> Dict[str, str]:
    """Convert an AWS ``[{'Key': .., 'Value': ..}]`` tag list to a dict."""
    return {tag["Key"]: tag.get("Value", "") for tag in tag_list} if tag_list else {}


def matches(required_key: str, required_value: str, tags: Mapping[str, str]) -> bool:
    """Return True if ``tags`` holds ``required_key`` with exactly ``required_value``."""
    if required_key not in tags:
        return False
    return tags[required_key] == required_value


def matches_all(required: Mapping[str, str], tags: Mapping[str, str]) -> bool:
    """Check that every required key/value pair is present in ``tags``.

    An empty ``required`` mapping always matches.
    """
    return all(matches(key, value, tags) for key, value in required.items())
