"""Tag based exclusion of features and scenarios"""
from typing import Any, Iterable, Mapping

from featuregraph.core.errors import ConfigurationError
from featuregraph.utils.helpers import deep_get, strip_tag_marker

EXCLUDE_TAGS_KEY = "feature_graph.exclude_tags"


class FilterPolicy:
    """Decides whether a node is dropped because of its tags"""

    def __init__(self, exclude_tags: Iterable[str] = ()):
        self.exclude_tags = frozenset(strip_tag_marker(tag.strip()) for tag in exclude_tags if tag.strip())

    @classmethod
    def from_config(cls, config: Mapping[str, Any], extra: Iterable[str] = ()) -> "FilterPolicy":
        """Build the policy from ``feature_graph.exclude_tags`` plus extra names"""
        configured = deep_get(config or {}, EXCLUDE_TAGS_KEY, None)

        if configured is None:
            configured = []
        elif isinstance(configured, str):
            configured = configured.split(',')
        elif not isinstance(configured, (list, tuple, set)):
            raise ConfigurationError(
                f"{EXCLUDE_TAGS_KEY} must be a list or a comma separated string, "
                f"got {type(configured).__name__}"
            )

        return cls([str(tag) for tag in configured] + list(extra))

    def is_excluded(self, tag_names: Iterable[str]) -> bool:
        if not self.exclude_tags:
            return False
        return not self.exclude_tags.isdisjoint(tag_names)
