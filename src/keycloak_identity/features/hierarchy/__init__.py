"""Group hierarchy helpers."""

from .tree import SUB_GROUPS, flatten_sub_groups, prune_to_subtree, collect_sub_group_ids

__all__ = ["SUB_GROUPS", "flatten_sub_groups", "prune_to_subtree", "collect_sub_group_ids"]
