"""Group tree helpers.

Keycloak returns groups as trees nested through a "subGroups" member. These
functions never modify their input; they build new lists and dicts.
"""

from typing import Any, Callable, Dict, Iterable, List, Set, Tuple

SUB_GROUPS = "subGroups"

GroupRecord = Dict[str, Any]


def _children(group: GroupRecord) -> List[GroupRecord]:
    children = group.get(SUB_GROUPS)
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]


def flatten_sub_groups(groups: Iterable[GroupRecord]) -> List[GroupRecord]:
    """Collect every group and its descendants depth first, without subGroups."""
    flat: List[GroupRecord] = []
    for group in groups:
        flat.append({key: value for key, value in group.items() if key != SUB_GROUPS})
        flat.extend(flatten_sub_groups(_children(group)))
    return flat


def prune_to_subtree(
    groups: Iterable[GroupRecord],
    is_target: Callable[[GroupRecord], bool],
) -> Tuple[List[GroupRecord], bool]:
    """Keep only branches that lead to a target group.

    A matching group is kept with its whole subtree; an ancestor is kept with
    just the children that lead to a match.

    Args:
        groups: Group trees to prune
        is_target: Predicate selecting the target group

    Returns:
        Tuple of the pruned trees and whether any target was found
    """
    pruned: List[GroupRecord] = []
    found = False
    for group in groups:
        if is_target(group):
            pruned.append(group)
            found = True
            continue
        children, child_found = prune_to_subtree(_children(group), is_target)
        if child_found:
            pruned.append({**group, SUB_GROUPS: children})
            found = True
    return pruned, found


def collect_sub_group_ids(group: GroupRecord) -> Set[str]:
    """Ids of every descendant of group."""
    ids: Set[str] = set()
    for child in _children(group):
        child_id = child.get("id")
        if isinstance(child_id, str) and child_id:
            ids.add(child_id)
        ids |= collect_sub_group_ids(child)
    return ids
