"""Parent/child indexing of DRE accounts."""

from collections import defaultdict

from dre_engine.domain.entities import Account


def ordered(accounts: list[Account]) -> list[Account]:
    """Sort accounts in display order."""
    return sorted(accounts, key=lambda a: (a.order, a.name))


def index_accounts(accounts: list[Account]) -> tuple[list[Account], dict[int, list[Account]]]:
    """Split accounts into display-ordered roots and a children map.

    An account is a root when it has no parent or its parent is not in
    ``accounts``. Accounts that cannot be reached from any root because their
    parents form a cycle are promoted to roots, first in display order, so
    every account appears exactly once in the tree.

    Returns:
        Tuple of (roots, children by parent ID)
    """
    by_id = {account.id: account for account in accounts}
    children_map: dict[int, list[Account]] = defaultdict(list)
    roots: list[Account] = []
    for account in ordered(accounts):
        if account.parent_id is not None and account.parent_id in by_id:
            children_map[account.parent_id].append(account)
        else:
            roots.append(account)

    reached: set[int] = set()

    def reach(account: Account) -> None:
        stack = [account]
        while stack:
            current = stack.pop()
            if current.id in reached:
                continue
            reached.add(current.id)
            stack.extend(children_map.get(current.id, []))

    for root in roots:
        reach(root)
    for account in ordered(accounts):
        if account.id not in reached:
            roots.append(account)
            reach(account)

    return ordered(roots), children_map
