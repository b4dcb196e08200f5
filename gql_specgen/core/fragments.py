"""Fragment tables and their dependency closure.

A fragment table maps a fragment key (``UserFragment``) to the fragment's
text. A body depends on another fragment by spreading it (``...UserFragment``).
An operation names the fragments it spreads directly (its root keys); the
document sent to the server must carry those plus everything they spread,
each exactly once, and nothing else.
"""

import re
from collections import deque
from collections.abc import Iterable, Mapping

from .errors import MissingFragment

FRAGMENT_SUFFIX = "Fragment"

# Fragment key -> fragment body
FragmentTable = dict[str, str]


def fragment_key(type_name: str) -> str:
    """Return the fragment key for a type, e.g. ``User`` -> ``UserFragment``."""
    return f"{type_name}{FRAGMENT_SUFFIX}"


def reference_marker(key: str) -> str:
    """Return the spread that references a fragment, e.g. ``...UserFragment``."""
    return f"...{key}"


def references(body: str, key: str) -> bool:
    """Check whether ``body`` spreads the fragment ``key``.

    The marker must not continue into a longer name, so ``...UserFragment``
    does not match inside ``...UserFragmentV2``.
    """
    pattern = re.escape(reference_marker(key)) + r"(?!\w)"
    return re.search(pattern, body) is not None


def resolve_closure(table: Mapping[str, str], root_keys: Iterable[str]) -> FragmentTable:
    """Compute the fragments an operation needs, in discovery order.

    Root keys come first, in the order given. Every other key is added the
    first time a body already in the result spreads it. "Spreads" is stricter
    than the marker merely appearing in the body: the marker must end at a
    name boundary (see ``references``), so ``...UserFragmentV2`` does not pull
    in ``UserFragment``.

    Root keys are removed from the working table before expansion starts, so
    a fragment that spreads one of the roots never schedules it a second time.
    Every key is removed the moment it is scheduled, which also ends cycles.

    Raises:
        MissingFragment: if a root key is not in the table
    """
    remaining = dict(table)
    result: FragmentTable = {}
    queue: deque[str] = deque()

    for key in root_keys:
        if key in result:
            continue
        if key not in remaining:
            raise MissingFragment(f"No fragment named '{key}' in the fragment table")
        body = remaining.pop(key)
        result[key] = body
        queue.append(body)

    while queue:
        body = queue.popleft()
        for key in list(remaining):
            if references(body, key):
                child = remaining.pop(key)
                result[key] = child
                queue.append(child)

    return result


def render_fragments(fragments: Mapping[str, str]) -> str:
    """Join fragment bodies into the tail of an operation document."""
    return "\n\n".join(body.strip() for body in fragments.values())
