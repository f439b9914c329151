# catalog/tree.py - Category hierarchy built from the flat API list
"""
Turn the flat category list returned by the store API into a forest.

A record looks like ``{"_id": "2", "name": "Shirts", "parent": "1"}``. The id
is read from ``id`` or ``_id``; the parent reference from ``parent`` and then
``parent_id``, and may be an id, ``None``/``""`` or a nested category object.

Records whose parent is not in the list become roots. Parent cycles are not
broken: the nodes involved never reach a root, so ``build_tree`` logs them and
every walker below keeps a visited set.
"""
import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)


def record_id(record):
    value = record.get('id')
    if value in (None, ''):
        value = record.get('_id')
    if value in (None, ''):
        return None
    return str(value)


def parent_id(record):
    """Resolve the parent reference: ``parent`` first, then ``parent_id``"""
    for key in ('parent', 'parent_id'):
        value = record.get(key)
        if isinstance(value, Mapping):
            value = record_id(value)
        if value not in (None, ''):
            return str(value)
    return None


def _valid_records(records):
    if not isinstance(records, (list, tuple)):
        if records is not None:
            logger.warning(f"Expected a list of categories but got {type(records).__name__}")
        return []

    valid = []
    seen = set()
    for record in records:
        if not isinstance(record, Mapping):
            logger.warning(f"Skipping category entry that is not an object: {record!r}")
            continue
        node_id = record_id(record)
        if node_id is None:
            logger.warning(f"Skipping category without an id: {record.get('name', '')!r}")
            continue
        if node_id in seen:
            logger.warning(f"Skipping duplicate category id {node_id}")
            continue
        seen.add(node_id)
        valid.append((node_id, record))
    return valid


def build_tree(records):
    """Build the category forest; returns the root nodes in input order"""
    valid = _valid_records(records)

    nodes = {}
    for node_id, record in valid:
        nodes[node_id] = {**record, 'children': []}

    roots = []
    for node_id, record in valid:
        parent = parent_id(record)
        if parent and parent in nodes:
            nodes[parent]['children'].append(nodes[node_id])
        else:
            if parent:
                logger.debug(f"Category {node_id} names unknown parent {parent}, promoted to root")
            roots.append(nodes[node_id])

    reached = {record_id(node) for node, _ in _walk(roots)}
    if len(reached) < len(nodes):
        detached = [node_id for node_id, _ in valid if node_id not in reached]
        logger.warning(
            f"Category parent cycle detected: {len(detached)} categories are not reachable "
            f"from any root ({', '.join(detached)})"
        )

    return roots


def _walk(roots):
    """Depth-first (node, depth) pairs, each node at most once"""
    seen = set()
    stack = [(node, 0) for node in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node, depth
        for child in reversed(node['children']):
            stack.append((child, depth + 1))


def count_nodes(roots):
    return sum(1 for _ in _walk(roots))


def flatten_tree(roots):
    """Flatten the forest depth-first for indented pickers"""
    return [
        {
            'node': node,
            'depth': depth,
            'has_children': bool(node['children']),
        }
        for node, depth in _walk(roots)
    ]


def serialize_tree(roots):
    """JSON-safe copy of the forest; a node already emitted is not repeated"""
    seen = set()
    out = []
    stack = [(root, out) for root in reversed(roots)]
    while stack:
        node, siblings = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        copy = {**node, 'children': []}
        siblings.append(copy)
        for child in reversed(node['children']):
            stack.append((child, copy['children']))
    return out


def find_cycles(records):
    """Return every parent cycle once, as the list of ids in walk order"""
    parents = {node_id: parent_id(record) for node_id, record in _valid_records(records)}

    cycles = []
    finished = set()
    for start in parents:
        if start in finished:
            continue
        path = []
        position = {}
        current = start
        while current in parents and current not in finished:
            if current in position:
                cycles.append(path[position[current]:])
                break
            position[current] = len(path)
            path.append(current)
            current = parents[current]
        finished.update(path)
    return cycles
