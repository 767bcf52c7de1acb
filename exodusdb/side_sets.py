"""Side sets derived from node sets

A side (face in 3D, edge in 2D) of an element is taken when every one of its
nodes is in the node set, it belongs to no other element, and its normal
points away from the center of the mesh.
"""
import logging
import numpy as np
from collections import Counter
from types import SimpleNamespace

from . import topology
from .exodus_h import EntityType


logger = logging.getLogger(__name__)


def element_blocks(file):
    """Yields (offset, connectivity, topology) for each element block with side
    definitions.  ``offset`` is the number of elements stored before the block."""
    offset = 0
    for id in file.block_ids(EntityType.elem_block):
        block = file.block(id, EntityType.elem_block)
        topo = topology.factory(block.topology)
        if topo is not None and topo.num_sides and block.num_entries:
            yield offset, file.connectivity_array(id, EntityType.elem_block), topo
        offset += block.num_entries


def side_key(nodes):
    return tuple(sorted(int(n) for n in nodes))


def side_registry(file):
    """Number of elements sharing each side, keyed by the side's sorted node ids"""
    registry = Counter()
    for (_, conn, topo) in element_blocks(file):
        for elem_nodes in conn:
            for side in range(1, topo.num_sides + 1):
                registry[side_key(elem_nodes[topo.side_nodes(side)])] += 1
    return registry


def side_normal(points):
    """Unit normal of a side given its node coordinates

    Edges of 2D elements get their in-plane normal, faces of 3D elements the
    right hand normal of their first three nodes.  Returns None when the side
    has no normal (points, or edges in 3D).

    """
    num_points, num_dim = points.shape
    if num_dim == 2 and num_points == 2:
        d = points[1] - points[0]
        normal = np.array([d[1], -d[0]])
    elif num_dim == 3 and num_points >= 3:
        normal = np.cross(points[1] - points[0], points[2] - points[0])
    else:
        return None
    length = np.linalg.norm(normal)
    if length == 0.0:
        return None
    return normal / length


def nodeset_to_sideset(file, nodeset_id, sideset_id):
    """Find the boundary sides whose nodes all belong to a node set

    Parameters
    ----------
    file : exodus_file
        An initialized file with coordinates and element connectivity
    nodeset_id : int
        The node set to convert
    sideset_id : int
        ID given to the resulting side set

    Returns
    -------
    side_set : SimpleNamespace
        id, elements (1-based element numbers), sides (1-based side numbers)
        and dist_factors (always empty)

    Notes
    -----
    Sides whose normal points toward the mesh center are skipped with a
    warning.  A side whose normal opposes the average normal of the sides
    already taken is kept, also with a warning.

    """
    nodes = set(int(n) for n in file.node_set(nodeset_id).nodes)
    elements, sides, normals = [], [], []
    if not nodes:
        logger.warning(f"Node set {nodeset_id} is empty, side set {sideset_id} is empty")
        return _side_set(sideset_id, elements, sides)

    registry = side_registry(file)
    coords = file.coords()
    center = coords.mean(axis=0)
    for (offset, conn, topo) in element_blocks(file):
        for (i, elem_nodes) in enumerate(conn):
            elem = offset + i + 1
            for side in range(1, topo.num_sides + 1):
                side_nodes = elem_nodes[topo.side_nodes(side)]
                if not all(int(n) in nodes for n in side_nodes):
                    continue
                if registry[side_key(side_nodes)] != 1:
                    continue
                points = coords[side_nodes - 1]
                normal = side_normal(points)
                if normal is not None:
                    if np.dot(normal, points.mean(axis=0) - center) <= 0.0:
                        logger.warning(f"Element {elem} side {side} faces inward, skipped")
                        continue
                    if normals:
                        average = np.mean(normals, axis=0)
                        average /= np.linalg.norm(average) or 1.0
                        if np.dot(normal, average) < -0.5:
                            logger.warning(f"Element {elem} side {side} opposes the other sides")
                    normals.append(normal)
                elements.append(elem)
                sides.append(side)

    if not elements:
        logger.warning(f"No boundary sides found for node set {nodeset_id}")
    else:
        logger.debug(
            f"Side set {sideset_id} from node set {nodeset_id}: {len(elements)} sides"
        )
    return _side_set(sideset_id, elements, sides)


def _side_set(id, elements, sides):
    return SimpleNamespace(
        id=int(id),
        elements=np.array(elements, dtype=int),
        sides=np.array(sides, dtype=int),
        dist_factors=np.zeros(0),
    )
