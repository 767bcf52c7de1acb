"""Element topologies known to the Exodus data model.

Topology names are stored verbatim in the ``elem_type`` attribute of a block's
connectivity variable.  Known names (and their common aliases) are checked
against the number of nodes per entry; unknown names are accepted as given.
"""
from .errors import InvalidTopology


class Topology:
    """A canonical element shape

    Parameters
    ----------
    name : str
        Canonical, upper case, topology name, e.g. 'HEX8'
    nnode : int or None
        Expected number of nodes per entry.  None means the node count is
        unconstrained (arbitrary polygons and polyhedra)
    dim : int
        Topological dimension of the shape
    sides : list of list of int
        0-based local node indices of each side (face in 3D, edge in 2D),
        ordered by side number

    """

    def __init__(self, name, nnode, dim, sides=None):
        self.name = name
        self.nnode = nnode
        self.dim = dim
        self.sides = sides or []

    def __repr__(self):
        return f"Topology({self.name})"

    def __eq__(self, other):
        if isinstance(other, str):
            other = factory(other)
        if not isinstance(other, Topology):
            return False
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    @property
    def num_sides(self):
        return len(self.sides)

    def side_nodes(self, side):
        """Local node indices of ``side`` (1-based, as stored in side sets)"""
        if not 1 <= side <= self.num_sides:
            raise ValueError(f"{self.name} has no side {side}")
        return list(self.sides[side - 1])

    def check(self, num_nodes):
        if self.nnode is not None and num_nodes != self.nnode:
            raise InvalidTopology(
                f"{self.name} expects {self.nnode} nodes per entry, got {num_nodes}"
            )


hex_sides = [[0, 1, 5, 4], [1, 2, 6, 5], [2, 3, 7, 6], [0, 4, 7, 3], [0, 3, 2, 1], [4, 5, 6, 7]]
tet_sides = [[0, 1, 3], [1, 2, 3], [0, 3, 2], [0, 2, 1]]
wedge_sides = [[0, 1, 4, 3], [1, 2, 5, 4], [0, 3, 5, 2], [0, 2, 1], [3, 4, 5]]
pyramid_sides = [[0, 1, 4], [1, 2, 4], [2, 3, 4], [3, 0, 4], [0, 3, 2, 1]]
quad_sides = [[0, 1], [1, 2], [2, 3], [3, 0]]
tri_sides = [[0, 1], [1, 2], [2, 0]]
bar_sides = [[0], [1]]

topologies = {}


def _register(name, nnode, dim, sides=None, aliases=()):
    topology = Topology(name, nnode, dim, sides=sides)
    topologies[name] = topology
    for alias in aliases:
        topologies[alias.upper()] = topology


_register("SPHERE", 1, 0, aliases=("SPHERE1", "PARTICLE"))
_register("CIRCLE", 1, 0, aliases=("CIRCLE1",))
_register("BAR2", 2, 1, sides=bar_sides, aliases=("BAR", "BEAM", "BEAM2", "TRUSS", "TRUSS2", "EDGE2", "LINE2"))
_register("BAR3", 3, 1, sides=bar_sides, aliases=("BEAM3", "TRUSS3", "EDGE3", "LINE3"))
_register("TRI3", 3, 2, sides=tri_sides, aliases=("TRI", "TRIANGLE", "TRIANGLE3"))
_register("TRI6", 6, 2, sides=tri_sides, aliases=("TRIANGLE6",))
_register("TRI7", 7, 2, sides=tri_sides, aliases=("TRIANGLE7",))
_register("QUAD4", 4, 2, sides=quad_sides, aliases=("QUAD", "QUADRILATERAL"))
_register("QUAD8", 8, 2, sides=quad_sides)
_register("QUAD9", 9, 2, sides=quad_sides)
_register("SHELL4", 4, 2, sides=quad_sides, aliases=("SHELL",))
_register("SHELL8", 8, 2, sides=quad_sides)
_register("SHELL9", 9, 2, sides=quad_sides)
_register("TET4", 4, 3, sides=tet_sides, aliases=("TET", "TETRA", "TETRA4"))
_register("TET8", 8, 3, sides=tet_sides, aliases=("TETRA8",))
_register("TET10", 10, 3, sides=tet_sides, aliases=("TETRA10",))
_register("TET14", 14, 3, sides=tet_sides, aliases=("TETRA14",))
_register("TET15", 15, 3, sides=tet_sides, aliases=("TETRA15",))
_register("PYRAMID5", 5, 3, sides=pyramid_sides, aliases=("PYRAMID", "PYRA", "PYRA5"))
_register("PYRAMID13", 13, 3, sides=pyramid_sides, aliases=("PYRA13",))
_register("PYRAMID14", 14, 3, sides=pyramid_sides, aliases=("PYRA14",))
_register("WEDGE6", 6, 3, sides=wedge_sides, aliases=("WEDGE",))
_register("WEDGE15", 15, 3, sides=wedge_sides)
_register("WEDGE18", 18, 3, sides=wedge_sides)
_register("HEX8", 8, 3, sides=hex_sides, aliases=("HEX", "HEXAHEDRON"))
_register("HEX20", 20, 3, sides=hex_sides)
_register("HEX27", 27, 3, sides=hex_sides)
_register("NSIDED", None, 2)
_register("NFACED", None, 3)


def factory(elem_type):
    """Look up the canonical topology for ``elem_type``

    Returns None for names that are not known, which are valid but carry no
    node count or side information.

    """
    if isinstance(elem_type, bytes):
        elem_type = elem_type.decode("ascii")
    return topologies.get(elem_type.strip().upper())


def canonical_name(elem_type):
    """The name stored on disk for ``elem_type``"""
    topology = factory(elem_type)
    if topology is None:
        return elem_type.strip()
    return topology.name


def validate(elem_type, num_nodes_per_entry):
    """Check ``num_nodes_per_entry`` against the topology's node count

    Unknown topologies are not checked.

    """
    if not isinstance(elem_type, str) or not elem_type.strip():
        raise InvalidTopology(f"Invalid topology {elem_type!r}")
    topology = factory(elem_type)
    if topology is not None:
        topology.check(num_nodes_per_entry)
    return canonical_name(elem_type)
