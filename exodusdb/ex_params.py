import logging
from types import SimpleNamespace

from . import nc
from . import exodus_h as ex
from .exodus_h import EntityType


logger = logging.getLogger(__name__)


# init() keyword -> count dimension
count_dimensions = {
    "num_nodes": ex.DIM_NUM_NODES,
    "num_edges": ex.DIM_NUM_EDGE,
    "num_edge_blocks": ex.blocks[EntityType.edge_block].num,
    "num_faces": ex.DIM_NUM_FACE,
    "num_face_blocks": ex.blocks[EntityType.face_block].num,
    "num_elems": ex.DIM_NUM_ELEM,
    "num_elem_blocks": ex.blocks[EntityType.elem_block].num,
    "num_node_sets": ex.sets[EntityType.node_set].num,
    "num_edge_sets": ex.sets[EntityType.edge_set].num,
    "num_face_sets": ex.sets[EntityType.face_set].num,
    "num_side_sets": ex.sets[EntityType.side_set].num,
    "num_elem_sets": ex.sets[EntityType.elem_set].num,
    "num_node_maps": ex.maps[EntityType.node_map].num,
    "num_edge_maps": ex.maps[EntityType.edge_map].num,
    "num_face_maps": ex.maps[EntityType.face_map].num,
    "num_elem_maps": ex.maps[EntityType.elem_map].num,
    "num_assemblies": ex.DIM_NUM_ASSEMBLY,
    "num_blobs": ex.DIM_NUM_BLOB,
}


class ex_init_params:
    """The counts a file was initialized with

    Every count is read from its dimension; an absent dimension is a count of 0.

    """

    def __init__(self, fh):
        self.fh = fh

    def __eq__(self, other):
        if not isinstance(other, ex_init_params):
            return False
        return self.as_namespace() == other.as_namespace()

    def getdim(self, name, default=None):
        return nc.get_dimension(self.fh, name, default=default)

    @property
    def title(self):
        return nc.get_global_attr(self.fh, ex.ATT_TITLE, "")

    @property
    def num_dim(self):
        return self.getdim(ex.DIM_NUM_DIM, 0)

    def __getattr__(self, name):
        if name in count_dimensions:
            return self.getdim(count_dimensions[name], 0)
        raise AttributeError(name)

    def as_namespace(self):
        params = SimpleNamespace(title=self.title, num_dim=self.num_dim)
        for name in count_dimensions:
            setattr(params, name, getattr(self, name))
        return params


class ex_metadata:
    """Per-handle state: initialization, title, num_dim, phase, dimension sizes

    The phase is either "define" (structure may be declared) or "data"
    (values may be read and written).  netCDF4 switches the underlying
    NetCDF-3 define mode on its own, so the phase here orders operations.
    Every transition flushes the file, so a completed phase is on disk.

    """

    def __init__(self, fh):
        self.fh = fh
        self.initialized = False
        self.title = ""
        self.num_dim = 0
        self.phase = "define"
        self._dims = {}

    def load(self):
        self._dims.clear()
        self.initialized = nc.has_dimension(self.fh, ex.DIM_NUM_DIM)
        self.num_dim = nc.get_dimension(self.fh, ex.DIM_NUM_DIM, 0)
        self.title = nc.get_global_attr(self.fh, ex.ATT_TITLE, "")
        if isinstance(self.title, bytes):
            self.title = self.title.decode()
        self.phase = "data" if self.initialized else "define"
        return self

    def refresh(self):
        self._dims.clear()

    def dim(self, name, default=0):
        if name not in self._dims:
            size = nc.get_dimension(self.fh, name)
            if size is None:
                return default
            self._dims[name] = size
        return self._dims[name]

    def ensure_define_mode(self):
        """Switch to the define phase, first flushing the values written so far"""
        if self.phase != "define":
            logger.debug("entering define mode")
            nc.sync(self.fh)
            self.phase = "define"

    def ensure_data_mode(self):
        """Switch to the data phase, first flushing the structure declared so far"""
        if self.phase != "data":
            logger.debug("entering data mode")
            nc.sync(self.fh)
            self.phase = "data"
