"""On-disk names of the Exodus II data model.

The names below are part of the file format: other Exodus readers and
writers find data by these exact dimension, variable, and attribute names.
Family specific names are kept in the ``blocks``, ``sets``, ``maps``,
``variables``, and ``reductions`` tables, keyed by ``EntityType``.
"""
from enum import Enum
from numbers import Integral
from types import SimpleNamespace

from .errors import InvalidEntityType


def ex_catstr(*args):
    return "".join(str(_) for _ in args)


class family(Enum):
    block = 0
    set = 1
    map = 2
    scalar = 3
    hierarchical = 4


class EntityType(Enum):
    """Exodus entity types, valued by their Exodus API codes"""

    elem_block = 1
    node_set = 2
    side_set = 3
    node_map = 4
    elem_map = 5
    edge_block = 6
    edge_set = 7
    face_block = 8
    face_set = 9
    elem_set = 10
    edge_map = 11
    face_map = 12
    global_ = 13
    nodal = 14
    assembly = 16
    blob = 17

    def __str__(self):
        return self.label

    @property
    def label(self):
        return "global" if self is EntityType.global_ else self.name

    @property
    def family(self):
        return _families[self]

    @classmethod
    def parse(cls, arg):
        """Convert ``arg`` (member, name, or numeric code) to an EntityType"""
        if isinstance(arg, cls):
            return arg
        if isinstance(arg, str):
            key = arg.strip().lower().replace(" ", "_").replace("-", "_")
            key = _aliases.get(key, key)
            if key == "global":
                return cls.global_
            try:
                return cls[key]
            except KeyError:
                raise InvalidEntityType(f"Unknown entity type {arg!r}") from None
        if isinstance(arg, Integral) and not isinstance(arg, bool):
            try:
                return cls(int(arg))
            except ValueError:
                raise InvalidEntityType(f"Unknown entity type code {arg}") from None
        raise InvalidEntityType(f"Unknown entity type {arg!r}")


_families = {
    EntityType.elem_block: family.block,
    EntityType.edge_block: family.block,
    EntityType.face_block: family.block,
    EntityType.node_set: family.set,
    EntityType.side_set: family.set,
    EntityType.edge_set: family.set,
    EntityType.face_set: family.set,
    EntityType.elem_set: family.set,
    EntityType.node_map: family.map,
    EntityType.elem_map: family.map,
    EntityType.edge_map: family.map,
    EntityType.face_map: family.map,
    EntityType.global_: family.scalar,
    EntityType.nodal: family.scalar,
    EntityType.assembly: family.hierarchical,
    EntityType.blob: family.hierarchical,
}

_aliases = {
    "element_block": "elem_block",
    "elem_blk": "elem_block",
    "element_set": "elem_set",
    "element_map": "elem_map",
    "node": "nodal",
    "nodes": "nodal",
    "glo": "global",
}

# Lookup order for block ids that do not name their family
BLOCK_SEARCH_ORDER = (EntityType.elem_block, EntityType.edge_block, EntityType.face_block)

# ------------------------------------------------------------- constants --- #
API_VERSION = 9.04
FILE_VERSION = 2.0
MAX_TITLE_LENGTH = 80
MAX_NAME_LENGTH = 32
MAX_STR_LENGTH = 32
MAX_LINE_LENGTH = 80

# ------------------------------------------------------------ attributes --- #
ATT_TITLE = "title"  # the database title
ATT_API_VERSION = "api_version"  # the EXODUS II api vers number
ATT_VERSION = "version"  # the EXODUS II file vers number
ATT_FILESIZE = "file_size"  # 1=large, 0=normal
ATT_FLT_WORDSIZE = "floating_point_word_size"  # word size of floating point numbers
ATT_INT64_STATUS = "int64_status"
ATT_NAME_ELEM_TYPE = "elem_type"  # topology name of each block
ATT_PROP_NAME = "name"  # name attached to property arrays
ATT_ID = "id"
ATT_NAME = "name"
ATT_ENTITY_TYPE = "entity_type"

# ------------------------------------------------------------ dimensions --- #
DIM_NUM_DIM = "num_dim"  # number of dimensions; 1, 2, or 3
DIM_NUM_NODES = "num_nodes"  # number of nodes
DIM_NUM_EDGE = "num_edge"  # number of edges (over all blks)
DIM_NUM_FACE = "num_face"  # number of faces (over all blks)
DIM_NUM_ELEM = "num_elem"  # number of elements
DIM_NUM_ASSEMBLY = "num_assembly"
DIM_NUM_BLOB = "num_blob"
DIM_STR = "len_string"
DIM_NAME = "len_name"
DIM_LIN = "len_line"
DIM_N4 = "four"  # general dimension of length 4
DIM_TIME = "time_step"
DIM_NUM_QA = "num_qa_rec"  # number of QA records
DIM_NUM_INFO = "num_info"  # number of information records

# ------------------------------------------------------------- variables --- #
VAR_COORD_X = "coordx"
VAR_COORD_Y = "coordy"
VAR_COORD_Z = "coordz"
VAR_COORDS = (VAR_COORD_X, VAR_COORD_Y, VAR_COORD_Z)
VAR_NAME_COORD = "coor_names"  # names of coordinates
VAR_QA_TITLE = "qa_records"  # QA records
VAR_INFO = "info_records"  # information records
VAR_WHOLE_TIME = "time_whole"  # simulation times for whole time steps
VAR_ELEM_ORDER_MAP = "elem_order_map"

VAR_ASSEMBLY = lambda num: ex_catstr("assembly", num, "_entity_list")
DIM_NUM_ENTITY_ASSEMBLY = lambda num: ex_catstr("num_entity_assembly", num)
VAR_BLOB = lambda num: ex_catstr("blob", num, "_data")
DIM_NUM_BYTES_BLOB = lambda num: ex_catstr("num_bytes_blob", num)

# ---------------------------------------------------------------- blocks --- #
blocks = {
    EntityType.elem_block: SimpleNamespace(
        num="num_el_blk",
        ids="eb_prop1",
        prop=lambda num: ex_catstr("eb_prop", num),
        status="eb_status",
        names="eb_names",
        total=DIM_NUM_ELEM,
        num_entries=lambda num: ex_catstr("num_el_in_blk", num),
        num_nodes=lambda num: ex_catstr("num_nod_per_el", num),
        num_edges=lambda num: ex_catstr("num_edg_per_el", num),
        num_faces=lambda num: ex_catstr("num_fac_per_el", num),
        num_attr=lambda num: ex_catstr("num_att_in_blk", num),
        conn=lambda num: ex_catstr("connect", num),
        edge_conn=lambda num: ex_catstr("edgconn", num),
        face_conn=lambda num: ex_catstr("facconn", num),
        attrib=lambda num: ex_catstr("attrib", num),
        attrib_name=lambda num: ex_catstr("attrib_name", num),
    ),
    EntityType.edge_block: SimpleNamespace(
        num="num_ed_blk",
        ids="ed_prop1",
        prop=lambda num: ex_catstr("ed_prop", num),
        status="ed_status",
        names="ed_names",
        total=DIM_NUM_EDGE,
        num_entries=lambda num: ex_catstr("num_ed_in_blk", num),
        num_nodes=lambda num: ex_catstr("num_nod_per_ed", num),
        num_edges=None,
        num_faces=None,
        num_attr=lambda num: ex_catstr("num_att_in_eblk", num),
        conn=lambda num: ex_catstr("ebconn", num),
        edge_conn=None,
        face_conn=None,
        attrib=lambda num: ex_catstr("eattrb", num),
        attrib_name=lambda num: ex_catstr("eattrib_name", num),
    ),
    EntityType.face_block: SimpleNamespace(
        num="num_fa_blk",
        ids="fa_prop1",
        prop=lambda num: ex_catstr("fa_prop", num),
        status="fa_status",
        names="fa_names",
        total=DIM_NUM_FACE,
        num_entries=lambda num: ex_catstr("num_fa_in_blk", num),
        num_nodes=lambda num: ex_catstr("num_nod_per_fa", num),
        num_edges=None,
        num_faces=None,
        num_attr=lambda num: ex_catstr("num_att_in_fblk", num),
        conn=lambda num: ex_catstr("fbconn", num),
        edge_conn=None,
        face_conn=None,
        attrib=lambda num: ex_catstr("fattrb", num),
        attrib_name=lambda num: ex_catstr("fattrib_name", num),
    ),
}

# ------------------------------------------------------------------ sets --- #
sets = {
    EntityType.node_set: SimpleNamespace(
        num="num_node_sets",
        ids="ns_prop1",
        prop=lambda num: ex_catstr("ns_prop", num),
        status="ns_status",
        names="ns_names",
        num_entries=lambda num: ex_catstr("num_nod_ns", num),
        num_df=lambda num: ex_catstr("num_df_ns", num),
        entries=lambda num: ex_catstr("node_ns", num),
        extra=None,
        df=lambda num: ex_catstr("dist_fact_ns", num),
    ),
    EntityType.side_set: SimpleNamespace(
        num="num_side_sets",
        ids="ss_prop1",
        prop=lambda num: ex_catstr("ss_prop", num),
        status="ss_status",
        names="ss_names",
        num_entries=lambda num: ex_catstr("num_side_ss", num),
        num_df=lambda num: ex_catstr("num_df_ss", num),
        entries=lambda num: ex_catstr("elem_ss", num),
        extra=lambda num: ex_catstr("side_ss", num),
        df=lambda num: ex_catstr("dist_fact_ss", num),
    ),
    EntityType.edge_set: SimpleNamespace(
        num="num_edge_sets",
        ids="es_prop1",
        prop=lambda num: ex_catstr("es_prop", num),
        status="es_status",
        names="es_names",
        num_entries=lambda num: ex_catstr("num_edge_es", num),
        num_df=lambda num: ex_catstr("num_df_es", num),
        entries=lambda num: ex_catstr("edge_es", num),
        extra=None,
        df=lambda num: ex_catstr("dist_fact_es", num),
    ),
    EntityType.face_set: SimpleNamespace(
        num="num_face_sets",
        ids="fs_prop1",
        prop=lambda num: ex_catstr("fs_prop", num),
        status="fs_status",
        names="fs_names",
        num_entries=lambda num: ex_catstr("num_face_fs", num),
        num_df=lambda num: ex_catstr("num_df_fs", num),
        entries=lambda num: ex_catstr("face_fs", num),
        extra=None,
        df=lambda num: ex_catstr("dist_fact_fs", num),
    ),
    EntityType.elem_set: SimpleNamespace(
        num="num_elem_sets",
        ids="els_prop1",
        prop=lambda num: ex_catstr("els_prop", num),
        status="els_status",
        names="els_names",
        num_entries=lambda num: ex_catstr("num_ele_els", num),
        num_df=lambda num: ex_catstr("num_df_els", num),
        entries=lambda num: ex_catstr("elem_els", num),
        extra=None,
        df=lambda num: ex_catstr("dist_fact_els", num),
    ),
}

# ------------------------------------------------------------------ maps --- #
maps = {
    EntityType.node_map: SimpleNamespace(
        num="num_node_maps",
        ids="nm_prop1",
        prop=lambda num: ex_catstr("nm_prop", num),
        names="nmap_names",
        length=DIM_NUM_NODES,
        entries=lambda num: ex_catstr("node_map", num),
        id_map="node_num_map",
    ),
    EntityType.elem_map: SimpleNamespace(
        num="num_elem_maps",
        ids="em_prop1",
        prop=lambda num: ex_catstr("em_prop", num),
        names="emap_names",
        length=DIM_NUM_ELEM,
        entries=lambda num: ex_catstr("elem_map", num),
        id_map="elem_num_map",
    ),
    EntityType.edge_map: SimpleNamespace(
        num="num_edge_maps",
        ids="edm_prop1",
        prop=lambda num: ex_catstr("edm_prop", num),
        names="edmap_names",
        length=DIM_NUM_EDGE,
        entries=lambda num: ex_catstr("edge_map", num),
        id_map="edge_num_map",
    ),
    EntityType.face_map: SimpleNamespace(
        num="num_face_maps",
        ids="fam_prop1",
        prop=lambda num: ex_catstr("fam_prop", num),
        names="famap_names",
        length=DIM_NUM_FACE,
        entries=lambda num: ex_catstr("face_map", num),
        id_map="face_num_map",
    ),
}

# ------------------------------------------------------------- variables --- #
# values(var_num, entity_num), both 1-based
variables = {
    EntityType.global_: SimpleNamespace(
        num="num_glo_var",
        names="name_glo_var",
        values=lambda i, n: "vals_glo_var",
        table=None,
    ),
    EntityType.nodal: SimpleNamespace(
        num="num_nod_var",
        names="name_nod_var",
        values=lambda i, n: ex_catstr("vals_nod_var", i),
        table=None,
    ),
    EntityType.elem_block: SimpleNamespace(
        num="num_elem_var",
        names="name_elem_var",
        values=lambda i, n: ex_catstr("vals_elem_var", i, "eb", n),
        table="elem_var_tab",
    ),
    EntityType.edge_block: SimpleNamespace(
        num="num_edge_var",
        names="name_edge_var",
        values=lambda i, n: ex_catstr("vals_edge_var", i, "edb", n),
        table="edge_var_tab",
    ),
    EntityType.face_block: SimpleNamespace(
        num="num_face_var",
        names="name_face_var",
        values=lambda i, n: ex_catstr("vals_face_var", i, "fab", n),
        table="face_var_tab",
    ),
    EntityType.node_set: SimpleNamespace(
        num="num_nset_var",
        names="name_nset_var",
        values=lambda i, n: ex_catstr("vals_nset_var", i, "ns", n),
        table="nset_var_tab",
    ),
    EntityType.edge_set: SimpleNamespace(
        num="num_eset_var",
        names="name_eset_var",
        values=lambda i, n: ex_catstr("vals_eset_var", i, "es", n),
        table="eset_var_tab",
    ),
    EntityType.face_set: SimpleNamespace(
        num="num_fset_var",
        names="name_fset_var",
        values=lambda i, n: ex_catstr("vals_fset_var", i, "fs", n),
        table="fset_var_tab",
    ),
    EntityType.side_set: SimpleNamespace(
        num="num_sset_var",
        names="name_sset_var",
        values=lambda i, n: ex_catstr("vals_sset_var", i, "ss", n),
        table="sset_var_tab",
    ),
    EntityType.elem_set: SimpleNamespace(
        num="num_elset_var",
        names="name_elset_var",
        values=lambda i, n: ex_catstr("vals_elset_var", i, "els", n),
        table="elset_var_tab",
    ),
}

# values(entity_num), 1-based
reductions = {
    EntityType.global_: SimpleNamespace(
        num="num_glo_var", names="name_glo_var", values=lambda n: "vals_glo_var"
    ),
    EntityType.elem_block: SimpleNamespace(
        num="num_ele_red_var",
        names="name_ele_red_var",
        values=lambda n: ex_catstr("vals_elem_red_eb", n),
    ),
    EntityType.edge_block: SimpleNamespace(
        num="num_edg_red_var",
        names="name_edg_red_var",
        values=lambda n: ex_catstr("vals_edge_red_edgb", n),
    ),
    EntityType.face_block: SimpleNamespace(
        num="num_fac_red_var",
        names="name_fac_red_var",
        values=lambda n: ex_catstr("vals_face_red_facb", n),
    ),
    EntityType.node_set: SimpleNamespace(
        num="num_nset_red_var",
        names="name_nset_red_var",
        values=lambda n: ex_catstr("vals_nset_red_ns", n),
    ),
    EntityType.edge_set: SimpleNamespace(
        num="num_eset_red_var",
        names="name_eset_red_var",
        values=lambda n: ex_catstr("vals_eset_red_es", n),
    ),
    EntityType.face_set: SimpleNamespace(
        num="num_fset_red_var",
        names="name_fset_red_var",
        values=lambda n: ex_catstr("vals_fset_red_fs", n),
    ),
    EntityType.side_set: SimpleNamespace(
        num="num_sset_red_var",
        names="name_sset_red_var",
        values=lambda n: ex_catstr("vals_sset_red_ss", n),
    ),
    EntityType.elem_set: SimpleNamespace(
        num="num_elset_red_var",
        names="name_elset_red_var",
        values=lambda n: ex_catstr("vals_elset_red_els", n),
    ),
    EntityType.assembly: SimpleNamespace(
        num="num_assembly_red_var",
        names="name_assembly_red_var",
        values=lambda n: ex_catstr("vals_assembly_red", n),
    ),
    EntityType.blob: SimpleNamespace(
        num="num_blob_red_var",
        names="name_blob_red_var",
        values=lambda n: ex_catstr("vals_blob_red", n),
    ),
}
