"""Blocks, sets and maps: the id addressed mesh entities of an Exodus file"""
import logging
import numpy as np
from types import SimpleNamespace

from . import nc
from . import exodus_h as ex
from . import side_sets
from . import topology
from .errors import EntityNotFound, InvalidArrayLength, InvalidEntityType, VariableNotDefined
from .exodus_h import EntityType, family
from .guards import requires_init, requires_write_mode


logger = logging.getLogger(__name__)


def as_block_type(type):
    type = EntityType.parse(type)
    if type.family != family.block:
        raise InvalidEntityType(f"{type} is not a block type")
    return type


def as_set_type(type):
    type = EntityType.parse(type)
    if type.family != family.set:
        raise InvalidEntityType(f"{type} is not a set type")
    return type


def as_map_type(type):
    type = EntityType.parse(type)
    if type.family != family.map:
        raise InvalidEntityType(f"{type} is not a map type")
    return type


class entities_mixin:
    """Definition and lookup of blocks, sets, and maps"""

    def _create_sized(self, name, kind, dims):
        """Create ``name`` over ``dims``, or as a dimensionless placeholder when
        any of ``dims`` is empty (a zero length dimension would be unlimited)"""
        if all(dim is not None and nc.has_dimension(self.fh, dim) for dim in dims):
            return nc.create_variable(self.fh, name, kind, dims)
        return nc.create_variable(self.fh, name, kind, ())

    def _create_dimension(self, name, size):
        if size > 0:
            nc.create_dimension(self.fh, name, size)

    def _physical(self, type, id):
        """1-based instance number used in on-disk names"""
        return self.find_index(type, id) + 1

    def _put_array(self, name, values, expected, dtype):
        values = np.asarray(values, dtype=dtype).ravel()
        if values.size != expected:
            raise InvalidArrayLength(expected, values.size)
        if expected == 0:
            return
        self.ensure_data_mode()
        nc.put_values(self.fh, name, values.reshape(nc.shape_of(self.fh, name)))

    def _get_array(self, name, dtype):
        if not nc.has_variable(self.fh, name) or not nc.dimensions_of(self.fh, name):
            return np.zeros(0, dtype=dtype)
        return np.asarray(nc.get_variable(self.fh, name), dtype=dtype).ravel()

    def primary_variable(self, type, id):
        """The variable that carries the attributes of the ``type`` instance ``id``"""
        type = EntityType.parse(type)
        fam = type.family
        if fam == family.block:
            return ex.blocks[type].conn(self._physical(type, id))
        elif fam == family.set:
            return ex.sets[type].entries(self._physical(type, id))
        elif fam == family.map:
            return ex.maps[type].entries(self._physical(type, id))
        elif type == EntityType.assembly:
            return ex.VAR_ASSEMBLY(self._physical(type, id))
        elif type == EntityType.blob:
            return ex.VAR_BLOB(self._physical(type, id))
        raise InvalidEntityType(f"{type} entities do not carry attributes")

    # ------------------------------------------------------------ blocks --- #
    @requires_write_mode
    @requires_init
    def put_block(
        self,
        id,
        elem_type,
        num_entries,
        num_nodes_per_entry,
        num_edges_per_entry=0,
        num_faces_per_entry=0,
        num_attributes=0,
        entity_type=EntityType.elem_block,
    ):
        """Define a block

        Parameters
        ----------
        id : int
            The block ID, unique among blocks of ``entity_type``
        elem_type : str
            The topology of the block's entries, e.g. 'HEX8'.  Known
            topologies and their aliases are stored by their canonical name and
            checked against ``num_nodes_per_entry``.
        num_entries : int
            The number of elements (edges, faces) in the block
        num_nodes_per_entry : int
            Number of nodes per entry
        num_edges_per_entry, num_faces_per_entry : int
            Number of edges and faces per element (element blocks only)
        num_attributes : int
            The number of attributes per entry
        entity_type : EntityType or str
            elem_block, edge_block, or face_block

        Notes
        -----
        The block is stored at the next free physical index of its family.
        Its dimensions and variables are created one after another; a failure
        part way leaves the file with a partially defined block.

        """
        type = as_block_type(entity_type)
        table = ex.blocks[type]
        counts = (num_entries, num_nodes_per_entry, num_edges_per_entry, num_faces_per_entry)
        if any(n < 0 for n in counts) or num_attributes < 0:
            raise ValueError("Block sizes must be non-negative")
        if type != EntityType.elem_block and (num_edges_per_entry or num_faces_per_entry):
            raise ValueError("Only element blocks have edges or faces per entry")
        elem_type = topology.validate(elem_type, num_nodes_per_entry)
        index = self.check_new_instance(type, id)

        n = index + 1
        self.ensure_define_mode()
        self._create_dimension(table.num_entries(n), num_entries)
        self._create_dimension(table.num_nodes(n), num_nodes_per_entry)
        var = self._create_sized(
            table.conn(n), self.int_kind, (table.num_entries(n), table.num_nodes(n))
        )
        var.setncattr(ex.ATT_NAME_ELEM_TYPE, elem_type)

        if num_edges_per_entry:
            self._create_dimension(table.num_edges(n), num_edges_per_entry)
            self._create_sized(
                table.edge_conn(n), self.int_kind, (table.num_entries(n), table.num_edges(n))
            )
        if num_faces_per_entry:
            self._create_dimension(table.num_faces(n), num_faces_per_entry)
            self._create_sized(
                table.face_conn(n), self.int_kind, (table.num_entries(n), table.num_faces(n))
            )

        if num_attributes:
            dim = table.num_attr(n)
            self._create_dimension(dim, num_attributes)
            if num_entries:
                nc.create_variable(
                    self.fh, table.attrib(n), self.float_kind, (table.num_entries(n), dim)
                )
            nc.create_variable(self.fh, table.attrib_name(n), str, (dim, ex.DIM_NAME))

        self.ensure_data_mode()
        self.register_id(type, index, id)
        logger.debug(f"{self.filename}: defined {type} {id} ({elem_type}, {num_entries} entries)")

    @requires_init
    def block_ids(self, entity_type=EntityType.elem_block):
        return self.entity_ids(as_block_type(entity_type))

    def _find_block_type(self, id):
        for type in ex.BLOCK_SEARCH_ORDER:
            if self.has_entity(type, id):
                return type
        raise EntityNotFound("block", id)

    @requires_init
    def find_block_in_any_type(self, id):
        """The block with ``id``, looked up among element, then edge, then face
        blocks.  Ids are only unique within one block type; the first match wins."""
        return self.block(id, self._find_block_type(id))

    def _block_type(self, id, entity_type):
        if entity_type is None:
            return self._find_block_type(id)
        return as_block_type(entity_type)

    @requires_init
    def block(self, id, entity_type=None):
        """Get the block parameters

        Parameters
        ----------
        id : int
            block ID (not INDEX)
        entity_type : EntityType or str, optional
            When omitted, element, edge, and face blocks are searched in turn

        Returns
        -------
        block : SimpleNamespace
            id, entity_type, topology, num_entries, num_nodes_per_entry,
            num_edges_per_entry, num_faces_per_entry, num_attributes

        """
        type = self._block_type(id, entity_type)
        table = ex.blocks[type]
        n = self._physical(type, id)
        dim = self.meta.dim
        elem_type = nc.getncattr(self.fh, table.conn(n), ex.ATT_NAME_ELEM_TYPE, "")
        return SimpleNamespace(
            id=int(id),
            entity_type=type,
            topology=elem_type.decode() if isinstance(elem_type, bytes) else elem_type,
            num_entries=dim(table.num_entries(n)),
            num_nodes_per_entry=dim(table.num_nodes(n)),
            num_edges_per_entry=dim(table.num_edges(n)) if table.num_edges else 0,
            num_faces_per_entry=dim(table.num_faces(n)) if table.num_faces else 0,
            num_attributes=dim(table.num_attr(n)),
        )

    def _put_block_conn(self, id, connectivity, entity_type, var_of, columns):
        type = self._block_type(id, entity_type)
        info = self.block(id, type)
        n = self._physical(type, id)
        expected = info.num_entries * getattr(info, columns)
        self._put_array(var_of(ex.blocks[type])(n), connectivity, expected, np.int64)

    @requires_write_mode
    @requires_init
    def put_connectivity(self, id, connectivity, entity_type=None):
        """Writes the connectivity array for a block

        Parameters
        ----------
        id : int
            The block ID
        connectivity : array_like
            1-based node ids of each entry, entry by entry.  The flat length
            must be num_entries * num_nodes_per_entry.

        """
        self._put_block_conn(
            id, connectivity, entity_type, lambda t: t.conn, "num_nodes_per_entry"
        )

    @requires_init
    def connectivity(self, id, entity_type=None):
        """Flat node connectivity of a block"""
        type = self._block_type(id, entity_type)
        return self._get_array(ex.blocks[type].conn(self._physical(type, id)), int)

    @requires_init
    def connectivity_array(self, id, entity_type=None):
        """Node connectivity of a block as a (num_entries, num_nodes_per_entry) view"""
        type = self._block_type(id, entity_type)
        info = self.block(id, type)
        conn = self.connectivity(id, type)
        return conn.reshape((info.num_entries, info.num_nodes_per_entry))

    @requires_write_mode
    @requires_init
    def put_elem_edge_connectivity(self, id, connectivity):
        self._put_block_conn(
            id, connectivity, EntityType.elem_block, lambda t: t.edge_conn, "num_edges_per_entry"
        )

    @requires_write_mode
    @requires_init
    def put_elem_face_connectivity(self, id, connectivity):
        self._put_block_conn(
            id, connectivity, EntityType.elem_block, lambda t: t.face_conn, "num_faces_per_entry"
        )

    @requires_init
    def elem_edge_connectivity(self, id):
        n = self._physical(EntityType.elem_block, id)
        return self._get_array(ex.blocks[EntityType.elem_block].edge_conn(n), int)

    @requires_init
    def elem_face_connectivity(self, id):
        n = self._physical(EntityType.elem_block, id)
        return self._get_array(ex.blocks[EntityType.elem_block].face_conn(n), int)

    @requires_write_mode
    @requires_init
    def put_block_attributes(self, id, values, entity_type=None):
        """Write the attribute values of every entry, entry by entry"""
        type = self._block_type(id, entity_type)
        info = self.block(id, type)
        n = self._physical(type, id)
        expected = info.num_entries * info.num_attributes
        self._put_array(ex.blocks[type].attrib(n), values, expected, float)

    @requires_init
    def block_attributes(self, id, entity_type=None):
        type = self._block_type(id, entity_type)
        n = self._physical(type, id)
        return self._get_array(ex.blocks[type].attrib(n), float)

    @requires_write_mode
    @requires_init
    def put_block_attribute_names(self, id, names, entity_type=None):
        type = self._block_type(id, entity_type)
        info = self.block(id, type)
        if len(names) != info.num_attributes:
            raise InvalidArrayLength(info.num_attributes, len(names))
        for name in names:
            self.check_name(name)
        if not names:
            return
        n = self._physical(type, id)
        self.ensure_data_mode()
        nc.put_strings(self.fh, ex.blocks[type].attrib_name(n), names, self.meta.dim(ex.DIM_NAME))

    @requires_init
    def block_attribute_names(self, id, entity_type=None):
        type = self._block_type(id, entity_type)
        n = self._physical(type, id)
        return nc.get_strings(self.fh, ex.blocks[type].attrib_name(n))

    # -------------------------------------------------------------- sets --- #
    @requires_write_mode
    @requires_init
    def put_set(self, entity_type, id, num_entries, num_dist_factors=0):
        """Define a set of ``num_entries`` members

        Parameters
        ----------
        entity_type : EntityType or str
            node_set, side_set, edge_set, face_set, or elem_set
        id : int
            The set ID, unique among sets of ``entity_type``
        num_entries : int
            Number of members
        num_dist_factors : int
            0 or ``num_entries``

        """
        type = as_set_type(entity_type)
        table = ex.sets[type]
        if num_entries < 0:
            raise ValueError("Set sizes must be non-negative")
        if num_dist_factors not in (0, num_entries):
            raise InvalidArrayLength(num_entries, num_dist_factors)
        index = self.check_new_instance(type, id)

        n = index + 1
        self.ensure_define_mode()
        self._create_dimension(table.num_entries(n), num_entries)
        self._create_sized(table.entries(n), self.int_kind, (table.num_entries(n),))
        if table.extra is not None:
            self._create_sized(table.extra(n), self.int_kind, (table.num_entries(n),))
        if num_dist_factors:
            self._create_dimension(table.num_df(n), num_dist_factors)
            nc.create_variable(self.fh, table.df(n), self.float_kind, (table.num_df(n),))

        self.ensure_data_mode()
        self.register_id(type, index, id)
        logger.debug(f"{self.filename}: defined {type} {id} ({num_entries} entries)")

    @requires_init
    def set_ids(self, entity_type):
        return self.entity_ids(as_set_type(entity_type))

    @requires_init
    def set(self, entity_type, id):
        """Set parameters: id, entity_type, num_entries, num_dist_factors"""
        type = as_set_type(entity_type)
        table = ex.sets[type]
        n = self._physical(type, id)
        return SimpleNamespace(
            id=int(id),
            entity_type=type,
            num_entries=self.meta.dim(table.num_entries(n)),
            num_dist_factors=self.meta.dim(table.num_df(n)),
        )

    def _ensure_set(self, type, id, num_entries, dist_factors):
        if not self.has_entity(type, id):
            num_df = 0 if dist_factors is None else len(dist_factors)
            self.put_set(type, id, num_entries, num_df)
        return self.set(type, id)

    def _check_dist_factors(self, info, dist_factors):
        if dist_factors is None:
            return
        if info.num_dist_factors != info.num_entries:
            raise InvalidArrayLength(info.num_dist_factors, len(dist_factors))
        if len(dist_factors) != info.num_entries:
            raise InvalidArrayLength(info.num_entries, len(dist_factors))

    def _put_dist_factors(self, type, id, info, dist_factors):
        if dist_factors is None:
            return
        n = self._physical(type, id)
        self._put_array(ex.sets[type].df(n), dist_factors, info.num_entries, float)

    def _dist_factors(self, type, id):
        n = self._physical(type, id)
        return self._get_array(ex.sets[type].df(n), float)

    @requires_write_mode
    @requires_init
    def put_node_set(self, id, nodes, dist_factors=None):
        """Write the nodes (and distribution factors) of a node set, defining
        the set if it does not exist"""
        self.put_entity_set(EntityType.node_set, id, nodes, dist_factors=dist_factors)

    @requires_init
    def node_set(self, id):
        """Node set members: id, nodes, dist_factors"""
        info = self.entity_set(EntityType.node_set, id)
        return SimpleNamespace(id=info.id, nodes=info.entities, dist_factors=info.dist_factors)

    @requires_write_mode
    @requires_init
    def put_side_set(self, id, elements, sides, dist_factors=None):
        """Write the (element, side) pairs of a side set, defining the set if it
        does not exist"""
        type = EntityType.side_set
        if len(elements) != len(sides):
            raise InvalidArrayLength(len(elements), len(sides))
        info = self._ensure_set(type, id, len(elements), dist_factors)
        self._check_dist_factors(info, dist_factors)
        table = ex.sets[type]
        n = self._physical(type, id)
        self._put_array(table.entries(n), elements, info.num_entries, np.int64)
        self._put_array(table.extra(n), sides, info.num_entries, np.int64)
        self._put_dist_factors(type, id, info, dist_factors)

    @requires_init
    def side_set(self, id):
        """Side set members: id, elements, sides, dist_factors"""
        type = EntityType.side_set
        table = ex.sets[type]
        n = self._physical(type, id)
        return SimpleNamespace(
            id=int(id),
            elements=self._get_array(table.entries(n), int),
            sides=self._get_array(table.extra(n), int),
            dist_factors=self._dist_factors(type, id),
        )

    @requires_write_mode
    @requires_init
    def put_entity_set(self, entity_type, id, entities, dist_factors=None):
        """Write the members of a node, edge, face, or element set, defining the
        set if it does not exist"""
        type = as_set_type(entity_type)
        if type == EntityType.side_set:
            raise InvalidEntityType("Side set members are written with put_side_set")
        info = self._ensure_set(type, id, len(entities), dist_factors)
        self._check_dist_factors(info, dist_factors)
        n = self._physical(type, id)
        self._put_array(ex.sets[type].entries(n), entities, info.num_entries, np.int64)
        self._put_dist_factors(type, id, info, dist_factors)

    @requires_init
    def entity_set(self, entity_type, id):
        """Set members: id, entity_type, entities, dist_factors"""
        type = as_set_type(entity_type)
        n = self._physical(type, id)
        return SimpleNamespace(
            id=int(id),
            entity_type=type,
            entities=self._get_array(ex.sets[type].entries(n), int),
            dist_factors=self._dist_factors(type, id),
        )

    # -------------------------------------------------------------- maps --- #
    @requires_write_mode
    @requires_init
    def put_map(self, entity_type, id, values):
        """Define numbered map ``id``, one value per node (element, edge, face)"""
        type = as_map_type(entity_type)
        table = ex.maps[type]
        length = self.meta.dim(table.length)
        values = np.asarray(values, dtype=np.int64).ravel()
        if values.size != length:
            raise InvalidArrayLength(length, values.size)
        index = self.check_new_instance(type, id)
        self.ensure_define_mode()
        self._create_sized(table.entries(index + 1), self.int_kind, (table.length,))
        self.ensure_data_mode()
        if length:
            nc.put_values(self.fh, table.entries(index + 1), values)
        self.register_id(type, index, id)

    @requires_init
    def map_ids(self, entity_type):
        return self.entity_ids(as_map_type(entity_type))

    @requires_init
    def map(self, entity_type, id):
        type = as_map_type(entity_type)
        return self._get_array(ex.maps[type].entries(self._physical(type, id)), int)

    @requires_write_mode
    @requires_init
    def put_id_map(self, entity_type, values):
        """Write the node (element, edge, face) number map

        Parameters
        ----------
        entity_type : EntityType or str
            node_map, elem_map, edge_map, or face_map
        values : array_like
            The user id of each entity, in storage order

        """
        type = as_map_type(entity_type)
        table = ex.maps[type]
        length = self.meta.dim(table.length)
        values = np.asarray(values, dtype=np.int64).ravel()
        if values.size != length:
            raise InvalidArrayLength(length, values.size)
        if length == 0:
            return
        if not nc.has_variable(self.fh, table.id_map):
            self.ensure_define_mode()
            nc.create_variable(self.fh, table.id_map, self.int_kind, (table.length,))
        self.ensure_data_mode()
        nc.put_values(self.fh, table.id_map, values)

    @requires_init
    def id_map(self, entity_type):
        """The number map of ``entity_type``; 1..n when none was written"""
        type = as_map_type(entity_type)
        table = ex.maps[type]
        if nc.has_variable(self.fh, table.id_map):
            return self._get_array(table.id_map, int)
        return np.arange(1, self.meta.dim(table.length) + 1, dtype=int)

    @requires_write_mode
    @requires_init
    def put_elem_order_map(self, values):
        num_elem = self.num_elems()
        values = np.asarray(values, dtype=np.int64).ravel()
        if values.size != num_elem:
            raise InvalidArrayLength(num_elem, values.size)
        if num_elem == 0:
            return
        if not nc.has_variable(self.fh, ex.VAR_ELEM_ORDER_MAP):
            self.ensure_define_mode()
            nc.create_variable(self.fh, ex.VAR_ELEM_ORDER_MAP, self.int_kind, (ex.DIM_NUM_ELEM,))
        self.ensure_data_mode()
        nc.put_values(self.fh, ex.VAR_ELEM_ORDER_MAP, values)

    @requires_init
    def elem_order_map(self):
        if nc.has_variable(self.fh, ex.VAR_ELEM_ORDER_MAP):
            return self._get_array(ex.VAR_ELEM_ORDER_MAP, int)
        return np.arange(1, self.num_elems() + 1, dtype=int)

    # -------------------------------------------------------- properties --- #
    def _property_table(self, entity_type):
        type = EntityType.parse(entity_type)
        return type, self._family_table(type)

    def _property_variable(self, table, name):
        """The property variable carrying ``name``, or None"""
        for k in range(1, self._probe(table.prop) + 1):
            if nc.getncattr(self.fh, table.prop(k), ex.ATT_PROP_NAME) == name:
                return table.prop(k)
        return None

    def _define_property(self, table, name):
        var = self._property_variable(table, name)
        if var is not None:
            return var
        var = table.prop(self._probe(table.prop) + 1)
        self.ensure_define_mode()
        nc.create_variable(self.fh, var, self.int_kind, (table.num,), fill_value=0)
        nc.setncattr(self.fh, var, ex.ATT_PROP_NAME, name)
        self.ensure_data_mode()
        logger.debug(f"{self.filename}: defined property {name} as {var}")
        return var

    def _check_property_name(self, name):
        self.check_name(name)
        if name == "ID":
            raise ValueError("The ID property is written when an entity is defined")

    @requires_write_mode
    @requires_init
    def put_property(self, entity_type, id, name, value):
        """Set the integer property ``name`` of the ``entity_type`` instance ``id``

        Properties are stored as ``<prefix>_prop<k>`` variables over the
        family's instance count, tagged with a ``name`` attribute.  ``prop1``
        is the "ID" property.  Instances never given a value read as 0.

        """
        type, table = self._property_table(entity_type)
        self._check_property_name(name)
        index = self.find_index(type, id)
        var = self._define_property(table, name)
        nc.put_values(self.fh, var, int(value), index=index)

    @requires_write_mode
    @requires_init
    def put_property_array(self, entity_type, name, values):
        """Set property ``name`` of every instance, in physical order"""
        type, table = self._property_table(entity_type)
        self._check_property_name(name)
        count = self.max_instances(type)
        values = np.asarray(values, dtype=np.int64).ravel()
        if values.size != count:
            raise InvalidArrayLength(count, values.size)
        if count == 0:
            return
        var = self._define_property(table, name)
        nc.put_values(self.fh, var, values)

    @requires_init
    def property_array(self, entity_type, name):
        _, table = self._property_table(entity_type)
        var = self._property_variable(table, name)
        if var is None:
            raise VariableNotDefined(name)
        return self._get_array(var, int)

    @requires_init
    def property(self, entity_type, id, name):
        type, table = self._property_table(entity_type)
        index = self.find_index(type, id)
        return int(self.property_array(type, name)[index])

    @requires_init
    def property_names(self, entity_type):
        """Names of the properties of ``entity_type``, "ID" first"""
        type, table = self._property_table(entity_type)
        names = []
        for k in range(1, self._probe(table.prop) + 1):
            name = nc.getncattr(self.fh, table.prop(k), ex.ATT_PROP_NAME, "")
            names.append(name.decode() if isinstance(name, bytes) else str(name))
        return names

    # ------------------------------------------------ derived side sets --- #
    @requires_init
    def convert_nodeset_to_sideset(self, nodeset_id, sideset_id, write=False):
        """The side set made of the boundary sides whose nodes all belong to
        node set ``nodeset_id``.  With ``write``, the side set is also stored
        as ``sideset_id``.

        See Also
        --------
        exodusdb.side_sets.nodeset_to_sideset

        """
        side_set = side_sets.nodeset_to_sideset(self, nodeset_id, sideset_id)
        if write:
            self.put_side_set(sideset_id, side_set.elements, side_set.sides)
        return side_set
