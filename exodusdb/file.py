import os
import sys
import logging
import numpy as np
from types import SimpleNamespace

from . import nc
from . import exodus_h as ex
from .config import config
from .errors import (
    AlreadyInitialized,
    EntityNotFound,
    InvalidArrayLength,
    InvalidDimension,
    InvalidEntityType,
    InvalidMode,
    InvalidTimeStep,
    StringTooLong,
)
from .exodus_h import EntityType, family
from .ex_params import ex_init_params, ex_metadata, count_dimensions
from .guards import requires_init, requires_open, requires_write_mode
from .util import stringify, streamify
from .entities import entities_mixin
from .variables import variables_mixin
from .assembly import assembly_mixin


logger = logging.getLogger(__name__)


class exodus_file(entities_mixin, variables_mixin, assembly_mixin):
    """
    A file object for Exodus II data.

    Exodus is a model developed to store and retrieve data for finite element
    analyses: meshes (coordinates, connectivity), groupings of mesh entities
    (sets, maps, assemblies, blobs), per-entity metadata (attributes, names,
    QA and info records), and time dependent field data.  This class stores
    the model directly in NetCDF dimensions, variables and attributes using the
    on-disk names of the Exodus II format, so files can be read and written by
    other Exodus tools.

    Parameters
    ----------
    filename : str
        Path to the file
    mode : {'r', 'w', 'a'}, optional
        read, write (create), or append.  Default is 'r'
    clobber : bool, optional
        When creating, overwrite an existing file.  Default is False
    word_size : {4, 8}, optional
        When creating, floating point storage size in bytes.  Defaults to
        ``config.word_size``
    int64 : bool, optional
        When creating, store ids and connectivity as 64 bit integers

    Notes
    -----
    A file moves through the phases uninitialized -> define -> data.  ``init``
    must be called once on a newly created file before anything else is
    written.  Structural calls (blocks, sets, variable catalogs, ...) and
    value calls may be interleaved freely; the handle switches phase as
    needed.

    Examples
    --------
    >>> import exodusdb
    >>> with exodusdb.File("mesh.exo", mode="w") as exof:
    ...     exof.init(title="cube", num_dim=3, num_nodes=8, num_elems=1, num_elem_blocks=1)
    ...     exof.put_block(1, "HEX8", 1, 8)
    ...     exof.put_connectivity(1, [1, 2, 3, 4, 5, 6, 7, 8])

    """

    def __init__(self, filename, mode="r", clobber=False, word_size=None, int64=False):
        if mode not in ("r", "w", "a"):
            raise InvalidMode(f"Invalid mode {mode!r}, choose from 'r', 'w', 'a'")
        self.mode = mode
        self.filename = filename
        self.fh = None
        if word_size is not None and word_size not in (4, 8):
            raise ValueError(f"word_size must be 4 or 8, not {word_size}")
        if self.mode in ("r", "a"):
            if not os.path.isfile(self.filename):
                raise FileNotFoundError(self.filename)
            self.fh = nc.open(self.filename, mode=self.mode)
        else:
            if os.path.exists(self.filename) and not clobber:
                raise FileExistsError(self.filename)
            format = "NETCDF4" if int64 else None
            self.fh = nc.open(self.filename, mode="w", clobber=clobber, format=format)

        self.meta = ex_metadata(self.fh).load()
        self.exinit = ex_init_params(self.fh)
        self._index = {}

        if self.mode == "w":
            self.initw(word_size or config.word_size, int64)
        self.float_kind = "f4" if self.word_size == 4 else "f8"
        self.int_kind = "i8" if self.int64 else "i4"

    def __repr__(self):
        return f"exodus_file({self.filename!r}, mode={self.mode!r})"

    @requires_open
    def __contains__(self, name):
        return nc.has_variable(self.fh, name)

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()

    def __del__(self):
        fh = getattr(self, "fh", None)
        if fh is None:
            return
        try:
            nc.close(fh)
        except Exception as e:
            logger.warning(f"{self.filename}: error closing file: {e}")

    def close(self):
        """Flush and close the file.  Closing twice is a no-op"""
        if self.fh is None:
            return
        fh, self.fh = self.fh, None
        nc.close(fh)

    @property
    def closed(self):
        return self.fh is None

    @requires_open
    def sync(self):
        """Flush pending changes without closing"""
        if self.mode in ("w", "a"):
            nc.sync(self.fh)

    def initw(self, word_size, int64):
        nc.set_global_attr(self.fh, ex.ATT_API_VERSION, np.float32(ex.API_VERSION))
        nc.set_global_attr(self.fh, ex.ATT_VERSION, np.float32(ex.FILE_VERSION))
        nc.set_global_attr(self.fh, ex.ATT_FLT_WORDSIZE, np.int32(word_size))
        nc.set_global_attr(self.fh, ex.ATT_FILESIZE, np.int32(1))
        nc.set_global_attr(self.fh, ex.ATT_INT64_STATUS, np.int32(1 if int64 else 0))
        logger.debug(f"{self.filename}: created ({nc.data_model(self.fh)})")

    @property
    @requires_open
    def word_size(self):
        return int(nc.get_global_attr(self.fh, ex.ATT_FLT_WORDSIZE, 8))

    @property
    @requires_open
    def int64(self):
        return bool(nc.get_global_attr(self.fh, ex.ATT_INT64_STATUS, 0))

    # --------------------------------------------------------- lifecycle --- #
    @requires_open
    def is_initialized(self):
        return self.meta.initialized

    def ensure_define_mode(self):
        self.meta.ensure_define_mode()

    def ensure_data_mode(self):
        self.meta.ensure_data_mode()

    def invalidate(self):
        """Drop cached dimension sizes and id lookups after a structural change"""
        self._index.clear()
        self.meta.refresh()

    @requires_write_mode
    def init(self, title="", num_dim=3, **counts):
        """Write the initialization parameters and reserve the model's dimensions

        Parameters
        ----------
        title : str
            Database title, at most 80 characters
        num_dim : int
            The number of spatial dimensions, 1, 2, or 3
        counts : int
            Any of num_nodes, num_edges, num_edge_blocks, num_faces,
            num_face_blocks, num_elems, num_elem_blocks, num_node_sets,
            num_edge_sets, num_face_sets, num_side_sets, num_elem_sets,
            num_node_maps, num_edge_maps, num_face_maps, num_elem_maps,
            num_assemblies, num_blobs.  Omitted counts are 0.

        """
        if self.meta.initialized:
            raise AlreadyInitialized(self.filename)
        unknown = [name for name in counts if name not in count_dimensions]
        if unknown:
            raise TypeError(f"init() got unexpected keyword argument(s) {', '.join(unknown)}")
        if num_dim not in (1, 2, 3):
            raise InvalidDimension("1, 2, or 3", num_dim)
        title = title or ""
        self.check_name(title, ex.MAX_TITLE_LENGTH)
        for (name, value) in counts.items():
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

        self.ensure_define_mode()
        fh = self.fh
        if title:
            nc.set_global_attr(fh, ex.ATT_TITLE, title)

        nc.create_dimension(fh, ex.DIM_STR, ex.MAX_STR_LENGTH + 1)
        nc.create_dimension(fh, ex.DIM_NAME, ex.MAX_NAME_LENGTH + 1)
        nc.create_dimension(fh, ex.DIM_LIN, ex.MAX_LINE_LENGTH + 1)
        nc.create_dimension(fh, ex.DIM_N4, 4)
        nc.create_dimension(fh, ex.DIM_NUM_DIM, num_dim)
        nc.create_dimension(fh, ex.DIM_TIME, None)
        nc.create_variable(fh, ex.VAR_WHOLE_TIME, self.float_kind, (ex.DIM_TIME,))

        for (name, dim) in count_dimensions.items():
            if counts.get(name, 0) > 0:
                nc.create_dimension(fh, dim, counts[name])

        num_nodes = counts.get("num_nodes", 0)
        if num_nodes > 0:
            for var in ex.VAR_COORDS[:num_dim]:
                nc.create_variable(fh, var, self.float_kind, (ex.DIM_NUM_NODES,))

        for table in list(ex.blocks.values()) + list(ex.sets.values()):
            self._init_family(table, has_status=True)
        for table in ex.maps.values():
            self._init_family(table, has_status=False)

        self.ensure_data_mode()
        self.meta.load()
        self.invalidate()
        logger.debug(f"{self.filename}: initialized num_dim={num_dim} {counts}")

    def _init_family(self, table, has_status):
        if not nc.has_dimension(self.fh, table.num):
            return
        var = nc.create_variable(self.fh, table.ids, self.int_kind, (table.num,))
        var.setncattr(ex.ATT_PROP_NAME, "ID")
        if has_status:
            nc.create_variable(self.fh, table.status, "i4", (table.num,), fill_value=0)
        nc.create_variable(self.fh, table.names, str, (table.num, ex.DIM_NAME))

    @requires_init
    def init_params(self):
        """Every initialization count, as a namespace"""
        return self.exinit.as_namespace()

    @requires_open
    def title(self):
        return self.meta.title

    @requires_open
    def num_dimensions(self):
        return self.meta.num_dim

    @requires_open
    def num_nodes(self):
        return self.meta.dim(ex.DIM_NUM_NODES)

    @requires_open
    def num_elems(self):
        return self.meta.dim(ex.DIM_NUM_ELEM)

    @requires_open
    def num_edges(self):
        return self.meta.dim(ex.DIM_NUM_EDGE)

    @requires_open
    def num_faces(self):
        return self.meta.dim(ex.DIM_NUM_FACE)

    @requires_open
    def version(self):
        """(major, minor) of the file format version"""
        version = float(nc.get_global_attr(self.fh, ex.ATT_VERSION, 0.0))
        major = int(version)
        minor = int(round((version - major) * 100))
        if minor % 10 == 0:
            minor //= 10
        return (major, minor)

    @requires_open
    def api_version(self):
        return float(nc.get_global_attr(self.fh, ex.ATT_API_VERSION, 0.0))

    @requires_open
    def storage_type(self):
        return "d" if self.word_size == 8 else "f"

    def check_name(self, name, max_length=ex.MAX_NAME_LENGTH):
        """Names are stored as UTF-8, so the limit is on the encoded length"""
        if not isinstance(name, str):
            raise TypeError(f"Expected a str name, got {type(name).__name__}")
        size = len(name.encode())
        if size > max_length:
            raise StringTooLong(max_length, size)
        return name

    # ------------------------------------------------------- coordinates --- #
    @requires_write_mode
    @requires_init
    def put_coords(self, x, y=None, z=None):
        """Write nodal coordinates, one array per spatial dimension

        Parameters
        ----------
        x, y, z : array_like
            Coordinates of each node.  ``y`` is required for 2D and 3D
            models, ``z`` for 3D models.

        """
        num_dim = self.meta.num_dim
        num_nodes = self.num_nodes()
        axes = (x, y, z)
        for (i, axis) in enumerate(axes[:num_dim]):
            if axis is None:
                raise InvalidDimension(num_dim, i)
            if len(axis) != num_nodes:
                raise InvalidArrayLength(num_nodes, len(axis))
        if num_nodes == 0:
            return
        self.ensure_data_mode()
        for (i, axis) in enumerate(axes[:num_dim]):
            nc.put_values(self.fh, ex.VAR_COORDS[i], np.asarray(axis, dtype=float))

    @requires_init
    def coord(self, axis):
        """Coordinates of every node along ``axis`` (0, 1, 2 or 'x', 'y', 'z')"""
        if isinstance(axis, str):
            axis = "xyz".index(axis.lower())
        if not 0 <= axis < self.meta.num_dim:
            raise InvalidDimension(self.meta.num_dim, axis)
        if self.num_nodes() == 0:
            return np.zeros(0)
        return np.asarray(nc.get_variable(self.fh, ex.VAR_COORDS[axis]), dtype=float)

    @requires_init
    def coords(self):
        """Nodal coordinates as a (num_nodes, num_dim) array"""
        num_dim = self.meta.num_dim
        coords = np.zeros((self.num_nodes(), num_dim))
        for i in range(num_dim):
            coords[:, i] = self.coord(i)
        return coords

    @requires_write_mode
    @requires_init
    def put_coord_names(self, names):
        num_dim = self.meta.num_dim
        if len(names) != num_dim:
            raise InvalidArrayLength(num_dim, len(names))
        for name in names:
            self.check_name(name)
        self.ensure_define_mode()
        if not nc.has_variable(self.fh, ex.VAR_NAME_COORD):
            nc.create_variable(self.fh, ex.VAR_NAME_COORD, str, (ex.DIM_NUM_DIM, ex.DIM_NAME))
        self.ensure_data_mode()
        nc.put_strings(self.fh, ex.VAR_NAME_COORD, names, self.meta.dim(ex.DIM_NAME))

    @requires_init
    def coord_names(self):
        names = nc.get_strings(self.fh, ex.VAR_NAME_COORD)
        if not names:
            names = ["X", "Y", "Z"][: self.meta.num_dim]
        return names

    # ------------------------------------------------------- QA and info --- #
    @requires_write_mode
    @requires_init
    def put_qa(self, records):
        """Write QA records

        Parameters
        ----------
        records : list
            Each record is a sequence (code_name, code_version, date, time) of
            strings no longer than 32 characters

        """
        records = [self._qa_fields(record) for record in records]
        for record in records:
            for field in record:
                self.check_name(field, ex.MAX_STR_LENGTH)
        if nc.has_variable(self.fh, ex.VAR_QA_TITLE):
            raise ValueError(f"{self.filename}: QA records already written")
        if not records:
            return
        self.ensure_define_mode()
        nc.create_dimension(self.fh, ex.DIM_NUM_QA, len(records))
        shape = (ex.DIM_NUM_QA, ex.DIM_N4, ex.DIM_STR)
        nc.create_variable(self.fh, ex.VAR_QA_TITLE, str, shape)
        self.invalidate()
        self.ensure_data_mode()
        width = self.meta.dim(ex.DIM_STR)
        for (i, record) in enumerate(records):
            nc.put_strings(self.fh, ex.VAR_QA_TITLE, record, width, i)

    @staticmethod
    def _qa_fields(record):
        if isinstance(record, SimpleNamespace):
            record = (record.code_name, record.code_version, record.date, record.time)
        record = list(record)
        if len(record) != 4:
            raise InvalidArrayLength(4, len(record))
        return record

    @requires_init
    def qa_records(self):
        if not nc.has_variable(self.fh, ex.VAR_QA_TITLE):
            return []
        chars = nc.get_slice(self.fh, ex.VAR_QA_TITLE, slice(None))
        records = []
        for row in chars:
            fields = [stringify(row[j]) for j in range(4)]
            records.append(
                SimpleNamespace(
                    code_name=fields[0],
                    code_version=fields[1],
                    date=fields[2],
                    time=fields[3],
                )
            )
        return records

    @requires_write_mode
    @requires_init
    def put_info(self, lines):
        """Write information records, each at most 80 characters"""
        lines = list(lines)
        for line in lines:
            self.check_name(line, ex.MAX_LINE_LENGTH)
        if nc.has_variable(self.fh, ex.VAR_INFO):
            raise ValueError(f"{self.filename}: info records already written")
        if not lines:
            return
        self.ensure_define_mode()
        nc.create_dimension(self.fh, ex.DIM_NUM_INFO, len(lines))
        nc.create_variable(self.fh, ex.VAR_INFO, str, (ex.DIM_NUM_INFO, ex.DIM_LIN))
        self.invalidate()
        self.ensure_data_mode()
        nc.put_strings(self.fh, ex.VAR_INFO, lines, self.meta.dim(ex.DIM_LIN))

    @requires_init
    def info_records(self):
        return nc.get_strings(self.fh, ex.VAR_INFO)

    # ------------------------------------------------ ids and resolution --- #
    def _family_table(self, type):
        fam = type.family
        if fam == family.block:
            return ex.blocks[type]
        elif fam == family.set:
            return ex.sets[type]
        elif fam == family.map:
            return ex.maps[type]
        raise InvalidEntityType(f"{type} entities have no id table")

    def _probe(self, name_of):
        """Number of consecutive instances 1, 2, ... whose variable exists"""
        n = 0
        while nc.has_variable(self.fh, name_of(n + 1)):
            n += 1
        return n

    def next_index(self, type):
        """Physical index the next instance of ``type`` will be stored at"""
        fam = type.family
        if fam == family.block:
            return self._probe(ex.blocks[type].conn)
        elif fam == family.set:
            return self._probe(ex.sets[type].entries)
        elif fam == family.map:
            return self._probe(ex.maps[type].entries)
        elif type == EntityType.assembly:
            return self._probe(ex.VAR_ASSEMBLY)
        elif type == EntityType.blob:
            return self._probe(ex.VAR_BLOB)
        raise InvalidEntityType(f"{type} entities have no instances")

    def max_instances(self, type):
        """The number of instances of ``type`` reserved by init()"""
        if type == EntityType.assembly:
            return self.meta.dim(ex.DIM_NUM_ASSEMBLY)
        elif type == EntityType.blob:
            return self.meta.dim(ex.DIM_NUM_BLOB)
        return self.meta.dim(self._family_table(type).num)

    @requires_init
    def entity_ids(self, type):
        """Ids of every defined instance of ``type``, in physical order"""
        type = EntityType.parse(type)
        if type.family == family.hierarchical:
            name_of = ex.VAR_ASSEMBLY if type == EntityType.assembly else ex.VAR_BLOB
            count = self._probe(name_of)
            ids = [nc.getncattr(self.fh, name_of(n), ex.ATT_ID) for n in range(1, count + 1)]
            return np.array([int(id) for id in ids], dtype=int)
        table = self._family_table(type)
        if not nc.has_variable(self.fh, table.ids):
            return np.zeros(0, dtype=int)
        var = nc.get_variable(self.fh, table.ids, raw=True)
        values = var[:]
        mask = np.ma.getmaskarray(values)
        data = np.ma.getdata(values)
        return np.array([int(x) for (x, m) in zip(data, mask) if not m], dtype=int)

    def _index_table(self, type):
        if type not in self._index:
            table = {}
            for (i, id) in enumerate(self.entity_ids(type)):
                table.setdefault(int(id), i)
            self._index[type] = table
        return self._index[type]

    @requires_init
    def find_index(self, type, id):
        """0-based physical index of the ``type`` instance with ``id``

        Raises
        ------
        EntityNotFound

        """
        type = EntityType.parse(type)
        try:
            return self._index_table(type)[int(id)]
        except KeyError:
            raise EntityNotFound(type.label, id) from None

    @requires_open
    def has_entity(self, type, id):
        type = EntityType.parse(type)
        return int(id) in self._index_table(type)

    def register_id(self, type, index, id):
        """Record ``id`` at physical ``index`` in the family's id table"""
        table = self._family_table(type)
        nc.put_values(self.fh, table.ids, id, index=index)
        if type.family != family.map:
            nc.put_values(self.fh, table.status, 1, index=index)
        self.invalidate()

    def check_new_instance(self, type, id):
        """Physical index for a new ``type`` instance with ``id``

        Raises ValueError for a duplicate id and InvalidArrayLength when every
        instance reserved by init() is already defined.

        """
        if self.has_entity(type, id):
            raise ValueError(f"{type} with ID {id} already exists")
        index = self.next_index(type)
        count = self.max_instances(type)
        if index >= count:
            raise InvalidArrayLength(count, index + 1)
        return index

    # ------------------------------------------------------------- names --- #
    def _names_variable(self, type):
        type = EntityType.parse(type)
        if type.family in (family.scalar, family.hierarchical):
            raise InvalidEntityType(f"{type} entities have no names table")
        return type, self._family_table(type).names

    @requires_write_mode
    @requires_init
    def put_name(self, type, id, name):
        """Name the ``type`` instance with ``id``"""
        type = EntityType.parse(type)
        self.check_name(name)
        if type.family == family.hierarchical:
            return self.put_hierarchical_name(type, id, name)
        type, var = self._names_variable(type)
        index = self.find_index(type, id)
        self.ensure_data_mode()
        nc.put_string(self.fh, var, name, self.meta.dim(ex.DIM_NAME), index)

    @requires_write_mode
    @requires_init
    def put_names(self, type, names):
        """Name every instance of ``type``, in physical order"""
        type, var = self._names_variable(type)
        count = self.max_instances(type)
        if len(names) != count:
            raise InvalidArrayLength(count, len(names))
        for name in names:
            self.check_name(name)
        self.ensure_data_mode()
        nc.put_strings(self.fh, var, names, self.meta.dim(ex.DIM_NAME))

    @requires_init
    def name(self, type, id):
        type = EntityType.parse(type)
        if type.family == family.hierarchical:
            return self.hierarchical_name(type, id)
        index = self.find_index(type, id)
        names = self.names(type)
        return names[index] if index < len(names) else ""

    @requires_init
    def names(self, type):
        """Names of the ``type`` instances, in physical order"""
        type = EntityType.parse(type)
        if type.family == family.hierarchical:
            return [self.hierarchical_name(type, id) for id in self.entity_ids(type)]
        type, var = self._names_variable(type)
        return nc.get_strings(self.fh, var)

    # -------------------------------------------------------------- time --- #
    def _check_step(self, step):
        if isinstance(step, bool) or not isinstance(step, (int, np.integer)) or step < 0:
            raise InvalidTimeStep(step)
        return int(step)

    @requires_write_mode
    @requires_init
    def put_time(self, step, value):
        """Write the time value of (0-based) ``step``"""
        step = self._check_step(step)
        self.ensure_data_mode()
        nc.put_values(self.fh, ex.VAR_WHOLE_TIME, value, index=step)

    @requires_init
    def times(self):
        """Time values of every step written with put_time, in step order"""
        values = nc.get_variable(self.fh, ex.VAR_WHOLE_TIME, raw=True)[:]
        mask = np.ma.getmaskarray(values)
        return np.ma.getdata(values)[~mask]

    @requires_init
    def time(self, step):
        step = self._check_step(step)
        if step >= self.num_time_dim():
            raise InvalidTimeStep(step)
        value = nc.get_variable(self.fh, ex.VAR_WHOLE_TIME, raw=True)[step]
        if np.ma.is_masked(value):
            raise InvalidTimeStep(step)
        return float(value)

    @requires_init
    def num_time_steps(self):
        """Number of distinct steps written with put_time"""
        values = nc.get_variable(self.fh, ex.VAR_WHOLE_TIME, raw=True)[:]
        return int(np.count_nonzero(~np.ma.getmaskarray(values)))

    @requires_open
    def num_time_dim(self):
        """Current length of the unlimited time axis"""
        return nc.get_dimension(self.fh, ex.DIM_TIME, 0)

    # ---------------------------------------------------------- describe --- #
    @requires_open
    def describe(self, file=None):
        """Writes out the number of objects and the variable names to the text
        stream `file`.

        Parameters
        ----------
        file : str or file-object
            Text stream.  If a `str`, a file with that name will be opened in `w` mode.

        """
        stream, fown = streamify(file or sys.stdout)
        try:
            self._describe(stream)
        finally:
            if fown:
                stream.close()

    def _describe(self, stream):
        stream.write(f"File: {self.filename}\n")
        if not self.meta.initialized:
            stream.write("Not initialized\n")
            return
        stream.write(f"Title: {self.title()}\n")
        stream.write(f"Storage type: {self.storage_type()}\n")
        stream.write(f"Num info strings: {len(self.info_records())}\n")
        stream.write(f"Dimension: {self.num_dimensions()}\n")
        stream.write(f"Num nodes   : {self.num_nodes()}\n")
        stream.write(f"Num edges   : {self.num_edges()}\n")
        stream.write(f"Num faces   : {self.num_faces()}\n")
        stream.write(f"Num elements: {self.num_elems()}\n")

        for type in (EntityType.elem_block, EntityType.edge_block, EntityType.face_block):
            self._summarize(type.label.replace("_", " "), self.entity_ids(type), stream)
        for type in ex.sets:
            self._summarize(type.label.replace("_", " "), self.entity_ids(type), stream)
        for type in (EntityType.assembly, EntityType.blob):
            self._summarize(type.label, self.entity_ids(type), stream)

        for type in ex.variables:
            self._summarize_vars(type.label.replace("_", " "), self.variable_names(type), stream)

        times = self.times()
        stream.write(f"Time steps: {len(times)}\n")
        for (i, time) in enumerate(times):
            stream.write(f"  {i} {time}\n")

    def _summarize(self, name, items, stream):
        num = 0 if items is None else len(items)
        stream.write(f"{name.title()}s: {num}")
        if num:
            ids = " ".join(str(_) for _ in items)
            stream.write(f" Ids = {ids}")
        stream.write("\n")

    def _summarize_vars(self, entity, names, stream):
        stream.write(f"{entity.title()} vars: {len(names)}\n")
        for (i, name) in enumerate(names):
            stream.write(f"  {i} {name}\n")


ExodusFile = exodus_file


def write_globals(data, times, title=None, filename="Globals.exo", clobber=False):
    """Write an exodus file which contains only global variables.

    Parameters
    ----------
    data : dict of ndarray
        data[key] = val, where key is the variable name and val the corresponding values
    times : ndarray
        times (same for all variables in data).

    """
    numtime = len(times)
    variables = list(data)
    for variable in variables:
        numval = len(data[variable])
        if not numval == numtime:
            raise InvalidArrayLength(numtime, numval)

    with exodus_file(filename, mode="w", clobber=clobber) as fh:
        fh.init(title=title or "", num_dim=1)
        fh.define_variables(EntityType.global_, variables)
        for (step, time) in enumerate(times):
            fh.put_time(step, time)
            a = np.array([data[variable][step] for variable in variables])
            fh.put_var_multi(step, EntityType.global_, None, a)

    return filename
