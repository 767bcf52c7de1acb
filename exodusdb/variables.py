"""Variable catalogs, truth tables, and time dependent values.

Values are addressed by a 0-based time step, an entity type, an entity id,
and a 0-based variable index into the type's catalog.  Each (variable,
entity) pair is stored in its own NetCDF variable over the unlimited
``time_step`` dimension and is created on first write.  Global variables are
stored together in ``vals_glo_var``.
"""
import logging
import numpy as np

from . import nc
from . import exodus_h as ex
from .errors import (
    InvalidArrayLength,
    InvalidDimension,
    InvalidEntityType,
    InvalidTimeStep,
    VariableNotDefined,
)
from .exodus_h import EntityType, family
from .guards import requires_init, requires_write_mode
from .truth_table import TruthTable


logger = logging.getLogger(__name__)


def as_variable_type(type):
    type = EntityType.parse(type)
    if type not in ex.variables:
        raise InvalidEntityType(f"{type} entities have no variables")
    return type


def as_reduction_type(type):
    type = EntityType.parse(type)
    if type not in ex.reductions:
        raise InvalidEntityType(f"{type} entities have no reduction variables")
    return type


def as_table_type(type):
    type = as_variable_type(type)
    if ex.variables[type].table is None:
        raise InvalidEntityType(f"{type} variables have no truth table")
    return type


class variables_mixin:
    """Variable catalogs and the point, multi, time-series and reduction value
    accessors"""

    # ---------------------------------------------------------- catalogs --- #
    def _define_catalog(self, table, names):
        names = list(names)
        for name in names:
            self.check_name(name)
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate variable names in {names}")
        if nc.has_dimension(self.fh, table.num):
            raise ValueError(f"{self.filename}: {table.names} is already defined")
        if not names:
            return False
        self.ensure_define_mode()
        nc.create_dimension(self.fh, table.num, len(names))
        nc.create_variable(self.fh, table.names, str, (table.num, ex.DIM_NAME))
        self.invalidate()
        self.ensure_data_mode()
        nc.put_strings(self.fh, table.names, names, self.meta.dim(ex.DIM_NAME))
        return True

    @requires_write_mode
    @requires_init
    def define_variables(self, entity_type, names):
        """Define the variable catalog of ``entity_type``

        Parameters
        ----------
        entity_type : EntityType or str
            global, nodal, or a block or set type
        names : list of str
            Variable names, each at most 32 characters.  A catalog can only be
            defined once.

        """
        type = as_variable_type(entity_type)
        table = ex.variables[type]
        if not self._define_catalog(table, names):
            return
        if type == EntityType.global_:
            self.ensure_define_mode()
            dims = (ex.DIM_TIME, table.num)
            nc.create_variable(self.fh, table.values(1, 1), self.float_kind, dims)
            self.ensure_data_mode()
        logger.debug(f"{self.filename}: defined {type} variables {list(names)}")

    @requires_init
    def variable_names(self, entity_type):
        type = as_variable_type(entity_type)
        return nc.get_strings(self.fh, ex.variables[type].names)

    @requires_init
    def num_variables(self, entity_type):
        type = as_variable_type(entity_type)
        return self.meta.dim(ex.variables[type].num)

    @requires_init
    def variable_index(self, entity_type, name):
        """0-based position of ``name`` in the catalog of ``entity_type``"""
        names = self.variable_names(entity_type)
        if name not in names:
            raise VariableNotDefined(name)
        return names.index(name)

    def _var_index(self, type, var_index):
        if isinstance(var_index, str):
            return self.variable_index(type, var_index)
        num = self.meta.dim(ex.variables[type].num)
        if not 0 <= var_index < num:
            raise VariableNotDefined(f"{type} variable {var_index}")
        return int(var_index)

    # ------------------------------------------------------ truth tables --- #
    @requires_write_mode
    @requires_init
    def put_truth_table(self, entity_type, table):
        """Write the truth table of a block or set type

        Parameters
        ----------
        entity_type : EntityType or str
            A block or set type
        table : TruthTable or array_like, (num instances, num variables)
            Nonzero where the variable is stored for the instance

        Notes
        -----
        The table must match the instance count reserved by init() and the
        current size of the variable catalog.  Value variables are created for
        every true cell of already defined instances.

        """
        type = as_table_type(entity_type)
        if isinstance(table, TruthTable):
            if table.var_type != type:
                raise InvalidEntityType(f"Truth table is for {table.var_type}, not {type}")
            array = table.as_array()
        else:
            array = np.asarray(table, dtype=np.int32)
        expected = (self.max_instances(type), self.num_variables(type))
        if array.shape != expected:
            raise InvalidDimension(expected, array.shape)
        if array.size == 0:
            return

        vt = ex.variables[type]
        family_table = self._family_table(type)
        self.ensure_define_mode()
        if not nc.has_variable(self.fh, vt.table):
            nc.create_variable(self.fh, vt.table, "i4", (family_table.num, vt.num))
        for (index, id) in enumerate(self.entity_ids(type)):
            if self.num_members(type, id) == 0:
                continue
            for j in range(expected[1]):
                if array[index, j]:
                    self._value_variable(type, j, id, create=True)
        self.ensure_data_mode()
        nc.put_values(self.fh, vt.table, (array != 0).astype(np.int32))

    @requires_init
    def truth_table(self, entity_type):
        """The stored truth table, or an all true table when none was written"""
        type = as_table_type(entity_type)
        vt = ex.variables[type]
        num_blocks = self.max_instances(type)
        num_vars = self.num_variables(type)
        if nc.has_variable(self.fh, vt.table):
            stored = nc.get_variable(self.fh, vt.table)
            return TruthTable(type, num_blocks, num_vars, table=np.asarray(stored) != 0)
        return TruthTable(type, num_blocks, num_vars)

    @requires_init
    def is_var_in_truth_table(self, entity_type, id, var_index):
        type = as_table_type(entity_type)
        index = self.find_index(type, id)
        return self.truth_table(type).get(index, var_index)

    # ------------------------------------------------------------ values --- #
    def num_members(self, type, id):
        """Values per variable of the ``type`` instance ``id``"""
        if type == EntityType.global_:
            return 1
        return self.meta.dim(self._member_dim(type, id))

    def _member_dim(self, type, id):
        if type == EntityType.nodal:
            return ex.DIM_NUM_NODES
        n = self.find_index(type, id) + 1
        if type.family == family.block:
            return ex.blocks[type].num_entries(n)
        return ex.sets[type].num_entries(n)

    def _value_name(self, type, var_index, id):
        if type in (EntityType.global_, EntityType.nodal):
            return ex.variables[type].values(var_index + 1, None)
        n = self.find_index(type, id) + 1
        return ex.variables[type].values(var_index + 1, n)

    def _value_variable(self, type, var_index, id, create=False):
        name = self._value_name(type, var_index, id)
        if nc.has_variable(self.fh, name):
            return name
        if not create:
            return None
        self.ensure_define_mode()
        dims = (ex.DIM_TIME, self._member_dim(type, id))
        nc.create_variable(self.fh, name, self.float_kind, dims)
        logger.debug(f"{self.filename}: created {name}")
        return name

    def _fill(self, shape):
        return np.full(shape, nc.default_fill(self.float_kind), dtype=float)

    def _check_read_step(self, step):
        step = self._check_step(step)
        if step >= self.num_time_dim():
            raise InvalidTimeStep(step)
        return step

    def _check_range(self, start, end, read):
        start = self._check_step(start)
        end = self._check_step(end)
        if end < start:
            raise InvalidTimeStep(end)
        if read and end > self.num_time_dim():
            raise InvalidTimeStep(end)
        return start, end

    @requires_write_mode
    @requires_init
    def put_var(self, step, entity_type, id, var_index, values):
        """Write one variable of one entity at one time step

        Parameters
        ----------
        step : int
            0-based time step
        entity_type : EntityType or str
            global, nodal, or a block or set type
        id : int
            The entity id (ignored for global and nodal variables)
        var_index : int or str
            0-based index (or name) of the variable in the type's catalog
        values : array_like
            One value per member of the entity (1 for global variables)

        """
        step = self._check_step(step)
        type = as_variable_type(entity_type)
        var_index = self._var_index(type, var_index)
        num = self.num_members(type, id)
        values = np.asarray(values, dtype=float).ravel()
        if values.size != num:
            raise InvalidArrayLength(num, values.size)
        if num == 0:
            return
        name = self._value_variable(type, var_index, id, create=True)
        self.ensure_data_mode()
        if type == EntityType.global_:
            nc.put_values(self.fh, name, values[0], index=(step, var_index))
        else:
            nc.put_values(self.fh, name, values, index=step)

    @requires_init
    def var(self, step, entity_type, id, var_index):
        """Values of one variable of one entity at one time step

        Cells never written hold the NetCDF fill value.

        """
        step = self._check_read_step(step)
        type = as_variable_type(entity_type)
        var_index = self._var_index(type, var_index)
        num = self.num_members(type, id)
        name = self._value_variable(type, var_index, id)
        if num == 0:
            return np.zeros(0)
        if name is None:
            return self._fill(num)
        if type == EntityType.global_:
            return np.atleast_1d(nc.get_slice(self.fh, name, (step, var_index))).astype(float)
        return np.asarray(nc.get_slice(self.fh, name, step), dtype=float).ravel()

    @requires_write_mode
    @requires_init
    def put_var_multi(self, step, entity_type, id, values):
        """Write every catalog variable of one entity at one time step.
        ``values`` holds the variables one after another (variable-major)."""
        step = self._check_step(step)
        type = as_variable_type(entity_type)
        num_vars = self.num_variables(type)
        num = self.num_members(type, id)
        values = np.asarray(values, dtype=float).ravel()
        if values.size != num_vars * num:
            raise InvalidArrayLength(num_vars * num, values.size)
        for i in range(num_vars):
            self.put_var(step, type, id, i, values[i * num : (i + 1) * num])

    @requires_init
    def var_multi(self, step, entity_type, id):
        """Every catalog variable of one entity at one time step, variable-major"""
        type = as_variable_type(entity_type)
        num_vars = self.num_variables(type)
        if num_vars == 0:
            self._check_read_step(step)
            return np.zeros(0)
        return np.concatenate([self.var(step, type, id, i) for i in range(num_vars)])

    @requires_write_mode
    @requires_init
    def put_var_time_series(self, start, end, entity_type, id, var_index, values):
        """Write one variable of one entity for steps ``start`` to ``end - 1``.
        ``values`` holds the steps one after another."""
        start, end = self._check_range(start, end, read=False)
        type = as_variable_type(entity_type)
        var_index = self._var_index(type, var_index)
        num = self.num_members(type, id)
        values = np.asarray(values, dtype=float).ravel()
        if values.size != (end - start) * num:
            raise InvalidArrayLength((end - start) * num, values.size)
        if values.size == 0:
            return
        name = self._value_variable(type, var_index, id, create=True)
        self.ensure_data_mode()
        if type == EntityType.global_:
            nc.put_values(self.fh, name, values, index=(slice(start, end), var_index))
        else:
            nc.put_values(self.fh, name, values.reshape((end - start, num)), index=slice(start, end))

    @requires_init
    def var_time_series_array(self, start, end, entity_type, id, var_index):
        """One variable of one entity for steps ``start`` to ``end - 1`` as a
        (steps, members) array"""
        start, end = self._check_range(start, end, read=True)
        type = as_variable_type(entity_type)
        var_index = self._var_index(type, var_index)
        num = self.num_members(type, id)
        name = self._value_variable(type, var_index, id)
        shape = (end - start, num)
        if name is None or 0 in shape:
            return self._fill(shape)
        if type == EntityType.global_:
            values = nc.get_slice(self.fh, name, (slice(start, end), var_index))
        else:
            values = nc.get_slice(self.fh, name, slice(start, end))
        return np.asarray(values, dtype=float).reshape(shape)

    @requires_init
    def var_time_series(self, start, end, entity_type, id, var_index):
        """Flat time series: the point values of steps ``start`` to ``end - 1``,
        one step after another"""
        return self.var_time_series_array(start, end, entity_type, id, var_index).ravel()

    # -------------------------------------------------------- reductions --- #
    @requires_write_mode
    @requires_init
    def define_reduction_variables(self, entity_type, names):
        """Define the reduction variable catalog of ``entity_type``: one value
        per variable for a whole block, set, assembly, or blob.  Global
        reduction variables are the global variables."""
        type = as_reduction_type(entity_type)
        if type == EntityType.global_:
            return self.define_variables(type, names)
        if self._define_catalog(ex.reductions[type], names):
            logger.debug(f"{self.filename}: defined {type} reduction variables {list(names)}")

    @requires_init
    def reduction_variable_names(self, entity_type):
        type = as_reduction_type(entity_type)
        return nc.get_strings(self.fh, ex.reductions[type].names)

    @requires_init
    def num_reduction_variables(self, entity_type):
        type = as_reduction_type(entity_type)
        return self.meta.dim(ex.reductions[type].num)

    def _reduction_name(self, type, id):
        if type == EntityType.global_:
            return ex.reductions[type].values(None)
        return ex.reductions[type].values(self.find_index(type, id) + 1)

    @requires_write_mode
    @requires_init
    def put_reduction_vars(self, step, entity_type, id, values):
        """Write every reduction variable of one entity at one time step"""
        step = self._check_step(step)
        type = as_reduction_type(entity_type)
        num = self.num_reduction_variables(type)
        values = np.asarray(values, dtype=float).ravel()
        if values.size != num:
            raise InvalidArrayLength(num, values.size)
        if num == 0:
            return
        name = self._reduction_name(type, id)
        if not nc.has_variable(self.fh, name):
            self.ensure_define_mode()
            dims = (ex.DIM_TIME, ex.reductions[type].num)
            nc.create_variable(self.fh, name, self.float_kind, dims)
        self.ensure_data_mode()
        nc.put_values(self.fh, name, values, index=step)

    @requires_init
    def reduction_vars(self, step, entity_type, id):
        """Every reduction variable of one entity at one time step"""
        step = self._check_read_step(step)
        type = as_reduction_type(entity_type)
        num = self.num_reduction_variables(type)
        name = self._reduction_name(type, id)
        if num == 0:
            return np.zeros(0)
        if not nc.has_variable(self.fh, name):
            return self._fill(num)
        return np.asarray(nc.get_slice(self.fh, name, step), dtype=float).ravel()
