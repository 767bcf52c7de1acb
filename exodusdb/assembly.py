"""Assemblies, blobs, and typed entity attributes"""
import logging
import numpy as np
from enum import Enum
from numbers import Integral, Real
from types import SimpleNamespace

from . import nc
from . import exodus_h as ex
from .errors import InvalidArrayLength, VariableNotDefined
from .exodus_h import EntityType
from .guards import requires_init, requires_write_mode


logger = logging.getLogger(__name__)

# Attributes the library itself puts on primary variables
reserved_attributes = (ex.ATT_ID, ex.ATT_NAME, ex.ATT_ENTITY_TYPE, ex.ATT_NAME_ELEM_TYPE)


class AttributeType(Enum):
    integer = 1
    double = 2
    char = 3


def attribute_type_of(value):
    """Infer the attribute type of ``value``"""
    if isinstance(value, (str, bytes)):
        return AttributeType.char
    values = np.atleast_1d(np.asarray(value))
    if values.size == 0:
        raise ValueError("Empty attribute value")
    if all(isinstance(x, (Integral, np.integer)) and not isinstance(x, bool) for x in values.tolist()):
        return AttributeType.integer
    if all(isinstance(x, (Real, np.floating)) for x in values.tolist()):
        return AttributeType.double
    raise TypeError(f"Cannot store attribute of type {type(value).__name__}")


class assembly_mixin:
    """Assemblies, blobs and attributes"""

    def _hierarchical_variable(self, type):
        return ex.VAR_ASSEMBLY if type == EntityType.assembly else ex.VAR_BLOB

    def hierarchical_name(self, type, id):
        name = self._hierarchical_variable(type)(self._physical(type, id))
        value = nc.getncattr(self.fh, name, ex.ATT_NAME, "")
        return value.decode() if isinstance(value, bytes) else str(value)

    def put_hierarchical_name(self, type, id, name):
        var = self._hierarchical_variable(type)(self._physical(type, id))
        nc.setncattr(self.fh, var, ex.ATT_NAME, name)

    # -------------------------------------------------------- assemblies --- #
    @requires_write_mode
    @requires_init
    def put_assembly(self, id, name, entity_type, members):
        """Define an assembly: a named list of entity ids of one type

        Parameters
        ----------
        id : int
            The assembly ID
        name : str
            Assembly name, at most 32 characters
        entity_type : EntityType or str
            Type of the member entities
        members : list of int
            Member ids.  Members are not required to exist.

        """
        type = EntityType.parse(entity_type)
        self.check_name(name)
        members = np.asarray(members, dtype=np.int64).ravel()
        index = self.check_new_instance(EntityType.assembly, id)

        n = index + 1
        self.ensure_define_mode()
        var = ex.VAR_ASSEMBLY(n)
        self._create_dimension(ex.DIM_NUM_ENTITY_ASSEMBLY(n), members.size)
        self._create_sized(var, self.int_kind, (ex.DIM_NUM_ENTITY_ASSEMBLY(n),))
        nc.setncattr(self.fh, var, ex.ATT_ID, self._int_attribute(id))
        nc.setncattr(self.fh, var, ex.ATT_NAME, name)
        nc.setncattr(self.fh, var, ex.ATT_ENTITY_TYPE, type.label)
        self.ensure_data_mode()
        if members.size:
            nc.put_values(self.fh, var, members)
        self.invalidate()
        logger.debug(f"{self.filename}: defined assembly {id} ({members.size} {type} members)")

    @requires_init
    def assembly_ids(self):
        return self.entity_ids(EntityType.assembly)

    @requires_init
    def assembly(self, id):
        """Assembly record: id, name, entity_type, members"""
        var = ex.VAR_ASSEMBLY(self._physical(EntityType.assembly, id))
        entity_type = nc.getncattr(self.fh, var, ex.ATT_ENTITY_TYPE)
        return SimpleNamespace(
            id=int(id),
            name=self.hierarchical_name(EntityType.assembly, id),
            entity_type=EntityType.parse(entity_type),
            members=self._get_array(var, int),
        )

    # ------------------------------------------------------------- blobs --- #
    @requires_write_mode
    @requires_init
    def put_blob(self, id, name, data=b""):
        """Define a blob: a named, opaque byte payload"""
        self.check_name(name)
        data = np.frombuffer(bytes(data), dtype=np.int8)
        index = self.check_new_instance(EntityType.blob, id)

        n = index + 1
        self.ensure_define_mode()
        var = ex.VAR_BLOB(n)
        self._create_dimension(ex.DIM_NUM_BYTES_BLOB(n), data.size)
        self._create_sized(var, bytes, (ex.DIM_NUM_BYTES_BLOB(n),))
        nc.setncattr(self.fh, var, ex.ATT_ID, self._int_attribute(id))
        nc.setncattr(self.fh, var, ex.ATT_NAME, name)
        self.ensure_data_mode()
        if data.size:
            nc.put_values(self.fh, var, data)
        self.invalidate()
        logger.debug(f"{self.filename}: defined blob {id} ({data.size} bytes)")

    @requires_init
    def blob_ids(self):
        return self.entity_ids(EntityType.blob)

    @requires_init
    def blob(self, id):
        """Blob record: id, name, data (bytes)"""
        var = ex.VAR_BLOB(self._physical(EntityType.blob, id))
        return SimpleNamespace(
            id=int(id),
            name=self.hierarchical_name(EntityType.blob, id),
            data=self._get_array(var, np.int8).tobytes(),
        )

    # -------------------------------------------------------- attributes --- #
    def _int_attribute(self, value):
        if self.int64:
            return np.int64(value)
        return np.int32(value)

    @requires_write_mode
    @requires_init
    def put_attribute(self, entity_type, id, name, value, attribute_type=None):
        """Attach attribute ``name`` to the ``entity_type`` instance ``id``

        Parameters
        ----------
        name : str
            Attribute name, at most 32 characters
        value : int, float, str, or sequence of int or float
            Attribute value
        attribute_type : AttributeType, optional
            Storage type; inferred from ``value`` when omitted

        """
        self.check_name(name)
        if name.startswith("_") or name in reserved_attributes:
            raise ValueError(f"{name!r} is a reserved attribute name")
        if attribute_type is None:
            attribute_type = attribute_type_of(value)
        attribute_type = AttributeType(attribute_type)
        var = self.primary_variable(entity_type, id)

        if attribute_type == AttributeType.char:
            if isinstance(value, bytes):
                value = value.decode()
            value = str(value)
        else:
            values = np.atleast_1d(np.asarray(value)).ravel()
            if values.size == 0:
                raise InvalidArrayLength(1, 0)
            if attribute_type == AttributeType.integer:
                value = values.astype(np.int64 if self.int64 else np.int32)
            else:
                value = values.astype(np.float64)
        self.ensure_define_mode()
        nc.setncattr(self.fh, var, name, value)
        self.ensure_data_mode()

    @requires_init
    def attribute(self, entity_type, id, name):
        """The (AttributeType, value) of attribute ``name``.  Numeric values are
        returned as 1-D arrays, character values as str."""
        var = self.primary_variable(entity_type, id)
        if name not in self.attribute_names(entity_type, id):
            raise VariableNotDefined(name)
        value = nc.getncattr(self.fh, var, name)
        if isinstance(value, bytes):
            value = value.decode()
        if isinstance(value, str):
            return AttributeType.char, value
        values = np.atleast_1d(np.asarray(value)).ravel()
        if values.dtype.kind in "iu":
            return AttributeType.integer, values.astype(int)
        return AttributeType.double, values.astype(float)

    @requires_init
    def attribute_names(self, entity_type, id):
        """Names of the user attributes attached to ``entity_type`` instance ``id``"""
        var = self.primary_variable(entity_type, id)
        names = nc.ncattrs(self.fh, var)
        return [n for n in names if not n.startswith("_") and n not in reserved_attributes]
