"""Thin layer over netCDF4: the only place exodusdb talks to the container."""
import logging
import numpy as np
from netCDF4 import Dataset, default_fillvals

from .util import stringify, string_kinds
from .config import config

logger = logging.getLogger(__name__)

fallback_format = "NETCDF3_64BIT_OFFSET"


def open(filename, mode="r", clobber=False, format=None):
    if mode in ("r", "a"):
        return Dataset(filename, mode=mode)
    format = format or config.format
    try:
        fh = Dataset(filename, mode="w", clobber=clobber, format=format)
    except (OSError, TypeError, ValueError) as e:
        if format == fallback_format or format == "NETCDF4" or _exists(e):
            raise
        logger.debug(f"{filename}: cannot create {format} file ({e}), using {fallback_format}")
        fh = Dataset(filename, mode="w", clobber=clobber, format=fallback_format)
    return fh


def _exists(error):
    return isinstance(error, FileExistsError) or "File exists" in str(error)


def close(fh):
    if fh.isopen():
        fh.close()


def sync(fh):
    fh.sync()


def data_model(fh):
    return fh.data_model


def has_dimension(fh, name):
    return name in fh.dimensions


def has_variable(fh, name):
    return name in fh.variables


def get_dimension(fh, name, default=None):
    if name not in fh.dimensions:
        return default
    return len(fh.dimensions[name])


def get_variable(fh, name, default=None, raw=False):
    if name not in fh.variables:
        return default
    var = fh.variables[name]
    if raw:
        return var
    val = np.ma.getdata(var[:])
    if isinstance(val, np.ndarray) and val.dtype.kind in string_kinds:
        val = stringify(val)
    elif isinstance(val, bytes):
        val = stringify(val)
    return val


def get_slice(fh, name, index):
    """Read ``var[index]`` with fill values returned as data"""
    return np.ma.getdata(fh.variables[name][index])


def create_dimension(fh, name, value):
    fh.createDimension(name, value)


kinds = {str: "S1", int: "i4", float: "f8", bytes: "i1"}


def create_variable(fh, name, type, shape, fill_value=None):
    kind = kinds.get(type, type)
    if fill_value is None:
        return fh.createVariable(name, kind, shape)
    return fh.createVariable(name, kind, shape, fill_value=fill_value)


def put_values(fh, name, value, index=None):
    var = fh.variables[name]
    if index is None:
        var[:] = value
    else:
        var[index] = value


def put_strings(fh, name, strings, width, *index):
    """Write fixed width, NUL padded character rows into ``name``"""
    var = fh.variables[name]
    for (i, string) in enumerate(strings):
        chars = np.frombuffer(string.encode().ljust(width, b"\0"), dtype="S1")
        var[index + (i, slice(None))] = chars


def get_strings(fh, name):
    if name not in fh.variables:
        return []
    chars = np.ma.getdata(fh.variables[name][:])
    if chars.size == 0:
        return []
    strings = stringify(chars)
    if isinstance(strings, str):
        return [strings]
    return [str(s) for s in strings]


def setncattr(fh, variable, name, value):
    fh.variables[variable].setncattr(name, value)


def getncattr(fh, variable, name, default=None):
    var = fh.variables[variable]
    if name not in var.ncattrs():
        return default
    return var.getncattr(name)


def ncattrs(fh, variable):
    return list(fh.variables[variable].ncattrs())


def set_global_attr(fh, name, value):
    fh.setncattr(name, value)


def get_global_attr(fh, name, default=None):
    if name not in fh.ncattrs():
        return default
    return fh.getncattr(name)


def dimensions_of(fh, name):
    return fh.variables[name].dimensions


def shape_of(fh, name):
    return fh.variables[name].shape


def default_fill(kind):
    return default_fillvals[kind]


def put_string(fh, name, string, width, *index):
    """Write one fixed width, NUL padded character row at ``index``"""
    var = fh.variables[name]
    chars = np.frombuffer(string.encode().ljust(width, b"\0"), dtype="S1")
    var[index + (slice(None),)] = chars
