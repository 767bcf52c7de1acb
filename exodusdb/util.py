import os
import numpy as np
from contextlib import contextmanager


string_kinds = ("U", "S")
string_types = (str,)


def stringify(a):
    if isinstance(a, str):
        return a
    elif isinstance(a, bytes):
        return a.rstrip(b"\0").decode()
    elif isinstance(a, np.ndarray):
        if len(a.shape) == 0:
            return stringify(a.item())
        elif len(a.shape) == 1:
            return join_chars(a)
        else:
            return np.array([stringify(row) for row in a])
    else:
        raise TypeError(f"Cannot stringify items of type {type(a).__name__}")


def join_chars(a):
    """Decode a row of single characters as one string, so multi-byte UTF-8
    characters spanning several cells survive"""
    if a.dtype.kind == "S":
        return b"".join(a.tolist()).rstrip(b"\0").decode()
    return "".join(decode(x) for x in a if x)


def decode(x):
    if isinstance(x, np.ma.core.MaskedConstant):
        return ""
    if isinstance(x, bytes):
        return x.decode()
    return str(x)


@contextmanager
def working_dir(dirname):
    cwd = os.getcwd()
    os.chdir(dirname)
    try:
        yield
    finally:
        os.chdir(cwd)


def streamify(file):
    if isinstance(file, string_types):
        return open(file, "w"), True
    else:
        return file, False
