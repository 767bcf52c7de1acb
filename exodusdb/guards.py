from functools import wraps

from .errors import FileClosed, NotInitialized, WriteOnReadOnly


def requires_open(fun):
    @wraps(fun)
    def inner(self, *args, **kwargs):
        if self.fh is None:
            raise FileClosed(self.filename)
        return fun(self, *args, **kwargs)

    return inner


def requires_write_mode(fun):
    @wraps(fun)
    def inner(self, *args, **kwargs):
        if self.fh is None:
            raise FileClosed(self.filename)
        if self.mode not in ("w", "a"):
            raise WriteOnReadOnly(self.filename)
        return fun(self, *args, **kwargs)

    return inner


def requires_init(fun):
    @wraps(fun)
    def inner(self, *args, **kwargs):
        if self.fh is None:
            raise FileClosed(self.filename)
        if not self.meta.initialized:
            raise NotInitialized(self.filename)
        return fun(self, *args, **kwargs)

    return inner
