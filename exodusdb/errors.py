"""Exceptions raised by exodusdb.

Every error raised for ordinary misuse (bad id, wrong length, wrong mode)
derives from ``ExodusError``.  Failures of the underlying NetCDF library are
not wrapped; they propagate as raised by netCDF4 and can be caught with
``ContainerError``.
"""


class ExodusError(Exception):
    pass


class NotInitialized(ExodusError):
    def __init__(self, filename=None):
        msg = "File not initialized"
        if filename is not None:
            msg = f"{filename}: {msg}"
        super().__init__(msg)


class AlreadyInitialized(ExodusError):
    def __init__(self, filename=None):
        msg = "File already initialized"
        if filename is not None:
            msg = f"{filename}: {msg}"
        super().__init__(msg)


class InvalidEntityType(ExodusError):
    pass


class InvalidTopology(ExodusError):
    pass


class InvalidDimension(ExodusError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid dimension: expected {expected}, got {actual}")


class InvalidArrayLength(ExodusError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid array length: expected {expected}, got {actual}")


class StringTooLong(ExodusError):
    def __init__(self, max, actual):
        self.max = max
        self.actual = actual
        super().__init__(f"String too long: max {max}, got {actual}")


class EntityNotFound(ExodusError):
    def __init__(self, family, id):
        self.family = family
        self.id = id
        super().__init__(f"Entity not found: {family} with ID {id}")


class VariableNotDefined(ExodusError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Variable not defined: {name}")


class InvalidTimeStep(ExodusError):
    def __init__(self, step):
        self.step = step
        super().__init__(f"Invalid time step: {step}")


class InvalidMode(ExodusError, ValueError):
    pass


class UnsupportedOperation(ExodusError):
    pass


class WriteOnReadOnly(UnsupportedOperation):
    def __init__(self, filename):
        super().__init__(f"{filename}: not writable")


class FileClosed(UnsupportedOperation):
    def __init__(self, filename):
        super().__init__(f"{filename}: file is closed")


# Errors raised by the netCDF4 layer itself
ContainerError = (OSError, RuntimeError, IndexError)
