from .file import exodus_file, ExodusFile, write_globals
from .exodus_h import EntityType
from .truth_table import TruthTable
from .assembly import AttributeType
from .topology import Topology
from .errors import (
    ExodusError,
    NotInitialized,
    AlreadyInitialized,
    InvalidEntityType,
    InvalidTopology,
    InvalidDimension,
    InvalidArrayLength,
    StringTooLong,
    EntityNotFound,
    VariableNotDefined,
    InvalidTimeStep,
    InvalidMode,
    UnsupportedOperation,
    WriteOnReadOnly,
    FileClosed,
    ContainerError,
)


def File(filename, mode="r", **options):
    """Open (mode 'r' or 'a') or create (mode 'w') an Exodus file

    ``options`` are passed to ``exodus_file``: clobber, word_size, int64.

    """
    if mode not in ("r", "w", "a"):
        raise InvalidMode(f"Invalid Exodus file mode {mode!r}")
    if mode != "w" and options:
        raise TypeError(f"Options {', '.join(options)} only apply when creating a file")
    return exodus_file(filename, mode=mode, **options)


exo_file = File
