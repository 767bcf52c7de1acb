import numpy as np

from .errors import InvalidArrayLength
from .exodus_h import EntityType


class TruthTable:
    """Which (instance, variable) combinations of an entity family carry data

    Rows are instances in physical (creation) order, columns are variables in
    catalog order.  A new table is all true.  Out of range lookups answer
    False instead of raising, and out of range ``set`` calls are ignored.

    Parameters
    ----------
    var_type : EntityType or str
        The block or set family the table describes
    num_blocks : int
        Number of instances of the family
    num_vars : int
        Number of variables in the family's catalog

    """

    def __init__(self, var_type, num_blocks, num_vars, table=None):
        self.var_type = EntityType.parse(var_type)
        self.num_blocks = int(num_blocks)
        self.num_vars = int(num_vars)
        if table is None:
            self.table = np.ones(self.num_blocks * self.num_vars, dtype=bool)
        else:
            table = np.asarray(table, dtype=bool).ravel()
            if table.size != self.num_blocks * self.num_vars:
                raise InvalidArrayLength(self.num_blocks * self.num_vars, table.size)
            self.table = table.copy()

    def __repr__(self):
        return f"TruthTable({self.var_type}, {self.num_blocks}, {self.num_vars})"

    def __eq__(self, other):
        if not isinstance(other, TruthTable):
            return NotImplemented
        return (
            self.var_type == other.var_type
            and self.shape == other.shape
            and np.array_equal(self.table, other.table)
        )

    @property
    def shape(self):
        return (self.num_blocks, self.num_vars)

    def _in_range(self, block_index, var_index):
        return 0 <= block_index < self.num_blocks and 0 <= var_index < self.num_vars

    def get(self, block_index, var_index):
        if not self._in_range(block_index, var_index):
            return False
        return bool(self.table[block_index * self.num_vars + var_index])

    def set(self, block_index, var_index, value):
        if self._in_range(block_index, var_index):
            self.table[block_index * self.num_vars + var_index] = bool(value)

    def as_array(self):
        """The table as a (num_blocks, num_vars) array of 0/1 ints, as stored"""
        return self.table.reshape(self.shape).astype(np.int32)
