import pytest
import numpy as np

import exodusdb
from exodusdb import EntityType, TruthTable
from exodusdb.exodus_h import family


def test_entity_type_codes():
    assert EntityType.elem_block.value == 1
    assert EntityType.global_.value == 13
    assert EntityType.blob.value == 17
    assert EntityType.parse("global") is EntityType.global_
    assert EntityType.parse("Elem Block") is EntityType.elem_block
    assert EntityType.parse(3) is EntityType.side_set
    assert EntityType.parse(np.int32(16)) is EntityType.assembly
    assert EntityType.parse(EntityType.nodal) is EntityType.nodal
    assert str(EntityType.global_) == "global"
    for bad in ("spam", 15, 0, 1.0, True):
        with pytest.raises(exodusdb.InvalidEntityType):
            EntityType.parse(bad)


def test_entity_families():
    assert EntityType.edge_block.family == family.block
    assert EntityType.elem_set.family == family.set
    assert EntityType.face_map.family == family.map
    assert EntityType.nodal.family == family.scalar
    assert EntityType.blob.family == family.hierarchical


def test_truth_table_defaults():
    table = TruthTable(EntityType.elem_block, 3, 4)
    assert table.shape == (3, 4)
    assert all(table.get(i, j) for i in range(3) for j in range(4))
    table.set(1, 2, False)
    for i in range(3):
        for j in range(4):
            assert table.get(i, j) == ((i, j) != (1, 2))


def test_truth_table_out_of_range():
    table = TruthTable("node_set", 2, 2)
    assert not table.get(2, 0)
    assert not table.get(0, -1)
    table.set(5, 5, False)
    assert table.as_array().tolist() == [[1, 1], [1, 1]]
    assert TruthTable("node_set", 0, 0).as_array().shape == (0, 0)
    with pytest.raises(exodusdb.InvalidArrayLength):
        TruthTable("node_set", 2, 2, table=[1, 0, 1])


def test_errors():
    assert issubclass(exodusdb.WriteOnReadOnly, exodusdb.UnsupportedOperation)
    assert issubclass(exodusdb.InvalidMode, ValueError)
    for error in (exodusdb.NotInitialized, exodusdb.InvalidTopology, exodusdb.EntityNotFound):
        assert issubclass(error, exodusdb.ExodusError)
    e = exodusdb.InvalidArrayLength(8, 4)
    assert (e.expected, e.actual) == (8, 4)
    assert str(exodusdb.StringTooLong(32, 40)) == "String too long: max 32, got 40"
    assert str(exodusdb.VariableNotDefined("T")) == "Variable not defined: T"
    assert OSError in exodusdb.ContainerError
