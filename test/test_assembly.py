import pytest
import numpy as np

import exodusdb
import exodusdb.util as util
from exodusdb import AttributeType, EntityType


def test_assembly_members_are_not_checked(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("a.exo", mode="w") as exof:
            exof.init(num_dim=3, num_nodes=8, num_assemblies=2)
            exof.put_assembly(100, "parts", "elem_block", [7, 8, 9])
            exof.put_assembly(200, "nested", EntityType.assembly, [100, 300])
            with pytest.raises(ValueError):
                exof.put_assembly(100, "again", "elem_block", [1])
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_assembly(300, "extra", "elem_block", [1])
        with exodusdb.File("a.exo") as exof:
            assert list(exof.assembly_ids()) == [100, 200]
            assembly = exof.assembly(100)
            assert assembly.name == "parts"
            assert assembly.entity_type == EntityType.elem_block
            assert list(assembly.members) == [7, 8, 9]
            assembly = exof.assembly(200)
            assert assembly.entity_type == EntityType.assembly
            assert list(assembly.members) == [100, 300]
            assert "assembly1_entity_list" in exof
            assert exof.name("assembly", 200) == "nested"
            with pytest.raises(exodusdb.EntityNotFound):
                exof.assembly(300)


def test_empty_assembly(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("ea.exo", mode="w") as exof:
            exof.init(num_dim=3, num_assemblies=1)
            with pytest.raises(exodusdb.StringTooLong):
                exof.put_assembly(1, "n" * 33, "node_set", [])
            exof.put_assembly(1, "nothing", "node_set", [])
        with exodusdb.File("ea.exo") as exof:
            assembly = exof.assembly(1)
            assert assembly.name == "nothing"
            assert len(assembly.members) == 0


def test_blobs(tmpdir):
    with util.working_dir(tmpdir.strpath):
        payload = bytes(range(256))
        with exodusdb.File("blob.exo", mode="w") as exof:
            exof.init(num_dim=3, num_blobs=2)
            exof.put_blob(11, "raw", payload)
            exof.put_blob(12, "empty")
        with exodusdb.File("blob.exo") as exof:
            assert list(exof.blob_ids()) == [11, 12]
            blob = exof.blob(11)
            assert blob.name == "raw"
            assert blob.data == payload
            assert exof.blob(12).data == b""
            assert "blob1_data" in exof
            assert exof.names("blob") == ["raw", "empty"]


def test_attributes(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("attr.exo", mode="w") as exof:
            exof.init(
                num_dim=3,
                num_nodes=8,
                num_elems=1,
                num_elem_blocks=1,
                num_node_sets=1,
                num_assemblies=1,
                num_blobs=1,
            )
            exof.put_block(1, "HEX8", 1, 8)
            exof.put_node_set(2, [1, 2])
            exof.put_assembly(3, "asm", "elem_block", [1])
            exof.put_blob(4, "blob", b"abc")

            exof.put_attribute("elem_block", 1, "material", "steel")
            exof.put_attribute("elem_block", 1, "elastic_constants", [200.0e9, 0.3])
            exof.put_attribute("elem_block", 1, "layers", 3)
            exof.put_attribute("node_set", 2, "bc", [1, 2, 3])
            exof.put_attribute("assembly", 3, "weight", 2.5)
            exof.put_attribute("blob", 4, "count", 5, attribute_type=AttributeType.double)
            with pytest.raises(ValueError):
                exof.put_attribute("elem_block", 1, "elem_type", "HEX20")
            with pytest.raises(exodusdb.EntityNotFound):
                exof.put_attribute("elem_block", 9, "x", 1)
            with pytest.raises(exodusdb.InvalidEntityType):
                exof.put_attribute("nodal", 0, "x", 1)

        with exodusdb.File("attr.exo") as exof:
            names = exof.attribute_names("elem_block", 1)
            assert sorted(names) == ["elastic_constants", "layers", "material"]
            assert exof.attribute("elem_block", 1, "material") == (AttributeType.char, "steel")
            kind, value = exof.attribute("elem_block", 1, "elastic_constants")
            assert kind == AttributeType.double
            assert np.allclose(value, [200.0e9, 0.3])
            kind, value = exof.attribute("elem_block", 1, "layers")
            assert kind == AttributeType.integer
            assert list(value) == [3]
            kind, value = exof.attribute("node_set", 2, "bc")
            assert kind == AttributeType.integer
            assert list(value) == [1, 2, 3]
            kind, value = exof.attribute("assembly", 3, "weight")
            assert kind == AttributeType.double
            assert np.allclose(value, [2.5])
            kind, value = exof.attribute("blob", 4, "count")
            assert kind == AttributeType.double
            assert np.allclose(value, [5.0])
            assert exof.attribute_names("blob", 4) == ["count"]
            with pytest.raises(exodusdb.VariableNotDefined):
                exof.attribute("elem_block", 1, "density")
            # the topology attribute is untouched
            assert exof.block(1).topology == "HEX8"


def test_assembly_and_blob_reductions(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("ar.exo", mode="w") as exof:
            exof.init(num_dim=3, num_assemblies=1, num_blobs=1)
            exof.put_assembly(9, "all", "elem_block", [1, 2])
            exof.put_blob(8, "b", b"\x01")
            exof.define_reduction_variables("assembly", ["momentum_x", "momentum_y"])
            exof.define_reduction_variables("blob", ["checksum"])
            exof.put_time(0, 0.0)
            exof.put_reduction_vars(0, "assembly", 9, [1.5, -1.5])
            exof.put_reduction_vars(0, "blob", 8, [99.0])
        with exodusdb.File("ar.exo") as exof:
            assert "vals_assembly_red1" in exof
            assert "vals_blob_red1" in exof
            assert exof.reduction_variable_names("assembly") == ["momentum_x", "momentum_y"]
            assert list(exof.reduction_vars(0, "assembly", 9)) == [1.5, -1.5]
            assert list(exof.reduction_vars(0, "blob", 8)) == [99.0]
