import pytest
import numpy as np

import exodusdb
import exodusdb.util as util
from exodusdb import EntityType


def test_node_set(hex_file):
    with exodusdb.File(hex_file, mode="a") as exof:
        with pytest.raises(exodusdb.InvalidArrayLength):
            exof.put_node_set(100, [1, 2, 3, 4])
    with exodusdb.File(hex_file) as exof:
        assert len(exof.set_ids("node_set")) == 0


def test_sets_round_trip(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("sets.exo", mode="w") as exof:
            exof.init(
                num_dim=3,
                num_nodes=8,
                num_elems=1,
                num_elem_blocks=1,
                num_node_sets=2,
                num_side_sets=1,
                num_elem_sets=1,
            )
            exof.put_block(1, "HEX8", 1, 8)
            exof.put_node_set(100, [1, 2, 3, 4], dist_factors=[1.0, 1.0, 0.5, 0.5])
            exof.put_node_set(200, [5, 6])
            exof.put_side_set(30, [1, 1], [5, 6], dist_factors=[2.0, 3.0])
            exof.put_entity_set("elem_set", 40, [1])

        with exodusdb.File("sets.exo") as exof:
            assert list(exof.set_ids("node_set")) == [100, 200]
            ns = exof.node_set(100)
            assert list(ns.nodes) == [1, 2, 3, 4]
            assert np.allclose(ns.dist_factors, [1.0, 1.0, 0.5, 0.5])
            ns = exof.node_set(200)
            assert list(ns.nodes) == [5, 6]
            assert len(ns.dist_factors) == 0

            info = exof.set("node_set", 100)
            assert info.num_entries == 4
            assert info.num_dist_factors == 4
            assert info.entity_type == EntityType.node_set

            ss = exof.side_set(30)
            assert list(ss.elements) == [1, 1]
            assert list(ss.sides) == [5, 6]
            assert np.allclose(ss.dist_factors, [2.0, 3.0])
            assert "elem_ss1" in exof
            assert "side_ss1" in exof

            es = exof.entity_set(EntityType.elem_set, 40)
            assert list(es.entities) == [1]
            assert exof.find_index("elem_set", 40) == 0


def test_set_errors(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("serr.exo", mode="w") as exof:
            exof.init(num_dim=3, num_nodes=8, num_node_sets=1, num_side_sets=1)
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_node_set(1, [1, 2], dist_factors=[1.0])
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_side_set(1, [1, 1], [1])
            with pytest.raises(exodusdb.InvalidEntityType):
                exof.put_set("elem_block", 1, 3)
            with pytest.raises(exodusdb.InvalidEntityType):
                exof.put_entity_set("side_set", 1, [1])
            exof.put_set("node_set", 1, 3)
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_node_set(1, [1, 2])
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_node_set(1, [1, 2, 3], dist_factors=[1.0, 1.0, 1.0])
            exof.put_node_set(1, [4, 5, 6])
            assert list(exof.node_set(1).nodes) == [4, 5, 6]
            with pytest.raises(exodusdb.EntityNotFound):
                exof.side_set(1)


def test_empty_set(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("eset.exo", mode="w") as exof:
            exof.init(num_dim=3, num_nodes=8, num_node_sets=2)
            exof.put_node_set(1, [])
            exof.put_node_set(2, [8])
        with exodusdb.File("eset.exo") as exof:
            assert list(exof.set_ids("node_set")) == [1, 2]
            assert exof.set("node_set", 1).num_entries == 0
            assert len(exof.node_set(1).nodes) == 0
            assert list(exof.node_set(2).nodes) == [8]


def test_set_names(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("sname.exo", mode="w") as exof:
            exof.init(num_dim=3, num_nodes=8, num_node_sets=1)
            exof.put_node_set(3, [1, 2])
            exof.put_name("node_set", 3, "inlet")
        with exodusdb.File("sname.exo") as exof:
            assert exof.name("node_set", 3) == "inlet"
            assert exof.names("node_set") == ["inlet"]


def write_two_hexes(filename):
    """Two unit cubes side by side along x, sharing the face at x=1"""
    x = [0.0, 1.0, 2.0, 0.0, 1.0, 2.0] * 2
    y = [0.0, 0.0, 0.0, 1.0, 1.0, 1.0] * 2
    z = [0.0] * 6 + [1.0] * 6
    with exodusdb.File(filename, mode="w") as exof:
        exof.init(num_dim=3, num_nodes=12, num_elems=2, num_elem_blocks=1, num_node_sets=3, num_side_sets=1)
        exof.put_coords(x, y, z)
        exof.put_block(1, "HEX8", 2, 8)
        exof.put_connectivity(1, [1, 2, 5, 4, 7, 8, 11, 10, 2, 3, 6, 5, 8, 9, 12, 11])
        exof.put_node_set(1, [1, 4, 7, 10])
        exof.put_node_set(2, [2, 5, 8, 11])
        exof.put_node_set(3, [1, 2, 3, 4, 5, 6])


def test_convert_nodeset_to_sideset(tmpdir):
    with util.working_dir(tmpdir.strpath):
        write_two_hexes("ns2ss.exo")
        with exodusdb.File("ns2ss.exo") as exof:
            side_set = exof.convert_nodeset_to_sideset(1, 100)
            assert side_set.id == 100
            assert list(side_set.elements) == [1]
            assert list(side_set.sides) == [4]
            assert len(side_set.dist_factors) == 0

            # interior face, shared by both elements
            side_set = exof.convert_nodeset_to_sideset(2, 101)
            assert len(side_set.elements) == 0

            side_set = exof.convert_nodeset_to_sideset(3, 102)
            assert list(side_set.elements) == [1, 2]
            assert list(side_set.sides) == [5, 5]

        with exodusdb.File("ns2ss.exo", mode="a") as exof:
            exof.convert_nodeset_to_sideset(3, 102, write=True)
        with exodusdb.File("ns2ss.exo") as exof:
            assert list(exof.set_ids("side_set")) == [102]
            assert list(exof.side_set(102).elements) == [1, 2]
            assert list(exof.side_set(102).sides) == [5, 5]
