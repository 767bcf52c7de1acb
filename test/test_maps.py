import pytest
import numpy as np

import exodusdb
import exodusdb.util as util


def test_default_maps(hex_file):
    with exodusdb.File(hex_file) as exof:
        assert list(exof.id_map("node_map")) == list(range(1, 9))
        assert list(exof.id_map("elem_map")) == [1]
        assert list(exof.elem_order_map()) == [1]


def test_id_maps(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("maps.exo", mode="w") as exof:
            exof.init(num_dim=2, num_nodes=4, num_elems=2, num_elem_blocks=1)
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_id_map("node_map", [10, 20, 30])
            with pytest.raises(exodusdb.InvalidEntityType):
                exof.put_id_map("node_set", [10, 20, 30, 40])
            exof.put_id_map("node_map", [10, 20, 30, 40])
            exof.put_id_map("elem_map", [7, 9])
            exof.put_elem_order_map([2, 1])
        with exodusdb.File("maps.exo") as exof:
            assert "node_num_map" in exof
            assert "elem_num_map" in exof
            assert list(exof.id_map("node_map")) == [10, 20, 30, 40]
            assert list(exof.id_map("elem_map")) == [7, 9]
            assert list(exof.elem_order_map()) == [2, 1]


def test_numbered_maps(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("nmaps.exo", mode="w") as exof:
            exof.init(num_dim=2, num_nodes=3, num_node_maps=2)
            exof.put_map("node_map", 5, [3, 2, 1])
            exof.put_map("node_map", 6, [1, 1, 1])
            exof.put_name("node_map", 6, "ones")
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_map("node_map", 7, [1, 2, 3])
            with pytest.raises(exodusdb.InvalidArrayLength):
                exof.put_map("node_map", 7, [1])
        with exodusdb.File("nmaps.exo") as exof:
            assert list(exof.map_ids("node_map")) == [5, 6]
            assert list(exof.map("node_map", 5)) == [3, 2, 1]
            assert list(exof.map("node_map", 6)) == [1, 1, 1]
            assert exof.name("node_map", 6) == "ones"
            assert np.array_equal(exof.map("node_map", 5), np.array([3, 2, 1]))
