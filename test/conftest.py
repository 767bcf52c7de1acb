import os
import pytest

import exodusdb
import exodusdb.util as util


hex_coords = (
    [0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0],
    [0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 1.0, 1.0],
    [0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0],
)


@pytest.fixture(scope="function")
def workdir(tmpdir):
    with util.working_dir(tmpdir.strpath):
        yield tmpdir.strpath


@pytest.fixture(scope="function")
def hex_file(workdir):
    """A unit cube: one HEX8 element in element block 1"""
    filename = os.path.join(workdir, "hex.exo")
    with exodusdb.File(filename, mode="w") as exof:
        exof.init(
            title="unit cube", num_dim=3, num_nodes=8, num_elems=1, num_elem_blocks=1
        )
        exof.put_coords(*hex_coords)
        exof.put_block(1, "HEX8", 1, 8)
        exof.put_connectivity(1, [1, 2, 3, 4, 5, 6, 7, 8])
    yield filename
