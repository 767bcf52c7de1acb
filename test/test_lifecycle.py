import os
import io
import pytest
import numpy as np

import exodusdb
import exodusdb.util as util
from exodusdb.config import initialize_config


def test_init_round_trip(tmpdir):
    with util.working_dir(tmpdir.strpath):
        f = "baz.exo"
        with exodusdb.File(f, mode="w") as exof:
            assert not exof.is_initialized()
            exof.init(
                title=f"Test {f}",
                num_dim=2,
                num_nodes=1,
                num_elems=2,
                num_elem_blocks=3,
                num_node_sets=4,
                num_side_sets=5,
            )
            assert exof.is_initialized()

        with exodusdb.File(f, mode="r") as exof:
            assert exof.title() == f"Test {f}", exof.title()
            assert exof.num_dimensions() == 2
            assert exof.num_nodes() == 1
            assert exof.num_elems() == 2
            params = exof.init_params()
            assert params.num_elem_blocks == 3
            assert params.num_node_sets == 4
            assert params.num_side_sets == 5
            assert params.num_edge_blocks == 0
            assert params.num_blobs == 0


def test_global_attributes(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("attrs.exo", mode="w", word_size=4) as exof:
            exof.init(num_dim=3, num_nodes=2)

        with exodusdb.File("attrs.exo") as exof:
            assert exof.version() == (2, 0)
            assert abs(exof.api_version() - 9.04) < 1e-5
            assert exof.word_size == 4
            assert exof.storage_type() == "f"
            assert not exof.int64
            assert "coordx" in exof
            assert "coordz" in exof


def test_init_twice(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("twice.exo", mode="w") as exof:
            exof.init(num_dim=3, num_nodes=8)
            with pytest.raises(exodusdb.AlreadyInitialized):
                exof.init(num_dim=3, num_nodes=8)


def test_operations_before_init(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("uninit.exo", mode="w") as exof:
            with pytest.raises(exodusdb.NotInitialized):
                exof.put_coords([0.0])
            with pytest.raises(exodusdb.NotInitialized):
                exof.put_time(0, 0.0)
            with pytest.raises(exodusdb.NotInitialized):
                exof.num_time_steps()
            with pytest.raises(exodusdb.NotInitialized):
                exof.block_ids()


def test_init_validation(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("bad.exo", mode="w") as exof:
            with pytest.raises(exodusdb.InvalidDimension):
                exof.init(num_dim=4)
            with pytest.raises(exodusdb.StringTooLong):
                exof.init(title="x" * 81)
            with pytest.raises(TypeError):
                exof.init(num_spam=3)
            assert not exof.is_initialized()
            exof.init(title="x" * 80, num_dim=1)
            assert exof.title() == "x" * 80


def test_read_only(hex_file):
    with exodusdb.File(hex_file, mode="r") as exof:
        with pytest.raises(exodusdb.WriteOnReadOnly):
            exof.put_time(0, 1.0)
        with pytest.raises(exodusdb.UnsupportedOperation):
            exof.define_variables("nodal", ["T"])
        with pytest.raises(exodusdb.WriteOnReadOnly):
            exof.init(num_dim=3)


def test_append(hex_file):
    with exodusdb.File(hex_file, mode="a") as exof:
        assert exof.is_initialized()
        with pytest.raises(exodusdb.AlreadyInitialized):
            exof.init(num_dim=3)
        exof.define_variables("nodal", ["T"])
        exof.put_time(0, 0.5)
        exof.put_var(0, "nodal", None, 0, np.arange(8.0))

    with exodusdb.File(hex_file) as exof:
        assert exof.num_time_steps() == 1
        assert np.allclose(exof.var(0, "nodal", None, "T"), np.arange(8.0))
        assert list(exof.connectivity(1)) == [1, 2, 3, 4, 5, 6, 7, 8]


def test_modes(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with pytest.raises(ValueError):
            exodusdb.File("x.exo", mode="x")
        with pytest.raises(exodusdb.InvalidMode):
            exodusdb.File("x.exo", mode="rw")
        with pytest.raises(FileNotFoundError):
            exodusdb.File("missing.exo", mode="r")
        with pytest.raises(FileNotFoundError):
            exodusdb.File("missing.exo", mode="a")


def test_clobber(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("c.exo", mode="w") as exof:
            exof.init(title="first", num_dim=1)
        with pytest.raises(FileExistsError):
            exodusdb.File("c.exo", mode="w")
        with exodusdb.File("c.exo", mode="w", clobber=True) as exof:
            exof.init(title="second", num_dim=1)
        with exodusdb.File("c.exo") as exof:
            assert exof.title() == "second"


def test_close_and_sync(tmpdir):
    with util.working_dir(tmpdir.strpath):
        exof = exodusdb.File("s.exo", mode="w")
        exof.init(num_dim=2, num_nodes=3)
        exof.sync()
        exof.sync()
        assert not exof.closed
        exof.close()
        assert exof.closed
        exof.close()
        assert os.path.isfile("s.exo")


def test_int64(tmpdir):
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("big.exo", mode="w", int64=True) as exof:
            exof.init(num_dim=3, num_nodes=8, num_elems=1, num_elem_blocks=1)
            exof.put_block(2**40, "HEX8", 1, 8)
            exof.put_connectivity(2**40, np.arange(1, 9))
        with exodusdb.File("big.exo") as exof:
            assert exof.int64
            assert list(exof.block_ids()) == [2**40]
            assert list(exof.connectivity(2**40)) == list(range(1, 9))


def test_describe(hex_file):
    with exodusdb.File(hex_file) as exof:
        stream = io.StringIO()
        exof.describe(file=stream)
        text = stream.getvalue()
        assert "Title: unit cube" in text
        assert "Num nodes   : 8" in text
        assert "Elem Blocks: 1 Ids = 1" in text
        assert "Time steps: 0" in text


def test_config(monkeypatch):
    monkeypatch.setenv("EXODUSDB_DEBUG", "on")
    monkeypatch.setenv("EXODUSDB_FORMAT", "netcdf3_64bit_offset")
    monkeypatch.setenv("EXODUSDB_WORD_SIZE", "4")
    cfg = initialize_config()
    assert cfg.debug is True
    assert cfg.format == "NETCDF3_64BIT_OFFSET"
    assert cfg.word_size == 4

    monkeypatch.setenv("EXODUSDB_DEBUG", "off")
    monkeypatch.delenv("EXODUSDB_FORMAT")
    monkeypatch.delenv("EXODUSDB_WORD_SIZE")
    cfg = initialize_config()
    assert cfg.debug is False
    assert cfg.format == "NETCDF4_CLASSIC"
    assert cfg.word_size == 8

    monkeypatch.setenv("EXODUSDB_WORD_SIZE", "2")
    with pytest.raises(ValueError):
        initialize_config()


def test_operations_after_close(hex_file):
    exof = exodusdb.File(hex_file, mode="a")
    exof.close()
    with pytest.raises(exodusdb.FileClosed):
        exof.put_time(0, 1.0)
    with pytest.raises(exodusdb.FileClosed):
        exof.num_time_steps()
    with pytest.raises(exodusdb.FileClosed):
        exof.num_nodes()
    with pytest.raises(exodusdb.UnsupportedOperation):
        exof.block(1)
    exof = exodusdb.File(hex_file)
    exof.close()
    with pytest.raises(exodusdb.FileClosed):
        exof.put_coords([0.0] * 8, [0.0] * 8, [0.0] * 8)


def test_phase_transitions_flush(tmpdir, monkeypatch):
    flushed = []
    sync = exodusdb.nc.sync
    monkeypatch.setattr(exodusdb.nc, "sync", lambda fh: flushed.append(fh) or sync(fh))
    with util.working_dir(tmpdir.strpath):
        with exodusdb.File("phase.exo", mode="w") as exof:
            exof.init(num_dim=3, num_nodes=8, num_elems=1, num_elem_blocks=1)
            assert exof.meta.phase == "data"
            assert len(flushed) == 1
            exof.put_block(1, "HEX8", 1, 8)
            assert exof.meta.phase == "data"
            assert len(flushed) == 3
