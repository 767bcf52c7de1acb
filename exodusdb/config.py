import os
import logging
from types import SimpleNamespace


def env_boolean(var, default=None):
    value = os.getenv(var, default)
    if value is None:
        return default
    if value.lower() in ("false", "0", "off", ""):
        return False
    return True


def env_int(var, default):
    value = os.getenv(var)
    if value is None or not value.strip():
        return default
    return int(value)


def initialize_config():
    cfg = SimpleNamespace()
    cfg.debug = env_boolean("EXODUSDB_DEBUG", default="off")
    cfg.format = os.getenv("EXODUSDB_FORMAT", "NETCDF4_CLASSIC").upper()
    cfg.word_size = env_int("EXODUSDB_WORD_SIZE", 8)
    if cfg.word_size not in (4, 8):
        raise ValueError(f"EXODUSDB_WORD_SIZE must be 4 or 8, not {cfg.word_size}")
    return cfg


def initialize_logging(cfg):
    logger = logging.getLogger("exodusdb")
    logger.addHandler(logging.NullHandler())
    if cfg.debug:
        logger.setLevel(logging.DEBUG)
    return logger


config = initialize_config()
initialize_logging(config)
