import logging
import sys


def setup_logging(level: str = "INFO"):
    # stderr, stdout carries the MCP stdio transport
    levelno = getattr(logging, level.upper(), logging.INFO)
    fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    logging.basicConfig(level=levelno, format=fmt, stream=sys.stderr)
