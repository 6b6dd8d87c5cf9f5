#!/usr/bin/env python3
"""
Exports the trust graph and token balances of all safes from the blockchain
index as a single JSON document on stdout.

Usage:
    python -m scripts.export_trust_graph [CONNECTION_STRING]

Without an argument the connection string is read from
BLOCKCHAIN_INDEX_DB_CONNECTION_STRING. Diagnostics go to stderr.
"""
import os
import sys
import logging
import argparse

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config.config as app_config
from config.logging_config import setup_export_logging
from processing.errors import ConfigurationError, ExportError
from processing.exporter import export_graph_and_balances
from reporting.serializer import write_snapshot

logger = logging.getLogger("export.cli")

EXIT_EXPORT_FAILED = 1
EXIT_CONFIGURATION = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Export the trust graph and balances of all safes as JSON.")
    parser.add_argument("connection_string", nargs="?", default=None,
                        help=f"Index database connection string (default: ${app_config.CONNECTION_STRING_ENV})")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_export_logging(app_config.LOG_LEVEL, app_config.LOG_FORMAT)

    try:
        connection_string = app_config.resolve_connection_string(args.connection_string)
    except ConfigurationError as e:
        logger.error(f"ERROR: {e}")
        sys.exit(EXIT_CONFIGURATION)

    logger.info("Starting the export ...")
    try:
        result = export_graph_and_balances(connection_string, use_ssl=app_config.use_ssl())
    except ExportError as e:
        logger.error(f"ERROR: Export failed: {e}", exc_info=True)
        sys.exit(EXIT_EXPORT_FAILED)

    write_snapshot(result)


if __name__ == "__main__":
    main()
