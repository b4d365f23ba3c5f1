# tracker_config.py

import argparse
import logging
import os

DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8000
DEFAULT_LOG_LEVEL = 'INFO'
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class TrackerConfig:
    def __init__(self, host=DEFAULT_HOST, port=DEFAULT_PORT, log_level=DEFAULT_LOG_LEVEL):
        self.host = host
        self.port = port
        self.log_level = log_level

    def __repr__(self):
        return f"TrackerConfig(host={self.host!r}, port={self.port}, log_level={self.log_level!r})"


def _port(value):
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser(environ):
    parser = argparse.ArgumentParser(description='Run the HTTP announce tracker.')
    parser.add_argument('--host', default=environ.get('TRACKER_HOST', DEFAULT_HOST),
                        help='Address to bind (env TRACKER_HOST)')
    parser.add_argument('--port', type=_port, default=environ.get('TRACKER_PORT', DEFAULT_PORT),
                        help='Port to listen on (env TRACKER_PORT)')
    parser.add_argument('--log-level', default=environ.get('TRACKER_LOG_LEVEL', DEFAULT_LOG_LEVEL),
                        type=str.upper, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (env TRACKER_LOG_LEVEL)')
    return parser


def load_config(argv=None, environ=None):
    """Build the tracker configuration.

    Command-line flags win over TRACKER_* environment variables, which
    win over the built-in defaults.
    """
    if environ is None:
        environ = os.environ
    args = build_parser(environ).parse_args(argv)
    return TrackerConfig(host=args.host, port=args.port, log_level=args.log_level)


def configure_logging(level=DEFAULT_LOG_LEVEL):
    logging.basicConfig(level=level, format=LOG_FORMAT)
