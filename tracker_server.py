# tracker_server.py

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
import ipaddress
import logging
import re
import sys
import urllib.parse

from compact_peers import encode_compact_peers, encode_failure
from swarm_registry import SwarmRegistry
from tracker_config import configure_logging, load_config

logger = logging.getLogger(__name__)

FALLBACK_IP = '127.0.0.1'


class AnnounceRequestError(ValueError):
    """An announce query the tracker refuses to act on."""


class AnnounceRequest:
    def __init__(self, info_hash, peer_id, port, ip, event):
        self.info_hash = info_hash
        self.peer_id = peer_id
        self.port = port
        self.ip = ip
        self.event = event


def remote_ip(client_address):
    try:
        ip = ipaddress.ip_address(client_address[0])
    except (TypeError, IndexError, ValueError):
        return ipaddress.IPv4Address(FALLBACK_IP)
    if ip.version == 6 and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def parse_announce_query(query, client_address):
    # latin-1 keeps percent-encoded binary info_hash/peer_id byte-for-byte
    params = urllib.parse.parse_qs(query, keep_blank_values=True, encoding='latin-1')
    info_hash = params.get('info_hash', [''])[0]
    peer_id = params.get('peer_id', [''])[0]
    port = params.get('port', [None])[0]
    event = params.get('event', [''])[0]

    if not info_hash:
        raise AnnounceRequestError("Missing info_hash.")
    if port is None:
        raise AnnounceRequestError("Missing port.")
    if not re.fullmatch(r'[0-9]+', port):
        raise AnnounceRequestError(f"Invalid port: {port!r}")
    port = int(port)
    if not 0 <= port <= 65535:
        raise AnnounceRequestError(f"Port out of range: {port}")

    return AnnounceRequest(info_hash, peer_id, port, remote_ip(client_address), event)


class TrackerHandler(BaseHTTPRequestHandler):

    def do_GET(self):
        parsed_url = urllib.parse.urlparse(self.path)
        if parsed_url.path == '/announce':
            self.handle_announce(parsed_url.query)
        else:
            self.send_error(404, "File not found.")

    def handle_announce(self, query):
        try:
            announce = parse_announce_query(query, self.client_address)
        except AnnounceRequestError as e:
            logger.warning("Rejected announce from %s: %s", self.client_address[0], e)
            self.send_body(400, encode_failure(str(e)))
            return

        peers = self.server.registry.announce(
            announce.info_hash, announce.peer_id, announce.port, announce.ip, announce.event)
        self.send_body(200, encode_compact_peers(peers))

    def send_body(self, status, body):
        self.send_response(status)
        self.send_header('Content-Type', 'text/plain')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


class TrackerServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, server_address, handler_class=TrackerHandler, registry=None):
        super().__init__(server_address, handler_class)
        self.registry = registry if registry is not None else SwarmRegistry()


def run_tracker(config):
    httpd = TrackerServer((config.host, config.port))
    logger.info("Tracker server running at %s:%d...", config.host, httpd.server_address[1])
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Tracker server shutting down.")
    finally:
        httpd.server_close()


def main(argv=None):
    config = load_config(argv)
    configure_logging(config.log_level)
    run_tracker(config)


if __name__ == '__main__':
    main(sys.argv[1:])
