# announce_client.py

import argparse
import logging
import random
import string
import sys

import bencodepy
import requests

from compact_peers import decode_compact_peers
from compute_infohash import announce_url, compute_info_hash
from tracker_config import configure_logging

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """The tracker could not be reached or refused the announce."""


class AnnounceResponse:
    def __init__(self, interval, peers):
        self.interval = interval
        self.peers = peers  # List of (ip, port) tuples

    def __repr__(self):
        return f"AnnounceResponse(interval={self.interval}, peers={self.peers})"


def generate_peer_id():
    peer_id = '-STA0001-' + ''.join(random.choices(string.digits, k=11))
    assert len(peer_id) == 20, f"peer_id length is {len(peer_id)}, expected 20."
    return peer_id


class AnnounceClient:
    def __init__(self, tracker_url, listening_port, peer_id=None, timeout=10):
        tracker_url = tracker_url.rstrip('/')
        if not tracker_url.endswith('/announce'):
            tracker_url += '/announce'
        self.tracker_url = tracker_url
        self.listening_port = listening_port
        self.peer_id = peer_id if peer_id is not None else generate_peer_id()
        self.timeout = timeout

    def announce(self, info_hash, event='', uploaded=0, downloaded=0, left=0):
        params = {
            'info_hash': info_hash,
            'peer_id': self.peer_id,
            'port': self.listening_port,
            'uploaded': uploaded,
            'downloaded': downloaded,
            'left': left,
            'compact': 1,
        }
        if event:
            params['event'] = event

        try:
            response = requests.get(self.tracker_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TrackerError(f"Error announcing to tracker: {e}") from e

        try:
            data = bencodepy.decode(response.content)
        except bencodepy.DecodingError as e:
            raise TrackerError(f"Undecodable tracker response: {e}") from e
        if not isinstance(data, dict):
            raise TrackerError("Tracker response is not a dictionary.")

        if b'failure reason' in data:
            reason = data[b'failure reason'].decode('utf-8', 'replace')
            raise TrackerError(f"Tracker announce failed ({response.status_code}): {reason}")
        if response.status_code != 200:
            raise TrackerError(f"Tracker announce failed with status code {response.status_code}.")

        peers = decode_compact_peers(data.get(b'peers', b''))
        logger.info("Received %d peers from tracker.", len(peers))
        return AnnounceResponse(data.get(b'interval'), peers)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Announce a torrent to its tracker.')
    parser.add_argument('torrent', help='Path to the .torrent file')
    parser.add_argument('--tracker', help="Tracker URL (defaults to the torrent's announce URL)")
    parser.add_argument('--port', type=int, default=6881, help='Port this peer listens on')
    parser.add_argument('--event', default='started', choices=['started', 'completed', 'stopped', ''])
    parser.add_argument('--log-level', default='INFO', type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    tracker_url = args.tracker or announce_url(args.torrent)
    if not tracker_url:
        parser.error("the torrent has no announce URL; pass --tracker")

    client = AnnounceClient(tracker_url, args.port)
    try:
        result = client.announce(compute_info_hash(args.torrent), event=args.event)
    except TrackerError as e:
        logger.warning("%s", e)
        print(e, file=sys.stderr)
        return 1

    print(f"Re-announce interval: {result.interval}s")
    for ip, port in result.peers:
        print(f"{ip}:{port}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
