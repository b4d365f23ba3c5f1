# swarm_registry.py

import logging
import threading
import time

from peer import Peer

logger = logging.getLogger(__name__)

PEER_EXPIRY_SECONDS = 180


class SwarmRegistry:
    """Active peers per torrent, keyed by info_hash.

    Every call runs as one critical section under a single lock, so a
    caller never sees a swarm half-way through another announce. Swarms
    are created on first announce and kept even once they are empty.
    Expiry only happens as part of a non-stopped announce to the same
    swarm; there is no background sweep.
    """

    def __init__(self, expiry=PEER_EXPIRY_SECONDS, clock=time.time):
        self.expiry = expiry
        self.clock = clock
        self._swarms = {}  # info_hash -> {peer_id: Peer}, insertion ordered
        self._lock = threading.Lock()

    def announce(self, info_hash, peer_id, port, remote_ip, event=''):
        """Apply one announce and return the swarm contents afterwards.

        A ``stopped`` event removes the peer and nothing else. Any other
        event expires stale peers, then refreshes ``last_seen`` of the
        announcing peer or adds it. A refresh keeps the recorded ip and
        port. The returned peers are copies, in insertion order.
        """
        with self._lock:
            now = self.clock()
            swarm = self._swarms.setdefault(info_hash, {})

            if event == 'stopped':
                if swarm.pop(peer_id, None) is not None:
                    logger.debug("Removed stopped peer %r from %r", peer_id, info_hash)
            else:
                self._expire(info_hash, swarm, now)
                peer = swarm.get(peer_id)
                if peer is not None:
                    peer.last_seen = now
                    logger.debug("Refreshed peer %r in %r", peer_id, info_hash)
                else:
                    swarm[peer_id] = Peer(remote_ip, port, peer_id, now)
                    logger.debug("Added peer %r at %s:%d to %r", peer_id, remote_ip, port, info_hash)

            return [peer.copy() for peer in swarm.values()]

    def _expire(self, info_hash, swarm, now):
        stale = [pid for pid, peer in swarm.items() if now - peer.last_seen > self.expiry]
        for pid in stale:
            del swarm[pid]
        if stale:
            logger.info("Expired %d inactive peer(s) from %r", len(stale), info_hash)

    def peers(self, info_hash):
        with self._lock:
            swarm = self._swarms.get(info_hash, {})
            return [peer.copy() for peer in swarm.values()]

    def torrent_count(self):
        with self._lock:
            return len(self._swarms)
