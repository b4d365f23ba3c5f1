# peer.py

import ipaddress


class Peer:
    def __init__(self, ip, port, peer_id, last_seen):
        self.ip = ipaddress.ip_address(ip)
        self.port = port
        self.peer_id = peer_id  # Unique key within one torrent's swarm
        self.last_seen = last_seen

    @property
    def address(self):
        return str(self.ip), self.port

    def copy(self):
        return Peer(self.ip, self.port, self.peer_id, self.last_seen)

    def __eq__(self, other):
        if not isinstance(other, Peer):
            return NotImplemented
        return (self.ip, self.port, self.peer_id, self.last_seen) == \
            (other.ip, other.port, other.peer_id, other.last_seen)

    def __repr__(self):
        return f"Peer(ip={str(self.ip)!r}, port={self.port}, peer_id={self.peer_id!r}, last_seen={self.last_seen})"
