# compact_peers.py

import ipaddress
import struct

import bencodepy

ANNOUNCE_INTERVAL = 120
COMPACT_ENTRY_SIZE = 6  # 4-byte IPv4 address + 2-byte port


def encode_compact_peers(peers):
    """Bencode ``peers`` as a compact announce response.

    Output is ``d8:intervali120e5:peers<N>:<blob>e``. Peers without an
    IPv4 address are left out of the blob.
    """
    blob = b''.join(
        peer.ip.packed + struct.pack('>H', peer.port)
        for peer in peers
        if peer.ip.version == 4
    )
    response = {
        b'interval': ANNOUNCE_INTERVAL,
        b'peers': blob,
    }
    return bencodepy.encode(response)


def decode_compact_peers(blob):
    peers = []
    for offset in range(0, len(blob) - COMPACT_ENTRY_SIZE + 1, COMPACT_ENTRY_SIZE):
        packed_ip, port = struct.unpack('>4sH', blob[offset:offset + COMPACT_ENTRY_SIZE])
        peers.append((str(ipaddress.IPv4Address(packed_ip)), port))
    return peers


def encode_failure(reason):
    return bencodepy.encode({b'failure reason': reason.encode('utf-8')})
