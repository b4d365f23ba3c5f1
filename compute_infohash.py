# compute_infohash.py

import hashlib
import sys

import bencodepy


def load_metainfo(torrent_path):
    with open(torrent_path, 'rb') as tf:
        return bencodepy.decode(tf.read())


def compute_info_hash(torrent_path):
    metainfo = load_metainfo(torrent_path)
    encoded_info = bencodepy.encode(metainfo[b'info'])
    return hashlib.sha1(encoded_info).digest()


def announce_url(torrent_path):
    announce = load_metainfo(torrent_path).get(b'announce')
    return announce.decode('utf-8') if announce else None


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        print("Usage: python compute_infohash.py <torrent_path>")
        return 1
    print(f"Info Hash: {compute_info_hash(argv[0]).hex()}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
