# create_torrent.py

import argparse
import hashlib
import os
import sys

import bencodepy

PIECE_LENGTH = 524288  # 512 KiB


def _list_files(directory_path):
    paths = []
    for root, dirs, filenames in os.walk(directory_path):
        dirs.sort()
        for filename in sorted(filenames):
            paths.append(os.path.join(root, filename))
    return paths


def hash_pieces(file_paths, piece_length=PIECE_LENGTH):
    """SHA-1 of every piece across the files, read back to back.

    The last piece may be shorter than ``piece_length``.
    """
    hashes = []
    buffer = b''
    for file_path in file_paths:
        with open(file_path, 'rb') as f:
            while True:
                chunk = f.read(piece_length - len(buffer))
                if not chunk:
                    break
                buffer += chunk
                if len(buffer) == piece_length:
                    hashes.append(hashlib.sha1(buffer).digest())
                    buffer = b''
    if buffer:
        hashes.append(hashlib.sha1(buffer).digest())
    return b''.join(hashes)


def create_torrent(path, tracker_url, torrent_path, piece_length=PIECE_LENGTH):
    name = os.path.basename(os.path.normpath(path))
    info = {
        b'name': name.encode('utf-8'),
        b'piece length': piece_length,
    }

    # Single and multi-file torrents
    if os.path.isdir(path):
        file_paths = _list_files(path)
        info[b'files'] = [
            {
                b'length': os.path.getsize(file_path),
                b'path': [component.encode('utf-8')
                          for component in os.path.relpath(file_path, path).split(os.sep)],
            }
            for file_path in file_paths
        ]
    else:
        file_paths = [path]
        info[b'length'] = os.path.getsize(path)

    info[b'pieces'] = hash_pieces(file_paths, piece_length)

    torrent = {
        b'announce': tracker_url.encode('utf-8'),
        b'info': info,
    }

    with open(torrent_path, 'wb') as tf:
        tf.write(bencodepy.encode(torrent))
    return torrent


def main(argv=None):
    parser = argparse.ArgumentParser(description='Create a .torrent file.')
    parser.add_argument('path', help='Directory or file to create torrent from')
    parser.add_argument('tracker', help='Tracker URL (e.g., http://localhost:8000/announce)')
    parser.add_argument('output', help='Output torrent file path')
    parser.add_argument('--piece-length', type=int, default=PIECE_LENGTH)
    args = parser.parse_args(argv)

    if not os.path.exists(args.path):
        parser.error(f"{args.path} does not exist")
    if args.piece_length <= 0:
        parser.error("--piece-length must be positive")

    create_torrent(args.path, args.tracker, args.output, args.piece_length)
    print(f"Torrent file created at {args.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
