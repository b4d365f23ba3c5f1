import hashlib

import bencodepy

from compute_infohash import announce_url, compute_info_hash, load_metainfo
from create_torrent import create_torrent, hash_pieces, main


def test_single_file_torrent_round_trip(tmp_path):
    data = b'x' * 10 + b'y' * 6
    source = tmp_path / 'example.txt'
    source.write_bytes(data)
    output = tmp_path / 'example.torrent'

    create_torrent(str(source), 'http://localhost:8000/announce', str(output), piece_length=8)

    metainfo = load_metainfo(str(output))
    info = metainfo[b'info']
    assert info[b'name'] == b'example.txt'
    assert info[b'length'] == 16
    assert info[b'piece length'] == 8
    assert info[b'pieces'] == hashlib.sha1(data[:8]).digest() + hashlib.sha1(data[8:]).digest()
    assert announce_url(str(output)) == 'http://localhost:8000/announce'
    assert compute_info_hash(str(output)) == hashlib.sha1(bencodepy.encode(info)).digest()


def test_multi_file_torrent_lists_files_in_order(tmp_path):
    source = tmp_path / 'share'
    (source / 'sub').mkdir(parents=True)
    (source / 'b.txt').write_bytes(b'bbb')
    (source / 'a.txt').write_bytes(b'aa')
    (source / 'sub' / 'c.txt').write_bytes(b'c')
    output = tmp_path / 'share.torrent'

    create_torrent(str(source), 'http://t/announce', str(output), piece_length=4)

    info = load_metainfo(str(output))[b'info']
    assert info[b'name'] == b'share'
    assert b'length' not in info
    assert [(f[b'path'], f[b'length']) for f in info[b'files']] == [
        ([b'a.txt'], 2), ([b'b.txt'], 3), ([b'sub', b'c.txt'], 1)]
    # pieces span file boundaries: "aabb" + "bc"
    assert info[b'pieces'] == hashlib.sha1(b'aabb').digest() + hashlib.sha1(b'bc').digest()


def test_hash_pieces_empty_file(tmp_path):
    empty = tmp_path / 'empty'
    empty.write_bytes(b'')
    assert hash_pieces([str(empty)]) == b''


def test_main_writes_torrent(tmp_path, capsys):
    source = tmp_path / 'file.bin'
    source.write_bytes(b'\x00' * 100)
    output = tmp_path / 'file.torrent'

    assert main([str(source), 'http://localhost:8000/announce', str(output)]) == 0
    assert 'Torrent file created' in capsys.readouterr().out
    assert load_metainfo(str(output))[b'info'][b'length'] == 100
