import os

from mrjob.fs.local import LocalFilesystem

from mr_page_rank.store import LineRecordStore


class StubFilesystem(object):
    """Stands in for a remote filesystem; records every call."""

    def __init__(self, existing=()):
        self.existing = set(existing)
        self.calls = []

    def exists(self, path):
        self.calls.append(('exists', path))
        return path in self.existing

    def join(self, path, *paths):
        return '/'.join((path.rstrip('/'),) + paths)

    def mkdir(self, path):
        self.calls.append(('mkdir', path))
        self.existing.add(path)

    def rm(self, path):
        self.calls.append(('rm', path))
        self.existing.discard(path)


def test_prepare_output_on_remote_filesystem():
    fs = StubFilesystem(existing=['hdfs:///user/me/ranking'])
    store = LineRecordStore(fs)

    store.prepare_output('hdfs:///user/me/ranking')

    assert fs.calls == [
        ('exists', 'hdfs:///user/me/ranking'),
        ('rm', 'hdfs:///user/me/ranking'),
        ('exists', 'hdfs:///user/me'),
        ('mkdir', 'hdfs:///user/me'),
    ]


def test_make_scratch_dir_on_remote_filesystem():
    fs = StubFilesystem()
    store = LineRecordStore(fs)

    path = store.make_scratch_dir('hdfs:///tmp')
    other_path = store.make_scratch_dir('hdfs:///tmp')

    assert path.startswith('hdfs:///tmp/mr_page_rank-')
    assert path != other_path
    assert fs.calls == [('mkdir', path), ('mkdir', other_path)]


def test_prepare_output_and_delete(tmp_path):
    store = LineRecordStore(LocalFilesystem())
    out_dir = tmp_path / 'out'
    out_dir.mkdir()
    (out_dir / 'part-00000').write_text('stale\n')

    store.prepare_output(str(out_dir))
    assert not os.path.exists(str(out_dir))
    assert os.path.isdir(str(tmp_path))

    out_dir.mkdir()
    store.delete(str(out_dir))
    assert not store.exists(str(out_dir))


def test_prepare_output_creates_parent(tmp_path):
    store = LineRecordStore(LocalFilesystem())

    store.prepare_output(str(tmp_path / 'a' / 'b' / 'ranking'))

    assert os.path.isdir(str(tmp_path / 'a' / 'b'))
    assert not os.path.exists(str(tmp_path / 'a' / 'b' / 'ranking'))


def test_local_scratch_dir(tmp_path):
    store = LineRecordStore(LocalFilesystem())

    path = store.make_scratch_dir(str(tmp_path))

    assert os.path.isdir(path)
    assert os.path.dirname(path) == str(tmp_path)
