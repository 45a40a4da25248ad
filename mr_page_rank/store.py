"""Housekeeping for the directories the PageRank jobs read and write."""
import logging
import posixpath
import uuid

log = logging.getLogger(__name__)


class LineRecordStore(object):
    """Job input/output paths, managed through an mrjob filesystem.

    *fs* is normally ``runner.fs`` of the runner the jobs run on, so paths
    are interpreted the way the jobs interpret them (local paths, ``hdfs://``,
    ``s3://``, ...).
    """

    def __init__(self, fs):
        self.fs = fs

    def exists(self, path):
        return self.fs.exists(path)

    def join(self, path, *paths):
        return self.fs.join(path, *paths)

    def make_scratch_dir(self, root):
        """Create and return a new, uniquely named directory under *root*."""
        path = self.join(root, 'mr_page_rank-%s' % uuid.uuid4().hex[:16])
        self.fs.mkdir(path)
        return path

    def prepare_output(self, path):
        """Make room for a fresh output at *path*: delete whatever is there
        and make sure the parent directory exists."""
        if self.exists(path):
            log.info('Removing existing output %s', path)
            self.delete(path)

        parent = posixpath.dirname(path.rstrip('/'))
        if parent and not self.exists(parent):
            self.fs.mkdir(parent)

    def delete(self, path):
        """Recursively delete *path*."""
        self.fs.rm(path)
