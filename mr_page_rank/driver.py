"""Runs a fixed number of PageRank rounds, then the ranking job.

Each round is a separate :py:class:`~mr_page_rank.iteration.MRPageRankIter`
job whose output directory is the next round's input. Intermediate rounds
live in a private scratch directory that is removed when the run ends,
successfully or not.

All path housekeeping goes through the runner's own filesystem, so on
``hadoop`` (or a cloud runner) the scratch and output paths should be URIs
the cluster can see, e.g. ``hdfs:///tmp``.
"""
import logging
import tempfile

from mrjob.parse import is_uri

from mr_page_rank.iteration import MRPageRankIter
from mr_page_rank.ranking import MRPageRankViewer
from mr_page_rank.store import LineRecordStore

log = logging.getLogger(__name__)

# runners whose jobs read and write the local disk
LOCAL_RUNNERS = ('inline', 'local')


class PageRankDriver(object):
    """
    :param iterations: number of rounds to run; there is no convergence
                       check
    :param damping_factor: probability of following a link rather than
                           teleporting
    :param runner: mrjob runner alias (``'inline'``, ``'local'``,
                   ``'hadoop'``, ...)
    :param conf_path: path of an mrjob config file; ``None`` for mrjob's
                      usual lookup, ``False`` to use no config at all
    :param scratch_root: directory to create the scratch directory in.
                         Defaults to the system temp dir on local runners;
                         required (as a URI) on any other runner.
    :param store: :py:class:`~mr_page_rank.store.LineRecordStore` to do
                  housekeeping with; defaults to one built on the
                  runner's filesystem
    """
    ITERATIONS = 10

    def __init__(self, iterations=None, damping_factor=None, runner='inline',
                 conf_path=None, scratch_root=None, store=None):
        if iterations is None:
            iterations = self.ITERATIONS
        if damping_factor is None:
            damping_factor = MRPageRankIter.DAMPING_FACTOR

        if iterations < 0:
            raise ValueError('iterations must be >= 0, not %r' % iterations)
        if not 0.0 <= damping_factor <= 1.0:
            raise ValueError(
                'damping factor must be in [0, 1], not %r' % damping_factor)

        if runner in LOCAL_RUNNERS:
            if scratch_root is None:
                scratch_root = tempfile.gettempdir()
        elif scratch_root is None or not is_uri(scratch_root):
            raise ValueError(
                'the %r runner needs a scratch_root URI, not %r' %
                (runner, scratch_root))

        self.iterations = iterations
        self.damping_factor = damping_factor
        self.runner = runner
        self.conf_path = conf_path
        self.scratch_root = scratch_root
        self.store = store

    def run(self, input_path, output_path):
        """Rank the graph at *input_path*, writing the ranking to
        *output_path* (replacing anything already there)."""
        self.check_output_path(output_path)

        if self.store is not None:
            self._run(self.store, input_path, output_path)
            return

        # this runner never runs; it's only here for its filesystem
        job = MRPageRankIter(args=self._job_args())
        with job.make_runner() as runner:
            self._run(LineRecordStore(runner.fs), input_path, output_path)

    def check_output_path(self, output_path):
        """Raise :py:exc:`ValueError` if the jobs and the housekeeping
        would disagree about where *output_path* is."""
        if self.runner not in LOCAL_RUNNERS and not is_uri(output_path):
            raise ValueError(
                'the %r runner needs an output URI, not %r' %
                (self.runner, output_path))

    def _run(self, store, input_path, output_path):
        scratch_dir = store.make_scratch_dir(self.scratch_root)
        log.debug('Using scratch directory %s', scratch_dir)

        try:
            round_input = input_path
            for i in range(1, self.iterations + 1):
                round_output = store.join(scratch_dir, 'Data%d' % i)
                log.info('Running PageRank round %d of %d',
                         i, self.iterations)
                self._run_job(
                    MRPageRankIter, round_input, round_output,
                    ['--damping-factor', repr(self.damping_factor)])

                # each round's output is read exactly once
                if round_input != input_path:
                    store.delete(round_input)
                round_input = round_output

            store.prepare_output(output_path)
            log.info('Writing ranking to %s', output_path)
            self._run_job(MRPageRankViewer, round_input, output_path)
        finally:
            store.delete(scratch_dir)

    def _job_args(self):
        args = ['-r', self.runner]
        if self.conf_path is False:
            args.append('--no-conf')
        elif self.conf_path:
            args.extend(['--conf-path', self.conf_path])
        return args

    def _run_job(self, job_class, input_path, output_dir, extra_args=()):
        args = [input_path, '--output-dir', output_dir]
        args.extend(self._job_args())
        args.extend(extra_args)

        job = job_class(args=args)
        with job.make_runner() as runner:
            runner.run()
