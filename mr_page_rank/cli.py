"""Command-line entry point: ``mr-page-rank INPUT OUTPUT``."""
import logging
import sys
from argparse import ArgumentParser

from mrjob.job import MRJob
from mrjob.util import log_to_null
from mrjob.util import log_to_stream

from mr_page_rank.driver import PageRankDriver
from mr_page_rank.iteration import MRPageRankIter


def _make_arg_parser():
    parser = ArgumentParser(
        prog='mr-page-rank',
        description='Rank the nodes of a web graph with iterative'
                    ' MapReduce PageRank.')

    parser.add_argument(
        'input_path',
        help='graph file or directory; one "node<TAB>neighbor,neighbor"'
             ' line per node')
    parser.add_argument(
        'output_path',
        help='where to write the ranking (replaced if it exists)')

    parser.add_argument(
        '--iterations', dest='iterations', type=int,
        default=PageRankDriver.ITERATIONS,
        help='number of rounds to run (default: %(default)s)')
    parser.add_argument(
        '--damping-factor', dest='damping_factor', type=float,
        default=MRPageRankIter.DAMPING_FACTOR,
        help='probability a web surfer will continue clicking on links'
             ' (default: %(default)s)')
    parser.add_argument(
        '-r', '--runner', dest='runner', default='inline',
        help='mrjob runner to run each job on (default: %(default)s)')
    parser.add_argument(
        '--scratch-root', dest='scratch_root', default=None,
        help='where to keep intermediate rounds (default: the system temp'
             ' dir; runners other than inline and local need a URI such'
             ' as hdfs:///tmp)')
    parser.add_argument(
        '-c', '--conf-path', dest='conf_path', default=None,
        help='path to an mrjob config file')
    parser.add_argument(
        '--no-conf', dest='conf_path', action='store_false', default=None,
        help="don't load any mrjob config file")
    parser.add_argument(
        '-q', '--quiet', dest='quiet', action='store_true',
        help="don't print anything to stderr")
    parser.add_argument(
        '-v', '--verbose', dest='verbose', action='store_true',
        help='print more messages to stderr')

    return parser


def _set_up_logging(quiet=False, verbose=False):
    # log_to_stream() and log_to_null() add a handler on every call
    for name in ('mrjob', '__main__', 'mr_page_rank'):
        logging.getLogger(name).handlers = []

    # mrjob only sets up its own loggers
    MRJob.set_up_logging(quiet=quiet, verbose=verbose)
    if quiet:
        log_to_null(name='mr_page_rank')
    else:
        log_to_stream(name='mr_page_rank', debug=verbose)


def main(args=None):
    parser = _make_arg_parser()
    options = parser.parse_args(args)

    _set_up_logging(quiet=options.quiet, verbose=options.verbose)

    try:
        driver = PageRankDriver(
            iterations=options.iterations,
            damping_factor=options.damping_factor,
            runner=options.runner,
            conf_path=options.conf_path,
            scratch_root=options.scratch_root)
        driver.check_output_path(options.output_path)
    except ValueError as e:
        parser.error(str(e))

    driver.run(options.input_path, options.output_path)


if __name__ == '__main__':
    main(sys.argv[1:])
