import logging

from mrjob.job import MRJob
from mrjob.protocol import RawProtocol
from mrjob.protocol import RawValueProtocol
from mrjob.step import MRStep

from mr_page_rank.codec import Contribution
from mr_page_rank.codec import MalformedRecordError
from mr_page_rank.codec import NODE
from mr_page_rank.codec import RANK
from mr_page_rank.codec import decode_contribution
from mr_page_rank.codec import encode_contribution
from mr_page_rank.codec import format_key
from mr_page_rank.codec import parse_adjacency
from mr_page_rank.codec import parse_key
from mr_page_rank.codec import parse_line

log = logging.getLogger(__name__)


class MRPageRankIter(MRJob):
    """
    One PageRank round: propagate each node's rank along its out-links,
    then aggregate the incoming contributions per node.

    Reads and writes round records (``id[,rank]<TAB>adjacency``), so the
    output of one round is the input of the next.
    """
    DAMPING_FACTOR = 0.85

    INPUT_PROTOCOL = RawValueProtocol
    OUTPUT_PROTOCOL = RawProtocol

    def configure_args(self):
        super(MRPageRankIter, self).configure_args()

        self.add_passthru_arg(
            '--damping-factor', dest='damping_factor',
            default=self.DAMPING_FACTOR, type=float,
            help='probability a web surfer will continue clicking on links')

    def mapper_propagate(self, _, line):
        """
        Mapper for a single PageRank round.
        Input: One round record, e.g. "A\tB,C" (first round)
               or "A,0.575\tB,C" (later rounds).
        Output:
            1. Yields (neighbor, ('RANK', "A;rank;outDeg")) for each out-link.
            2. Yields (node, ('NODE', adjacency)) so the adjacency survives
               into the next round even if nothing links to this node.
        """
        key, adjacency = parse_line(line)
        node, rank = parse_key(key)
        neighbors = parse_adjacency(adjacency)

        out_degree = len(neighbors)
        if out_degree:
            payload = encode_contribution(Contribution(node, rank, out_degree))
            for neighbor in neighbors:
                yield neighbor, (RANK, payload)
        else:
            # Dangling node: its rank is not redistributed.
            self.increment_counter('PageRank', 'dangling nodes')

        # The adjacency is forwarded verbatim, never re-joined.
        yield node, (NODE, adjacency)

    def reducer_aggregate(self, node, values):
        """
        Reducer for a single PageRank round.
        Input: key=node,
               values=iterator of ('RANK', "src;rank;outDeg") and
               ('NODE', adjacency) pairs, in no particular order
        Output: Yields ("node,new_rank", adjacency), the next round's input.
        """
        d = self.options.damping_factor
        rank = 1.0 - d
        adjacency = None
        adjacency_count = 0

        for value_type, payload in values:
            if value_type == RANK:
                contribution = decode_contribution(payload)
                rank += d * contribution.rank / contribution.out_degree
            elif value_type == NODE:
                adjacency = payload
                adjacency_count += 1
            else:
                raise MalformedRecordError('unknown value type', value_type)

        if adjacency_count > 1:
            # Last one wins; which one is last depends on the shuffle.
            log.warning('%d adjacency records for node %r',
                        adjacency_count, node)
            self.increment_counter('PageRank', 'duplicate adjacency records')

        if adjacency is None:
            # Pure sink: only ever seen as a link target.
            self.increment_counter('PageRank', 'nodes without adjacency')
            adjacency = ''

        yield format_key(node, rank), adjacency

    def steps(self):
        return [
            MRStep(mapper=self.mapper_propagate,
                   reducer=self.reducer_aggregate)
        ]


# This makes the script runnable from the command line
if __name__ == '__main__':
    MRPageRankIter.run()
