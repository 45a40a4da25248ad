from mrjob.job import MRJob
from mrjob.protocol import RawValueProtocol
from mrjob.step import MRStep

from mr_page_rank.codec import parse_key
from mr_page_rank.codec import parse_line


def sort_by_rank(pairs):
    """Sort ``(node, rank)`` pairs by rank, highest first.

    The sort is stable, so equal ranks keep their input order.
    """
    return sorted(pairs, key=lambda pair: pair[1], reverse=True)


def format_ranking(node, rank):
    return '(%s,%.10f)' % (node, rank)


class MRPageRankViewer(MRJob):
    """
    Turns the last round's records into the final ranking: one
    "(node,rank)" line per node, rank descending, 10 decimal places.
    """
    INPUT_PROTOCOL = RawValueProtocol
    OUTPUT_PROTOCOL = RawValueProtocol

    def mapper_parse_rank(self, _, line):
        """
        Mapper: pulls (node, rank) out of the record key.
        Input: One round record, e.g. "A,0.575\tB,C" (adjacency is ignored).
        Output: Yields (None, (node, rank)) so a single reducer call sees
                every node and can order them globally.
        """
        key, _adjacency = parse_line(line)
        node, rank = parse_key(key)
        yield None, (node, rank)

    def reducer_sort_ranks(self, _, node_ranks):
        """
        Reducer: sorts all nodes by rank and formats them.
        Output: Yields (None, "(node,rank)") lines.
        """
        for node, rank in sort_by_rank(node_ranks):
            yield None, format_ranking(node, rank)

    def steps(self):
        return [
            MRStep(mapper=self.mapper_parse_rank,
                   reducer=self.reducer_sort_ranks)
        ]


if __name__ == '__main__':
    MRPageRankViewer.run()
