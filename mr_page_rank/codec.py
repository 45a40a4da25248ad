"""Line-oriented record format shared by every PageRank stage.

A round record is one line of text::

    <node id>[,<rank>]\t<neighbor>,<neighbor>,...

The key holds the node id, optionally followed by its current rank; the
value holds the comma-joined out-adjacency (empty for a node with no
out-links).

Values travelling through the shuffle between the propagation mapper and
the aggregation reducer are tagged pairs, so the reducer never has to guess
what a payload is from its shape:

    ('RANK', 'a;0.85;3')   a contribution from node a
    ('NODE', 'b,c,d')      the receiving node's own adjacency
"""
from collections import namedtuple

RANK = 'RANK'
NODE = 'NODE'

DEFAULT_RANK = 1.0

Contribution = namedtuple('Contribution', ['source', 'rank', 'out_degree'])


class MalformedRecordError(ValueError):
    """Raised when a line or shuffle payload can't be decoded."""

    def __init__(self, message, record):
        super(MalformedRecordError, self).__init__(
            '%s: %r' % (message, record))
        self.record = record


def parse_line(line):
    """Split a ``key<TAB>value`` line into ``(key, value)``.

    Only the first tab separates; the value may be empty.
    """
    line = line.rstrip('\r\n')
    key, sep, value = line.partition('\t')
    if not sep:
        raise MalformedRecordError('missing tab separator', line)
    return key, value


def format_line(key, value):
    return '%s\t%s' % (key, value)


def parse_key(key):
    """Split a record key into ``(node_id, rank)``.

    Keys from the initial graph have no rank yet, so they get
    :data:`DEFAULT_RANK`.
    """
    node_id, sep, rank = key.partition(',')
    if not sep:
        return node_id, DEFAULT_RANK

    try:
        return node_id, float(rank)
    except ValueError:
        raise MalformedRecordError('bad rank in key', key)


def format_key(node_id, rank):
    # repr() keeps full float precision between rounds
    return '%s,%r' % (node_id, rank)


def parse_adjacency(value):
    if not value:
        return []
    return value.split(',')


def format_adjacency(neighbors):
    return ','.join(neighbors)


def encode_contribution(contribution):
    return '%s;%r;%d' % contribution


def decode_contribution(payload):
    # the source id may itself contain ';', the two numbers never do
    fields = payload.rsplit(';', 2)
    if len(fields) != 3:
        raise MalformedRecordError('contribution needs 3 fields', payload)

    source, rank, out_degree = fields
    try:
        contribution = Contribution(source, float(rank), int(out_degree))
    except ValueError:
        raise MalformedRecordError('bad number in contribution', payload)

    if contribution.out_degree < 1:
        raise MalformedRecordError('out-degree must be positive', payload)

    return contribution
