import os

import pytest


@pytest.fixture
def write_lines():
    """Write one line per item to a new file."""
    def _write_lines(path, lines):
        with open(path, 'w', encoding='utf_8') as f:
            for line in lines:
                f.write(line + '\n')

    return _write_lines


@pytest.fixture
def read_lines():
    """Read the lines of a file, or of every part file in a job's output
    directory, without their newlines."""
    def _read_lines(path):
        if os.path.isdir(path):
            paths = [os.path.join(path, name)
                     for name in sorted(os.listdir(path))]
        else:
            paths = [path]

        lines = []
        for p in paths:
            with open(p, encoding='utf_8') as f:
                lines.extend(line.rstrip('\n') for line in f)
        return lines

    return _read_lines
