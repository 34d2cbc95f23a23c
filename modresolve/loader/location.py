"""
Location tracking needed for rich error reporting.
"""

from operator import attrgetter


class Fileinfo(object):
    """Provides data necessary for lines and column lookup."""

    def __init__(self, source, name=None):
        super(Fileinfo, self).__init__()
        self.source = source
        self.name = name

        self.line_table   = lines   = source.splitlines(True)
        self.offset_table = offsets = [0]

        offset = 0
        for line_len in map(len, lines):
            offset += line_len
            offsets.append(offset)

    def get_line(self, lineno):
        if not 1 <= lineno <= len(self.line_table):
            return None
        return self.line_table[lineno-1].rstrip('\r\n')

    def get_column(self, lineno, offset):
        line_start, line_end = self.offset_table[lineno-1:lineno+1]
        if not line_start <= offset < line_end:
            raise ValueError("position {offset} does not fall "
                             "within the line {lineno}".format(**locals()))
        return offset - line_start + 1


class Location(object):
    """Encapsulates info about symbol location provided by PLY."""

    __slots__ = 'fileinfo', 'lineno', 'offset'

    filename = property(attrgetter('fileinfo.name'))

    @property
    def line(self):
        return self.fileinfo.get_line(self.lineno)

    @property
    def column(self):
        if self.offset is None:
            return None
        return self.fileinfo.get_column(self.lineno, self.offset)

    def __init__(self, fileinfo, lineno, offset=None):
        super(Location, self).__init__()
        self.fileinfo = fileinfo
        self.lineno = lineno  # 1-base indexed
        self.offset = offset  # 0-based absolute char offset

    @classmethod
    def at_end(cls, fileinfo):
        return cls(fileinfo, max(len(fileinfo.line_table), 1))

    def to_syntax_error_tuple(self):
        """4-element tuple suitable to pass to a constructor of SyntaxError."""
        return (self.filename, self.lineno, self.column, self.line)

    def __iter__(self):
        return iter((self.filename, self.lineno))

    def __repr__(self):
        return '{0}:{1}'.format(self.filename or '<string>', self.lineno)
