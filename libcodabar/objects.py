#!/usr/bin/env python
"""
BitRow:
    binarized scanline, True = bar
    next set pixel
    uniform ranges
    runs as tokens

Result:
    14 digit text
    left/right points on the scanned row
    library fields (patron/item, institution, identifier)
"""

import numpy
import scipy.ndimage


BAR = 1
SPACE = 0

state_strings = ['space', 'bar']

CODABAR = 'CODABAR'


def binarize(vs, ral=None, dark=True):
    """Threshold a linescan against its mean or a running average

    ral = running average length
    dark = bars are darker than the background
    """
    vs = numpy.asarray(vs, dtype='f8')
    if ral is None:
        t = vs.mean()
    else:
        t = scipy.ndimage.convolve1d(
            vs, numpy.ones(ral, dtype='f8') / ral, mode='reflect')
    if dark:
        return vs < t
    return vs > t


class BitRow(object):
    def __init__(self, bits):
        self.bits = numpy.asarray(bits, dtype='bool')
        if self.bits.ndim != 1:
            raise ValueError("BitRow must be 1 dimensional: %s" % (
                self.bits.shape, ))

    @classmethod
    def from_linescan(cls, vs, ral=None, dark=True):
        return cls(binarize(vs, ral=ral, dark=dark))

    @classmethod
    def from_string(cls, s, bar='1'):
        """Build a row from a string like '0011101'"""
        return cls([c == bar for c in s])

    def __repr__(self):
        return "BitRow(%s)" % (self.size, )

    def __len__(self):
        return self.bits.size

    def __getitem__(self, index):
        return bool(self.bits[index])

    @property
    def size(self):
        return self.bits.size

    def get(self, index):
        return bool(self.bits[index])

    def next_set(self, index):
        """Index of the first bar at or after index, size if there is none"""
        index = max(index, 0)
        if index >= self.bits.size:
            return self.bits.size
        inds = numpy.flatnonzero(self.bits[index:])
        if inds.size == 0:
            return self.bits.size
        return index + int(inds[0])

    def is_range(self, start, end, value):
        """True if every pixel in [start, end) equals value"""
        if end < start:
            raise ValueError("end < start: %s < %s" % (end, start))
        if end == start:
            return True
        return bool(numpy.all(self.bits[start:end] == bool(value)))

    def to_tokens(self):
        """Runs of bars and spaces"""
        if self.bits.size == 0:
            return []
        dbvs = numpy.diff(self.bits.astype('int'))
        einds = numpy.where(dbvs != 0)[0] + 1
        starts = [0] + list(einds)
        ends = list(einds) + [self.bits.size]
        return [
            Token(int(self.bits[s]), int(s), int(e))
            for (s, e) in zip(starts, ends)]


class Token(object):
    def __init__(self, state, start, end):
        self.state = state  # 1 = bar, 0 = space
        self.start = start
        self.end = end
        self.width = self.end - self.start

    def __repr__(self):
        return "Token(%s, %s[%s, %s])" % (
            state_strings[self.state], self.width, self.start, self.end)


class Result(object):
    def __init__(self, text, points, format=CODABAR):
        self.text = text
        self.points = points
        self.format = format

    def __repr__(self):
        return "Result(%s, %s)" % (self.text, self.center)

    @property
    def value(self):
        return int(self.text)

    @property
    def left(self):
        return self.points[0]

    @property
    def right(self):
        return self.points[1]

    @property
    def width(self):
        return self.right[0] - self.left[0]

    @property
    def center(self):
        return (
            (self.left[0] + self.right[0]) / 2.,
            (self.left[1] + self.right[1]) / 2.)

    @property
    def kind(self):
        """'patron' or 'item' from the first digit, None otherwise"""
        return {'2': 'patron', '3': 'item'}.get(self.text[:1], None)

    @property
    def institution(self):
        return self.text[1:5]

    @property
    def identifier(self):
        return self.text[5:-1]

    @property
    def check_digit(self):
        return int(self.text[-1])
