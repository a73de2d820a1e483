#!/usr/bin/env python

import pylab


def plot_tokens(tokens, bar_color='b', space_color='r', alpha=0.3):
    colors = {1: bar_color, 0: space_color}
    for t in tokens:
        pylab.axvspan(t.start, t.end, color=colors[t.state], alpha=alpha)


def plot_row(row, vs=None, alpha=0.3):
    """Show the bars of a BitRow, over the linescan it came from if given"""
    if vs is not None:
        pylab.plot(vs, color='k')
    plot_tokens([t for t in row.to_tokens() if t.state], alpha=alpha)
    pylab.xlim(0, row.size)


def plot_result(r, color='g'):
    """Mark the ends of a decoded symbol and label it with its text"""
    (lx, _), (rx, _) = r.left, r.right
    pylab.axvline(lx, color=color)
    pylab.axvline(rx, color=color)
    pylab.title('%s [%s]' % (r.text, r.kind))
