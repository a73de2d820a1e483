#!/usr/bin/env python
"""
Decode a library card barcode from an image

usage: decode_image.py image [y] [band]
"""

import logging
import sys
import time

import numpy as np
import pylab
from PIL import Image

import libcodabar.linescan
import libcodabar.vis


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    fn = sys.argv[1]
    im = np.array(Image.open(fn).convert('L')).astype('f8')
    y = int(sys.argv[2]) if len(sys.argv) > 2 else im.shape[0] // 2
    band = int(sys.argv[3]) if len(sys.argv) > 3 else 5
    vs = im[max(0, y - band):y + band + 1].mean(axis=0)
    t0 = time.time()
    r = libcodabar.linescan.decode_linescan(vs, row_number=y)
    t1 = time.time()
    if libcodabar.linescan.is_valid(r):
        print("Barcode is: %s (%s, institution %s)" % (
            r.text, r.kind, r.institution))
    else:
        print("No barcode: %s" % libcodabar.linescan.error_string(r))
    print("Time: %s" % (t1 - t0))
    row = libcodabar.BitRow.from_linescan(vs)
    libcodabar.vis.plot_row(row, vs)
    if libcodabar.linescan.is_valid(r):
        libcodabar.vis.plot_result(r)
    pylab.show()
