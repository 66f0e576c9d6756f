#!/usr/bin/env python3
'''
 $ pngme.py image.png encode -t ruSt 'hello world'
 $ pngme.py image.png decode -t ruSt
'''
import sys

from pngme.cli import main


if __name__ == '__main__':
    sys.exit(main())
