#!/usr/bin/env python3
"""Usage: ./build.py [config.yml] [--reference-year YEAR] [-v]"""
import sys

from blogpipe.build import main

if __name__ == "__main__":
    sys.exit(main())
