#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Entry point for ``python -m opcount``; see :mod:`opcount.main`."""

import sys

from opcount.main import main

if __name__ == "__main__":
    sys.exit(main())
