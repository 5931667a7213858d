#!/usr/bin/env python3
"""Auth Log Geo - Entry point"""

import sys

from authlog.cli import main


if __name__ == "__main__":
    sys.exit(main())
