"""Allow ``python -m json2toon``."""

import sys

from json2toon.cli import main

sys.exit(main())
