import sys

from tcfinder.cli import main

sys.exit(main())
