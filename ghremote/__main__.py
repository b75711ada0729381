import sys

from ghremote.cli import main

sys.exit(main())
