import sys

from modresolve.cli import main

sys.exit(main())
