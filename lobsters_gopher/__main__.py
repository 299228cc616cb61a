import sys

from lobsters_gopher.cli import main

sys.exit(main())
