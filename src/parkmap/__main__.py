import sys

from parkmap.cli import main

sys.exit(main())
