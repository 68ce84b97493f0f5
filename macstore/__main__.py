import sys

from macstore.cli import main

sys.exit(main())
