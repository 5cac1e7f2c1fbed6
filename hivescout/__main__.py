import sys

from hivescout.cli import main

sys.exit(main())
