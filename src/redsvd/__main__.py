import sys

from redsvd.cli import main

sys.exit(main())
