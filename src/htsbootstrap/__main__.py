import sys

from htsbootstrap.cli import main

sys.exit(main())
