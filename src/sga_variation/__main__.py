import sys

from sga_variation.cli import main

sys.exit(main())
