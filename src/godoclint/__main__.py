import sys

from godoclint.cli import main

sys.exit(main())
