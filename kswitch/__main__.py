import sys

from kswitch.cli import main

sys.exit(main())
