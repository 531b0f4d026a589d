import sys

from gdriveupdate.cli import main

sys.exit(main())
