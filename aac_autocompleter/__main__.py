import sys

from aac_autocompleter.cli.cli import main

sys.exit(main())
