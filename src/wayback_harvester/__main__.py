import sys

from wayback_harvester.cli import main

sys.exit(main())
