import sys

from .launchbar import main

sys.exit(main())
