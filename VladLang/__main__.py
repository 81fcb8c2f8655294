import sys

from .Session import main

sys.exit(main())
