import sys

from orangefish.app import main

sys.exit(main())
