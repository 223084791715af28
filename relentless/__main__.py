import sys

from relentless.main import main

sys.exit(main())
