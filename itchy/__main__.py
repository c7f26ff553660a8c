import sys

from itchy.main import main

sys.exit(main())
